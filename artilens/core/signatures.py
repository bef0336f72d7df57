from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from artilens.core.models import FileType

HEADER_WINDOW = 512


@dataclass(frozen=True)
class Signature:
    name: str
    file_type: FileType
    predicate: Callable[[bytes], bool]


def _prefix(*magics: bytes) -> Callable[[bytes], bool]:
    return lambda header: any(header.startswith(magic) for magic in magics)


def _anywhere(*markers: bytes) -> Callable[[bytes], bool]:
    return lambda header: any(marker in header for marker in markers)


# Order is the tie-break: the first matching entry decides the file type.
SIGNATURES: List[Signature] = [
    Signature(
        name="prefetch_version",
        file_type=FileType.PREFETCH,
        predicate=_prefix(b"\x11\x00\x00\x00", b"\x17\x00\x00\x00", b"\x1a\x00\x00\x00"),
    ),
    Signature(name="evtx_magic", file_type=FileType.EVTX, predicate=_prefix(b"ElfF")),
    Signature(name="registry_magic", file_type=FileType.REGISTRY, predicate=_prefix(b"regf")),
    Signature(name="memory_dump_marker", file_type=FileType.MEMORY, predicate=_anywhere(b"PAGE", b"MDMP")),
    Signature(
        name="pcap_magic",
        file_type=FileType.NETWORK,
        predicate=_prefix(b"\xd4\xc3\xb2\xa1", b"\xa1\xb2\xc3\xd4"),
    ),
]

MIME_TYPES: Dict[FileType, str] = {
    FileType.PREFETCH: "application/octet-stream",
    FileType.EVTX: "application/x-ms-evtx",
    FileType.REGISTRY: "application/x-ms-registry",
    FileType.MEMORY: "application/x-memory-dump",
    FileType.NETWORK: "application/vnd.tcpdump.pcap",
    FileType.UNKNOWN: "application/octet-stream",
}


def detect_file_type(data: bytes, signatures: Sequence[Signature] = SIGNATURES) -> FileType:
    header = bytes(data[:HEADER_WINDOW])
    for signature in signatures:
        if signature.predicate(header):
            return signature.file_type
    return FileType.UNKNOWN


def mime_type_for(file_type: FileType) -> str:
    return MIME_TYPES.get(file_type, "application/octet-stream")
