import hashlib
import os

import pytest

from artilens.core.classifier import classify, entropy_level, find_suspicious_indicators
from artilens.core.errors import ClassificationError
from artilens.core.models import FileType


def test_empty_buffer() -> None:
    result = classify(b"")
    assert result.size == 0
    assert result.entropy == 0
    assert result.file_type is FileType.UNKNOWN
    assert result.mime_type == "application/octet-stream"
    assert result.hash == hashlib.sha256(b"").hexdigest()
    assert result.suspicious_indicators == ()
    assert result.summary == "File type: unknown, Size: 0.00MB, Entropy: low (0.00), Indicators: 0"


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"\x11\x00\x00\x00SCCA", FileType.PREFETCH),
        (b"\x17\x00\x00\x00SCCA", FileType.PREFETCH),
        (b"\x1a\x00\x00\x00SCCA", FileType.PREFETCH),
        (b"ElfFile\x00" + b"\x00" * 64, FileType.EVTX),
        (b"regf" + b"\x00" * 64, FileType.REGISTRY),
        (b"MDMP\x93\xa7", FileType.MEMORY),
        (b"\x00" * 100 + b"PAGEDU64", FileType.MEMORY),
        (b"\xd4\xc3\xb2\xa1\x02\x00\x04\x00", FileType.NETWORK),
        (b"\xa1\xb2\xc3\xd4\x00\x02\x00\x04", FileType.NETWORK),
        (b"plain text log line", FileType.UNKNOWN),
    ],
)
def test_file_type_detection(data: bytes, expected: FileType) -> None:
    assert classify(data).file_type is expected


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"\x11\x00\x00\x00" + b"PAGE", FileType.PREFETCH),
        (b"regf" + b"MDMP", FileType.REGISTRY),
        (b"\xd4\xc3\xb2\xa1" + b"PAGE", FileType.MEMORY),
        (b"ElfF" + b"MDMP", FileType.EVTX),
    ],
)
def test_first_matching_signature_wins(data: bytes, expected: FileType) -> None:
    assert classify(data).file_type is expected


def test_memory_marker_outside_header_window_is_ignored() -> None:
    assert classify(b"\x00" * 600 + b"PAGE").file_type is FileType.UNKNOWN
    assert classify(b"\x00" * 508 + b"PAGE").file_type is FileType.MEMORY


def test_mime_types() -> None:
    assert classify(b"ElfFile\x00").mime_type == "application/x-ms-evtx"
    assert classify(b"regf").mime_type == "application/x-ms-registry"
    assert classify(b"MDMP").mime_type == "application/x-memory-dump"
    assert classify(b"\xd4\xc3\xb2\xa1").mime_type == "application/vnd.tcpdump.pcap"
    assert classify(b"\x11\x00\x00\x00").mime_type == "application/octet-stream"


def test_entropy_bounds() -> None:
    assert classify(b"\x41" * 4096).entropy == 0
    assert classify(bytes(range(256)) * 8).entropy == pytest.approx(8.0)
    assert classify(b"\x00\x01" * 10).entropy == pytest.approx(1.0)


@pytest.mark.parametrize("size", [1, 7, 511, 512, 513, 10001, 65536])
def test_size_and_entropy_range(size: int) -> None:
    data = os.urandom(size)
    result = classify(data)
    assert result.size == size
    assert 0.0 <= result.entropy <= 8.0


def test_classification_is_pure() -> None:
    data = b"MDMP" + os.urandom(2048) + b"powershell https://example"
    assert classify(data) == classify(data)


def test_accepts_bytearray_and_memoryview() -> None:
    data = b"regf payload admin"
    assert classify(bytearray(data)) == classify(data)
    assert classify(memoryview(data)) == classify(data)


def test_rejects_non_bytes() -> None:
    with pytest.raises(ClassificationError):
        classify("regf")  # type: ignore[arg-type]


def test_indicator_families_fire_once_each() -> None:
    data = b"cmd.exe /c powershell -enc ...; curl http://a https://b; net user administrator admin"
    assert find_suspicious_indicators(data) == (
        "Command execution indicators",
        "Network activity indicators",
        "Privilege escalation indicators",
    )


def test_indicators_tolerate_undecodable_bytes() -> None:
    data = b"\xff\xfe\x80 cmd.exe \xc3\x28"
    assert classify(data).suspicious_indicators == ("Command execution indicators",)


def test_indicator_scan_limited_to_first_10000_bytes() -> None:
    assert classify(b"A" * 10000 + b"cmd.exe").suspicious_indicators == ()
    assert classify(b"A" * 9993 + b"cmd.exe").suspicious_indicators == ("Command execution indicators",)


@pytest.mark.parametrize(
    "entropy,level",
    [(0.0, "low"), (4.99, "low"), (5.0, "medium"), (7.5, "medium"), (7.51, "high"), (8.0, "high")],
)
def test_entropy_level(entropy: float, level: str) -> None:
    assert entropy_level(entropy) == level


def test_summary_line() -> None:
    result = classify(b"\x00" * (3 * 512 * 1024))
    assert result.summary == "File type: unknown, Size: 1.50MB, Entropy: low (0.00), Indicators: 0"
    assert len(result.hash) == 64
    assert len(result.blake3) == 64
