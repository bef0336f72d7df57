from __future__ import annotations

import json
from pathlib import PurePath
from typing import List, Optional

from artilens.core.models import ParsedArtifact

BYTES_PER_LINE = 16
PRINTABLE_SAMPLE = 1000
PRINTABLE_RATIO = 0.8
TEXT_EXTENSIONS = {".xml", ".csv", ".log", ".txt"}


def _is_printable(byte: int) -> bool:
    return 32 <= byte <= 126 or byte in (9, 10, 13)


def hex_dump(data: bytes, max_lines: int = 100) -> str:
    lines: List[str] = ["Hex dump of binary file:", ""]
    limit = min(len(data), max_lines * BYTES_PER_LINE)
    for offset in range(0, limit, BYTES_PER_LINE):
        row = data[offset : offset + BYTES_PER_LINE]
        hex_part = " ".join(f"{b:02x}" for b in row)
        ascii_part = "".join(chr(b) if 32 <= b <= 126 else "." for b in row)
        lines.append(f"{offset:08x}  {hex_part:<48}  |{ascii_part}|")
    if len(data) > max_lines * BYTES_PER_LINE:
        lines.append("")
        lines.append(f"... ({len(data) - max_lines * BYTES_PER_LINE} more bytes)")
    return "\n".join(lines)


def _json_text(data: bytes) -> str:
    text = data.decode("utf-8", errors="replace")
    try:
        return json.dumps(json.loads(text), indent=2)
    except ValueError:
        return text


def _evtx_text(data: bytes) -> str:
    header = data[:8].decode("latin-1")
    if not header.startswith("ElfFile"):
        return hex_dump(data)
    return (
        "Windows Event Log File (.evtx)\n"
        f"Size: {len(data)} bytes\n"
        f"Header: {header.rstrip(chr(0))}\n\n"
        "Binary event log; use a dedicated EVTX parser for full record decoding.\n\n"
        f"First 1KB of hex dump:\n{hex_dump(data[:1024])}"
    )


def _guess_text(data: bytes) -> str:
    sample = data[:PRINTABLE_SAMPLE]
    if sample and sum(1 for b in sample if _is_printable(b)) / len(sample) > PRINTABLE_RATIO:
        return data.decode("utf-8", errors="replace")
    return hex_dump(data)


def parse_artifact(data: bytes, filename: str, mime_type: Optional[str] = None) -> ParsedArtifact:
    """Render an artifact as text suitable for an analysis prompt."""
    data = bytes(data)
    extension = PurePath(filename).suffix.lower()
    if extension == ".json":
        content = _json_text(data)
    elif extension in TEXT_EXTENSIONS:
        content = data.decode("utf-8", errors="replace")
    elif extension == ".evtx":
        content = _evtx_text(data)
    else:
        content = _guess_text(data)
    return ParsedArtifact(
        filename=filename,
        content=content,
        size=len(data),
        mime_type=mime_type or "application/octet-stream",
    )


def clip_content(content: str, max_length: int = 50000) -> str:
    """Keep the head and tail of oversized content around an omission marker."""
    if len(content) <= max_length:
        return content
    half = max_length // 2
    omitted = len(content) - max_length
    return f"{content[:half]}\n\n... [Content truncated - {omitted} characters omitted] ...\n\n{content[len(content) - half:]}"
