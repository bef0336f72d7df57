import json

from artilens.core.preview import clip_content, hex_dump, parse_artifact


def test_hex_dump_layout() -> None:
    dump = hex_dump(b"ABC\x00" * 5)
    lines = dump.splitlines()
    assert lines[0] == "Hex dump of binary file:"
    assert lines[2].startswith("00000000  41 42 43 00")
    assert lines[2].endswith("|ABC.ABC.ABC.ABC.|")
    assert lines[3].startswith("00000010  41 42 43 00")


def test_hex_dump_notes_remaining_bytes() -> None:
    dump = hex_dump(bytes(40), max_lines=2)
    assert dump.endswith("... (8 more bytes)")


def test_json_is_pretty_printed() -> None:
    parsed = parse_artifact(b'{"a": 1, "b": [1, 2]}', "events.json", "application/json")
    assert parsed.content == json.dumps({"a": 1, "b": [1, 2]}, indent=2)
    assert parsed.mime_type == "application/json"
    assert parsed.size == 21


def test_invalid_json_falls_back_to_text() -> None:
    assert parse_artifact(b"{broken", "events.json").content == "{broken"


def test_log_files_decoded_as_text() -> None:
    parsed = parse_artifact(b"line one\nline two\xff", "system.LOG")
    assert parsed.content.startswith("line one\nline two")
    assert parsed.mime_type == "application/octet-stream"


def test_evtx_header_summary() -> None:
    parsed = parse_artifact(b"ElfFile\x00" + bytes(100), "Security.evtx")
    assert parsed.content.startswith("Windows Event Log File (.evtx)")
    assert "Header: ElfFile" in parsed.content
    assert "Hex dump of binary file:" in parsed.content


def test_unknown_extension_guesses_text_or_binary() -> None:
    assert parse_artifact(b"mostly readable text\n", "notes.dat").content == "mostly readable text\n"
    assert parse_artifact(bytes(range(256)), "blob.bin").content.startswith("Hex dump of binary file:")
    assert parse_artifact(b"", "empty.bin").content.startswith("Hex dump of binary file:")


def test_clip_content() -> None:
    assert clip_content("short", max_length=10) == "short"
    clipped = clip_content("a" * 10 + "b" * 10, max_length=10)
    assert clipped.startswith("aaaaa\n\n... [Content truncated - 10 characters omitted]")
    assert clipped.endswith("bbbbb")
