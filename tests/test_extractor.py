"""Tests for reading uploaded files."""
import pytest

from intake.models.document import FileType
from intake.parser.extractor import DocumentReadError, detect_file_type, read_text, read_file


@pytest.mark.parametrize("file_name,expected", [
    ("notes.md", FileType.MARKDOWN),
    ("NOTES.TXT", FileType.TEXT),
    ("report.pdf", FileType.PDF),
    ("memo.doc", FileType.DOC),
    ("memo.docx", FileType.DOCX),
    ("README", FileType.TEXT),
    ("archive.zip", FileType.TEXT),
])
def test_detect_file_type(file_name, expected):
    assert detect_file_type(file_name) == expected


def test_read_text_decodes_utf8():
    assert read_text("a.md", "café".encode("utf-8")) == "café"


def test_read_text_strips_bom():
    assert read_text("a.txt", b"\xef\xbb\xbfhello") == "hello"


def test_read_text_passes_strings_through():
    assert read_text("a.txt", "already text") == "already text"


def test_read_text_invalid_bytes_raise():
    with pytest.raises(DocumentReadError):
        read_text("bad.txt", b"\xff\xfe\xfa")


def test_binary_formats_are_not_extracted():
    assert read_text("deck.pdf", b"%PDF-1.4 binary") == ""
    assert read_text("memo.docx", b"PK\x03\x04") == ""


def test_read_file(tmp_path):
    path = tmp_path / "note.md"
    path.write_bytes(b"# Title\nbody\n")

    assert read_file(path) == b"# Title\nbody\n"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(DocumentReadError):
        read_file(tmp_path / "missing.md")
