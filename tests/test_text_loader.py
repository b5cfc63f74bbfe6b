"""
Unit-tests for app.services.text_loader – in-memory payloads only.
"""
import io

import pytest

from app.errors import ValidationError
from app.services.text_loader import extension_of, load_text


def test_txt():
    assert load_text("notes.TXT", "héllo FROM".encode("utf-8")) == "héllo FROM"


def test_csv_cells_joined():
    payload = b"name,query\nalice,select\nbob,\n"
    assert load_text("rows.csv", payload) == "alice select bob "


def test_unsupported_extension():
    with pytest.raises(ValidationError):
        load_text("image.png", b"\x89PNG")


def test_undecodable_text():
    with pytest.raises(ValidationError):
        load_text("bad.txt", b"\xff\xfe\xfa")


@pytest.mark.parametrize(
    "name, ext",
    [("a.PDF", ".pdf"), ("archive.tar.csv", ".csv"), ("noext", ""), ("", "")],
)
def test_extension_of(name, ext):
    assert extension_of(name) == ext


def test_docx_paragraphs():
    from docx import Document

    doc = Document()
    doc.add_paragraph("user password")
    doc.add_paragraph("   ")
    doc.add_paragraph("select all")
    buf = io.BytesIO()
    doc.save(buf)

    assert load_text("memo.docx", buf.getvalue()) == "user password\nselect all"


@pytest.mark.parametrize("name", ["broken.docx", "broken.pdf"])
def test_corrupt_document_rejected(name):
    with pytest.raises(ValidationError):
        load_text(name, b"not a real document")
