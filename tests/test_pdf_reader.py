import zlib

import pytest

from pagechunker.errors import PdfLoadError, TextExtractionError
from pagechunker.pdf_reader import PdfDocument


def make_pdf(contents, compress=False, filter_name=None):
    objects = []
    page_count = len(contents)
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))
    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    for i, content in enumerate(contents):
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /Contents {4 + 2 * i} 0 R >>".encode()
        )
        body = content.encode("latin-1")
        extra = b""
        if compress:
            body = zlib.compress(body)
            extra = b" /Filter /FlateDecode"
        elif filter_name:
            extra = f" /Filter /{filter_name}".encode()
        objects.append(
            b"<< /Length %d%s >>\nstream\n" % (len(body), extra) + body + b"\nendstream"
        )
    out = b"%PDF-1.4\n"
    for num, obj in enumerate(objects, start=1):
        out += b"%d 0 obj\n" % num + obj + b"\nendobj\n"
    out += b"trailer\n<< /Root 1 0 R /Size %d >>\n%%%%EOF\n" % (len(objects) + 1)
    return out


def test_page_count_and_text():
    doc = PdfDocument.from_bytes(make_pdf(["BT (Hello World) Tj ET", "BT (Second) Tj ET"]))
    assert doc.page_count() == 2
    assert doc.page_text(0) == "Hello World"
    assert doc.page_text(1) == "Second"


def test_compressed_content():
    doc = PdfDocument.from_bytes(make_pdf(["BT (Packed text) Tj ET"], compress=True))
    assert doc.page_text(0) == "Packed text"


def test_tj_array_gap_adds_space():
    doc = PdfDocument.from_bytes(make_pdf(["BT [(Hel) 10 (lo) -500 (there)] TJ ET"]))
    assert doc.page_text(0) == "Hello there"


def test_line_operators_break_lines():
    doc = PdfDocument.from_bytes(make_pdf(["BT (one) Tj T* (two) Tj 0 -12 Td (three) Tj ET"]))
    assert doc.page_text(0).split("\n") == ["one", "two", "three"]


def test_string_escapes_and_hex():
    doc = PdfDocument.from_bytes(make_pdf([r"BT (a\(b\)) Tj <48656C6C6F> Tj ET"]))
    text = doc.page_text(0)
    assert "a(b)" in text
    assert "Hello" in text


def test_iter_page_texts_in_order():
    doc = PdfDocument.from_bytes(make_pdf(["BT (p0) Tj ET", "", "BT (p2) Tj ET"]))
    assert list(doc.iter_page_texts()) == [(0, "p0"), (1, ""), (2, "p2")]


def test_unsupported_filter_raises_and_is_skipped():
    doc = PdfDocument.from_bytes(make_pdf(["BT (x) Tj ET"], filter_name="JBIG2Decode"))
    with pytest.raises(TextExtractionError) as info:
        doc.page_text(0)
    assert info.value.page == 0
    assert list(doc.iter_page_texts()) == []


def test_index_out_of_range():
    doc = PdfDocument.from_bytes(make_pdf(["BT (x) Tj ET"]))
    with pytest.raises(IndexError):
        doc.page_text(1)


def test_not_a_pdf():
    with pytest.raises(PdfLoadError):
        PdfDocument.from_bytes(b"just some text")


def test_missing_catalog():
    with pytest.raises(PdfLoadError):
        PdfDocument.from_bytes(b"%PDF-1.4\n1 0 obj\n<< /Foo 1 >>\nendobj\n")


def test_from_file_roundtrip(tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(make_pdf(["BT (From disk) Tj ET"]))
    doc = PdfDocument.from_file(path)
    assert doc.page_text(0) == "From disk"


def test_from_missing_file(tmp_path):
    with pytest.raises(PdfLoadError):
        PdfDocument.from_file(tmp_path / "absent.pdf")