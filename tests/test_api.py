import json

import pytest

from pagechunker.api import main, process_pdf


def make_pdf(pages):
    count = len(pages)
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(count))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode(),
    ]
    for i, text in enumerate(pages):
        content = f"BT /F1 12 Tf ({text}) Tj ET".encode()
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /Contents {4 + 2 * i} 0 R >>".encode()
        )
        objects.append(
            f"<< /Length {len(content)} >>\nstream\n".encode()
            + content
            + b"\nendstream"
        )
    body = b"%PDF-1.4\n"
    for number, obj in enumerate(objects, start=1):
        body += f"{number} 0 obj\n".encode() + obj + b"\nendobj\n"
    return body + b"trailer\n<< /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture
def sample_pdf(tmp_path):
    path = tmp_path / "sample.pdf"
    path.write_bytes(make_pdf(["first page text", "second page text"]))
    return path


def test_process_pdf_returns_dictionaries(sample_pdf):
    chunks = process_pdf(sample_pdf)
    assert chunks == [
        {"page": 1, "chunk_id": 0, "text": "first page text", "source": "sample.pdf"},
        {"page": 2, "chunk_id": 0, "text": "second page text", "source": "sample.pdf"},
    ]


def test_process_pdf_missing_file_raises_runtime_error(tmp_path):
    with pytest.raises(RuntimeError, match="^PDF processing failed: PDF loading failed"):
        process_pdf(tmp_path / "absent.pdf")


def test_main_prints_json(sample_pdf, capsys):
    status = main([str(sample_pdf)])
    printed = json.loads(capsys.readouterr().out)
    assert status == 0
    assert printed == process_pdf(sample_pdf)


def test_main_reports_failure(tmp_path, capsys):
    status = main([str(tmp_path / "absent.pdf")])
    captured = capsys.readouterr()
    assert status == 1
    assert captured.out == ""
    assert "PDF processing failed" in captured.err


def test_main_verbose_still_prints_chunks(sample_pdf, capsys):
    status = main(["--verbose", str(sample_pdf)])
    printed = json.loads(capsys.readouterr().out)
    assert status == 0
    assert [chunk["page"] for chunk in printed] == [1, 2]