import pytest

from pagechunker.errors import (
    ChunkingError,
    ParallelError,
    PdfLoadError,
    ProcessingError,
    SystemProcessingError,
    TextExtractionError,
)


def _caught_as_base(exc):
    try:
        raise exc
    except ProcessingError as caught:
        return caught
    return None


@pytest.mark.parametrize(
    ("cls", "label"),
    [
        (PdfLoadError, "PDF loading failed"),
        (ChunkingError, "Chunking failed"),
        (ParallelError, "Parallel processing error"),
        (SystemProcessingError, "System error"),
    ],
)
def test_detail_errors_format_message(cls, label):
    err = cls("something broke")
    assert str(err) == f"{label}: something broke"
    assert err.detail == "something broke"


@pytest.mark.parametrize(
    ("cls", "label"),
    [
        (PdfLoadError, "PDF loading failed"),
        (ChunkingError, "Chunking failed"),
        (ParallelError, "Parallel processing error"),
        (SystemProcessingError, "System error"),
    ],
)
def test_detail_errors_are_processing_errors(cls, label):
    caught = _caught_as_base(cls("boom"))
    assert isinstance(caught, ProcessingError)
    assert caught.detail == "boom"
    assert str(caught) == f"{label}: boom"


def test_text_extraction_error_message_and_fields():
    err = TextExtractionError(7, "pdfium extraction failed: bad stream")
    assert str(err) == "Text extraction failed on page 7: pdfium extraction failed: bad stream"
    assert err.page == 7
    assert err.error == "pdfium extraction failed: bad stream"


def test_text_extraction_error_caught_as_base():
    caught = _caught_as_base(TextExtractionError(2, "oops"))
    assert isinstance(caught, ProcessingError)
    assert caught.page == 2
    assert caught.error == "oops"
    assert str(caught) == "Text extraction failed on page 2: oops"