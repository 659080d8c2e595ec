"""Exception hierarchy for the PDF chunking pipeline."""

from __future__ import annotations


class ProcessingError(Exception):
    """Base class for every error raised by the pipeline."""


class _DetailedError(ProcessingError):
    """An error whose message is a fixed label followed by a detail string."""

    label = "Processing failed"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.label}: {detail}")


class PdfLoadError(_DetailedError):
    """The PDF document could not be opened or parsed."""

    label = "PDF loading failed"


class TextExtractionError(ProcessingError):
    """Text could not be extracted from a particular page."""

    def __init__(self, page: int, error: str) -> None:
        self.page = page
        self.error = error
        super().__init__(f"Text extraction failed on page {page}: {error}")


class ChunkingError(_DetailedError):
    """Chunking a page's text failed."""

    label = "Chunking failed"


class ParallelError(_DetailedError):
    """The parallel worker setup or execution failed."""

    label = "Parallel processing error"


class SystemProcessingError(_DetailedError):
    """A system-level resource needed by the pipeline was unavailable."""

    label = "System error"