"""End-to-end pipeline: load a PDF, extract page text and chunk it."""

from __future__ import annotations

import logging
import os
from os import PathLike
from pathlib import Path

from .chunking import ChunkMetadata, TextChunker
from .parallel_processor import ParallelProcessor
from .pdf_reader import PdfDocument
from .text_extractor import TextExtractor

logger = logging.getLogger(__name__)

CHUNK_SIZE = 300
OVERLAP_SIZE = 60
_UNKNOWN_SOURCE = "unknown.pdf"


class PdfProcessor:
    """Turns a PDF file into overlapping word chunks, page by page."""

    def __init__(self, logical_cores: int | None = None) -> None:
        logger.info("Initializing PDF processor...")
        if logical_cores is None:
            logical_cores = os.cpu_count() or 1
        logger.info("Using %d logical cores", logical_cores)
        self.parallel_processor = ParallelProcessor(logical_cores)
        self.text_extractor = TextExtractor()
        self.text_chunker = TextChunker(CHUNK_SIZE, OVERLAP_SIZE)

    def process_pdf(self, pdf_path: str | PathLike) -> list[ChunkMetadata]:
        """Chunk every page of the PDF at ``pdf_path``.

        Chunks are ordered by page and chunk id and name the file they came
        from. Raises ``PdfLoadError`` when the file cannot be read as a PDF.
        """
        source = Path(pdf_path).name or _UNKNOWN_SOURCE
        logger.info("Processing PDF: %s", pdf_path)

        document = PdfDocument.from_file(pdf_path)
        page_count = document.page_count()
        logger.info("PDF loaded successfully. Pages: %d", page_count)
        if page_count == 0:
            logger.warning("PDF contains no pages")
            return []

        page_texts = (
            (index, self.text_extractor.extract_page_text(raw, index))
            for index, raw in document.iter_page_texts()
        )
        chunks = self.parallel_processor.process_pages(
            page_texts, source, self.text_extractor, self.text_chunker
        )
        logger.info("Processing complete. Generated %d total chunks", len(chunks))
        return chunks