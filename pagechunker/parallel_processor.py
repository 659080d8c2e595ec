"""Batched, parallel chunking of pages whose text has already been extracted."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from .chunking import ChunkMetadata, TextChunker
from .errors import ParallelError, ProcessingError
from .text_extractor import TextExtractor

logger = logging.getLogger(__name__)

_MIN_BATCH_SIZE = 8


class ParallelProcessor:
    """Chunks pages in batches spread over a pool of worker threads."""

    def __init__(self, logical_cores: int) -> None:
        if logical_cores < 1:
            raise ParallelError(
                f"Thread pool setup failed: invalid number of threads {logical_cores}"
            )
        self.batch_size = max(logical_cores * 2, _MIN_BATCH_SIZE)
        self.max_parallelism = logical_cores
        logger.info(
            "Parallel processor initialized: batch_size=%d, max_parallelism=%d",
            self.batch_size,
            self.max_parallelism,
        )

    def process_pages(
        self,
        page_texts: Iterable[tuple[int, str]],
        source: str,
        text_extractor: TextExtractor,
        text_chunker: TextChunker,
    ) -> list[ChunkMetadata]:
        """Chunk ``(page_index, text)`` pairs and return chunks ordered by page and chunk id.

        Page indices are zero-based; the chunks carry one-based page numbers.
        Pages with blank text are skipped, and a page whose chunking fails is
        logged and left out.
        """
        pages = [(index, text) for index, text in page_texts if text.strip()]
        logger.info("Processing %d pages with content", len(pages))
        batches = [
            pages[start : start + self.batch_size]
            for start in range(0, len(pages), self.batch_size)
        ]

        def run(batch: Sequence[tuple[int, str]]) -> list[ChunkMetadata]:
            return self._process_batch(batch, source, text_extractor, text_chunker)

        with ThreadPoolExecutor(max_workers=self.max_parallelism) as pool:
            results = list(pool.map(run, batches))

        chunks = [chunk for batch in results for chunk in batch]
        chunks.sort(key=lambda chunk: (chunk.page, chunk.chunk_id))
        logger.info("Parallel processing complete: %d total chunks", len(chunks))
        return chunks

    @staticmethod
    def _process_batch(
        batch: Sequence[tuple[int, str]],
        source: str,
        text_extractor: TextExtractor,
        text_chunker: TextChunker,
    ) -> list[ChunkMetadata]:
        chunks: list[ChunkMetadata] = []
        for page_index, text in batch:
            words = text_extractor.extract_words(text)
            try:
                chunks.extend(
                    text_chunker.chunk_page_text(page_index + 1, text, words, source)
                )
            except ProcessingError as exc:
                logger.error("Failed to process page %d text: %s", page_index, exc)
        return chunks