"""Sliding-window chunking of page text into overlapping word windows."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from itertools import count

from .errors import ChunkingError

logger = logging.getLogger(__name__)

_MAX_CHUNK_ID = 1000


@dataclass(frozen=True)
class ChunkMetadata:
    """One chunk of a page's text, with its position and origin."""

    page: int
    chunk_id: int
    text: str
    source: str

    def as_dict(self) -> dict[str, object]:
        """Return the chunk as a plain dictionary."""
        return asdict(self)


class TextChunker:
    """Splits a page's words into windows of ``chunk_size`` words overlapping by ``overlap_size``."""

    def __init__(self, chunk_size: int = 300, overlap_size: int = 60) -> None:
        self.chunk_size = chunk_size
        self.overlap_size = overlap_size
        self.step_size = max(chunk_size - overlap_size, 0)
        logger.debug(
            "Initialized chunker: chunk_size=%d, overlap=%d, step_size=%d",
            chunk_size,
            overlap_size,
            self.step_size,
        )

    def chunk_page_text(
        self, page_num: int, text: str, words: Sequence[str], source: str
    ) -> list[ChunkMetadata]:
        """Chunk one page.

        A page with at most ``chunk_size`` words yields a single chunk holding
        ``text`` unchanged; longer pages yield windows of words joined by spaces.
        """
        word_count = len(words)
        logger.debug("Chunking page %d: %d words", page_num, word_count)

        if word_count <= self.chunk_size:
            return [ChunkMetadata(page_num, 0, text, source)]

        chunks: list[ChunkMetadata] = []
        start = 0
        for chunk_id in count():
            end = min(start + self.chunk_size, word_count)
            chunks.append(
                ChunkMetadata(page_num, chunk_id, " ".join(words[start:end]), source)
            )
            logger.debug(
                "Page %d chunk %d: words %d-%d", page_num, chunk_id, start, end - 1
            )
            if end >= word_count:
                break
            start += self.step_size
            if chunk_id + 1 > _MAX_CHUNK_ID:
                raise ChunkingError(f"Too many chunks generated for page {page_num}")

        logger.debug("Page %d chunking complete: %d chunks", page_num, len(chunks))
        return chunks