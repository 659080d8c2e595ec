"""Whitespace normalisation and word tokenisation of page text."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\b\w+\b")
_WHITESPACE_RE = re.compile(r"\s+")


class TextExtractor:
    """Cleans raw page text and splits it into words."""

    def clean_text(self, text: str) -> str:
        """Collapse runs of whitespace into single spaces and trim the ends."""
        return _WHITESPACE_RE.sub(" ", text).strip()

    def extract_page_text(self, raw_text: str, page_index: int) -> str:
        """Return the cleaned text of one page; empty input gives an empty string."""
        logger.debug("Extracting text from page %d", page_index)
        if not raw_text:
            logger.debug("Page %d contains no text", page_index)
            return ""
        cleaned = self.clean_text(raw_text)
        logger.debug("Extracted %d characters from page %d", len(cleaned), page_index)
        return cleaned

    def count_words(self, text: str) -> int:
        """Number of word-character runs in ``text``."""
        if not text.strip():
            return 0
        return sum(1 for _ in _WORD_RE.finditer(text))

    def extract_words(self, text: str) -> list[str]:
        """The word-character runs of ``text``, in order."""
        if not text.strip():
            return []
        return _WORD_RE.findall(text)