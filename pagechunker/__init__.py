"""Split PDF page text into overlapping word-window chunks with page metadata."""

__version__ = "0.1.0"