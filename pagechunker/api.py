"""Public entry points: chunk a PDF into dictionaries, and a command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from os import PathLike

from .errors import ProcessingError
from .pdf_processor import PdfProcessor


def process_pdf(pdf_path: str | PathLike) -> list[dict[str, object]]:
    """Chunk the PDF at ``pdf_path``.

    Each chunk is a dictionary with ``page``, ``chunk_id``, ``text`` and
    ``source``. Failures are raised as ``RuntimeError``.
    """
    try:
        processor = PdfProcessor()
    except ProcessingError as exc:
        raise RuntimeError(f"Processor initialization failed: {exc}") from exc
    try:
        chunks = processor.process_pdf(pdf_path)
    except ProcessingError as exc:
        raise RuntimeError(f"PDF processing failed: {exc}") from exc
    return [chunk.as_dict() for chunk in chunks]


def main(argv: Sequence[str] | None = None) -> int:
    """Print the chunks of a PDF as JSON; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="pagechunker",
        description="Split the text of a PDF into overlapping word chunks.",
    )
    parser.add_argument("pdf_path", help="path of the PDF file to chunk")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log progress to stderr"
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        chunks = process_pdf(args.pdf_path)
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(json.dumps(chunks, indent=2, ensure_ascii=False))
    return 0