# pagechunker

Turn a PDF into a list of text chunks ready for indexing or embedding.

Each page's text is read, runs of whitespace are collapsed to single spaces,
and the page is split into words (runs of word characters, so punctuation is
not part of any word). A page of 300 words or fewer becomes one chunk holding
the page's cleaned text unchanged. A longer page is cut into windows of 300
words that overlap by 60 words: each window starts 240 words after the
previous one, its text is its words joined by single spaces, and the last
window holds whatever words remain. Pages with no text are skipped.

Every chunk carries:

- `page`: the 1-based page number
- `chunk_id`: the 0-based position of the chunk within its page
- `text`: the chunk's text
- `source`: the file name of the PDF

Chunks come back ordered by page and then by `chunk_id`.

## Installation

```
pip install .
```

No third-party libraries are needed at run time. The tests use pytest
(`pip install .[test]`).

## Use from Python

```python
from pagechunker.api import process_pdf

for chunk in process_pdf("report.pdf"):
    print(chunk["page"], chunk["chunk_id"], len(chunk["text"].split()))
```

`process_pdf` returns a list of dictionaries with the keys above. If the file
cannot be loaded or processed it raises `RuntimeError`, whose message says
what failed and which is chained to the underlying `ProcessingError`.

The pieces can also be used one at a time:

```python
from pagechunker.text_extractor import TextExtractor
from pagechunker.chunking import TextChunker

extractor = TextExtractor()
chunker = TextChunker(300, 60)

text = extractor.clean_text(raw_page_text)
words = extractor.extract_words(text)
chunks = chunker.chunk_page_text(1, text, words, "notes.pdf")
print([c.as_dict() for c in chunks])
```

- `TextExtractor` offers `clean_text`, `extract_page_text`, `count_words` and
  `extract_words`.
- `TextChunker(chunk_size, overlap_size)` produces frozen `ChunkMetadata`
  records; `as_dict()` turns one into a plain dictionary. A page that would
  need more than 1001 chunks raises `ChunkingError`.
- `pagechunker.pdf_reader.PdfDocument` reads a PDF with `from_file(path)` or
  `from_bytes(data)` and gives `page_count()`, `page_text(index)` (zero-based;
  an index out of range raises `IndexError`) and `iter_page_texts()`, which
  yields `(index, text)` pairs and logs and skips pages whose text cannot be
  extracted.
- `pagechunker.parallel_processor.ParallelProcessor(logical_cores)` chunks
  `(page_index, text)` pairs with `process_pages`, in batches of
  `max(2 * logical_cores, 8)` pages on a pool of `logical_cores` threads. A
  page whose chunking fails is logged and left out. Fewer than one core
  raises `ParallelError`.
- `pagechunker.pdf_processor.PdfProcessor(logical_cores=None)` runs the whole
  pipeline with 300-word chunks and a 60-word overlap; when no core count is
  given it uses the machine's CPU count. `process_pdf(path)` returns
  `ChunkMetadata` records.

## Command line

```
pagechunker report.pdf
```

This prints the chunks of `report.pdf` as a JSON array. `-v`/`--verbose` logs
progress to standard error. On failure the error is printed to standard error
and the exit status is 1.

## Errors

The pipeline's own errors are subclasses of
`pagechunker.errors.ProcessingError`: `PdfLoadError`, `TextExtractionError`,
`ChunkingError`, `ParallelError` and `SystemProcessingError`.
`pagechunker.api.process_pdf` wraps them in `RuntimeError`.

## Limits

The built-in PDF reader is deliberately small. It does not handle encrypted
documents, and it does not apply font encodings or ToUnicode maps: strings are
read as UTF-16 when they start with a byte-order mark and as Latin-1
otherwise, so text set in fonts with custom encodings may come out garbled.
Content streams may use the Flate, ASCIIHex and ASCII85 filters; a page using
any other filter is skipped.