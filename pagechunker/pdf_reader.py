"""A small PDF reader: object parsing, page tree walking and text extraction."""

from __future__ import annotations

import base64
import binascii
import logging
import re
import zlib
from collections.abc import Iterator
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from .errors import PdfLoadError, TextExtractionError

logger = logging.getLogger(__name__)

_WS = b"\x00\t\n\x0c\r "
_DELIM = b"()<>[]{}/%"
_NUMBER_RE = re.compile(rb"[+-]?(\d+\.?\d*|\.\d+)\Z")
_OBJ_RE = re.compile(rb"(\d+)\s+(\d+)\s+obj\b")
_TRAILER_RE = re.compile(rb"trailer\s*<<")
_HEADER_WINDOW = 1024
_TJ_SPACE_THRESHOLD = -200


class _Name(str):
    """A PDF name object."""


class _Op(str):
    """A bare keyword (operator) in a PDF or content stream."""


@dataclass(frozen=True)
class _Ref:
    num: int
    gen: int


@dataclass
class _Stream:
    attrs: dict
    raw: bytes


class _SyntaxError(Exception):
    pass


class _UnsupportedFilter(Exception):
    pass


class _Parser:
    def __init__(self, data: bytes, pos: int = 0) -> None:
        self.data = data
        self.pos = pos

    def at_end(self) -> bool:
        self.skip_ws()
        return self.pos >= len(self.data)

    def skip_ws(self) -> None:
        data = self.data
        while self.pos < len(data):
            c = data[self.pos]
            if c in _WS:
                self.pos += 1
            elif c == ord("%"):
                while self.pos < len(data) and data[self.pos] not in b"\r\n":
                    self.pos += 1
            else:
                break

    def _regular(self) -> bytes:
        start = self.pos
        data = self.data
        while self.pos < len(data) and data[self.pos] not in _WS + _DELIM:
            self.pos += 1
        return data[start : self.pos]

    def parse(self):
        self.skip_ws()
        data = self.data
        if self.pos >= len(data):
            raise _SyntaxError("unexpected end of data")
        c = data[self.pos]
        if c == ord("/"):
            self.pos += 1
            return _Name(self._decode_name(self._regular()))
        if c == ord("("):
            return self._literal()
        if data.startswith(b"<<", self.pos):
            return self._dict()
        if c == ord("<"):
            return self._hex()
        if c == ord("["):
            return self._array()
        if c in b")>]{}":
            self.pos += 1
            return _Op(chr(c))
        token = self._regular()
        if _NUMBER_RE.match(token):
            if b"." in token:
                return float(token)
            return self._maybe_ref(int(token))
        if token == b"true":
            return True
        if token == b"false":
            return False
        if token == b"null":
            return None
        return _Op(token.decode("latin-1"))

    def _maybe_ref(self, num: int):
        saved = self.pos
        self.skip_ws()
        gen = self._regular()
        if gen.isdigit():
            self.skip_ws()
            if self._regular() == b"R":
                return _Ref(num, int(gen))
        self.pos = saved
        return num

    @staticmethod
    def _decode_name(raw: bytes) -> str:
        out = re.sub(rb"#([0-9A-Fa-f]{2})", lambda m: bytes([int(m[1], 16)]), raw)
        return out.decode("latin-1")

    def _literal(self) -> bytes:
        data = self.data
        self.pos += 1
        depth = 1
        out = bytearray()
        escapes = {ord("n"): 10, ord("r"): 13, ord("t"): 9, ord("b"): 8, ord("f"): 12}
        while self.pos < len(data):
            c = data[self.pos]
            self.pos += 1
            if c == ord("\\"):
                if self.pos >= len(data):
                    break
                e = data[self.pos]
                self.pos += 1
                if e in escapes:
                    out.append(escapes[e])
                elif e in b"01234567":
                    digits = bytes([e])
                    while len(digits) < 3 and self.pos < len(data) and data[self.pos] in b"01234567":
                        digits += data[self.pos : self.pos + 1]
                        self.pos += 1
                    out.append(int(digits, 8) & 0xFF)
                elif e == ord("\r"):
                    if data.startswith(b"\n", self.pos):
                        self.pos += 1
                elif e == ord("\n"):
                    pass
                else:
                    out.append(e)
            elif c == ord("("):
                depth += 1
                out.append(c)
            elif c == ord(")"):
                depth -= 1
                if depth == 0:
                    return bytes(out)
                out.append(c)
            else:
                out.append(c)
        raise _SyntaxError("unterminated string")

    def _hex(self) -> bytes:
        end = self.data.find(b">", self.pos)
        if end < 0:
            raise _SyntaxError("unterminated hex string")
        digits = re.sub(rb"[^0-9A-Fa-f]", b"", self.data[self.pos + 1 : end])
        self.pos = end + 1
        if len(digits) % 2:
            digits += b"0"
        return binascii.unhexlify(digits)

    def _array(self) -> list:
        self.pos += 1
        items = []
        while True:
            self.skip_ws()
            if self.pos >= len(self.data):
                raise _SyntaxError("unterminated array")
            if self.data[self.pos] == ord("]"):
                self.pos += 1
                return items
            items.append(self.parse())

    def _dict(self) -> dict:
        self.pos += 2
        result = {}
        while True:
            self.skip_ws()
            if self.pos >= len(self.data):
                raise _SyntaxError("unterminated dictionary")
            if self.data.startswith(b">>", self.pos):
                self.pos += 2
                return result
            key = self.parse()
            if not isinstance(key, _Name):
                raise _SyntaxError("dictionary key is not a name")
            result[str(key)] = self.parse()

    def parse_indirect(self):
        """Parse an object body, attaching stream data when present."""
        value = self.parse()
        self.skip_ws()
        if isinstance(value, dict) and self.data.startswith(b"stream", self.pos):
            start = self.pos + 6
            if self.data.startswith(b"\r\n", start):
                start += 2
            elif self.data[start : start + 1] in (b"\n", b"\r"):
                start += 1
            length = value.get("Length")
            end = -1
            if isinstance(length, int) and length >= 0:
                tail = self.data[start + length : start + length + 32].lstrip(_WS)
                if tail.startswith(b"endstream"):
                    end = start + length
            if end < 0:
                found = self.data.find(b"endstream", start)
                if found < 0:
                    raise _SyntaxError("unterminated stream")
                end = found
                while end > start and self.data[end - 1] in b"\r\n":
                    end -= 1
            after = self.data.find(b"endstream", end)
            self.pos = after + 9 if after >= 0 else end
            return _Stream(value, self.data[start:end])
        return value


def _decode_stream(stream: _Stream) -> bytes:
    filters = stream.attrs.get("Filter")
    if filters is None:
        return stream.raw
    if not isinstance(filters, list):
        filters = [filters]
    data = stream.raw
    for name in filters:
        if name in ("FlateDecode", "Fl"):
            try:
                data = zlib.decompress(data)
            except zlib.error:
                data = zlib.decompressobj().decompress(data)
        elif name in ("ASCIIHexDecode", "AHx"):
            digits = re.sub(rb"[^0-9A-Fa-f]", b"", data.split(b">")[0])
            if len(digits) % 2:
                digits += b"0"
            data = binascii.unhexlify(digits)
        elif name in ("ASCII85Decode", "A85"):
            body = re.sub(rb"\s", b"", data)
            if body.startswith(b"<~"):
                body = body[2:]
            body = body.split(b"~>")[0]
            data = base64.a85decode(body)
        else:
            raise _UnsupportedFilter(f"unsupported stream filter {name}")
    return data


def _string_text(raw: bytes) -> str:
    if raw.startswith(b"\xfe\xff"):
        return raw[2:].decode("utf-16-be", errors="replace")
    return raw.decode("latin-1")


def _content_text(content: bytes) -> str:
    parser = _Parser(content)
    pieces: list[str] = []
    operands: list = []

    def newline() -> None:
        if pieces and not pieces[-1].endswith("\n"):
            pieces.append("\n")

    while True:
        try:
            if parser.at_end():
                break
            token = parser.parse()
        except _SyntaxError:
            break
        if not isinstance(token, _Op):
            operands.append(token)
            continue
        if token == "ID":
            end = content.find(b"EI", parser.pos)
            parser.pos = len(content) if end < 0 else end + 2
        elif token == "Tj" and operands and isinstance(operands[-1], bytes):
            pieces.append(_string_text(operands[-1]))
        elif token == "TJ" and operands and isinstance(operands[-1], list):
            for item in operands[-1]:
                if isinstance(item, bytes):
                    pieces.append(_string_text(item))
                elif isinstance(item, (int, float)) and item < _TJ_SPACE_THRESHOLD:
                    pieces.append(" ")
        elif token in ("'", '"'):
            newline()
            if operands and isinstance(operands[-1], bytes):
                pieces.append(_string_text(operands[-1]))
        elif token in ("Td", "TD"):
            if len(operands) >= 2 and operands[-1] != 0:
                newline()
            elif pieces and not pieces[-1].endswith((" ", "\n")):
                pieces.append(" ")
        elif token in ("T*", "Tm", "ET"):
            newline()
        operands = []
    return "".join(pieces).strip()


class PdfDocument:
    """A parsed PDF document whose pages' text can be read."""

    def __init__(self, objects: dict, pages: list[dict]) -> None:
        self._objects = objects
        self._pages = pages

    @classmethod
    def from_file(cls, path: str | PathLike) -> PdfDocument:
        """Read and parse the PDF at ``path``."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise PdfLoadError(f"Failed to load {path}: {exc}") from exc
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> PdfDocument:
        """Parse a PDF held in memory."""
        if b"%PDF-" not in data[:_HEADER_WINDOW]:
            raise PdfLoadError("data is not a PDF document")
        objects = cls._read_objects(data)
        resolve = lambda value: cls._resolve(objects, value)  # noqa: E731
        catalog = cls._find_catalog(data, objects)
        if not isinstance(catalog, dict):
            raise PdfLoadError("document catalog not found")
        pages: list[dict] = []
        seen: set[int] = set()

        def walk(node_ref) -> None:
            if isinstance(node_ref, _Ref):
                if node_ref.num in seen:
                    return
                seen.add(node_ref.num)
            node = resolve(node_ref)
            if isinstance(node, _Stream):
                node = node.attrs
            if not isinstance(node, dict):
                return
            kids = resolve(node.get("Kids"))
            if node.get("Type") == "Page" or not isinstance(kids, list):
                pages.append(node)
                return
            for kid in kids:
                walk(kid)

        root = catalog.get("Pages")
        if root is not None:
            walk(root)
        return cls(objects, pages)

    @staticmethod
    def _resolve(objects: dict, value):
        seen = set()
        while isinstance(value, _Ref) and value.num not in seen:
            seen.add(value.num)
            value = objects.get(value.num)
        return None if isinstance(value, _Ref) else value

    @staticmethod
    def _read_objects(data: bytes) -> dict:
        objects: dict = {}
        cursor = 0
        for match in _OBJ_RE.finditer(data):
            if match.start() < cursor:
                continue
            parser = _Parser(data, match.end())
            try:
                value = parser.parse_indirect()
            except _SyntaxError:
                continue
            objects[int(match[1])] = value
            cursor = parser.pos
        for stream in [v for v in objects.values() if isinstance(v, _Stream)]:
            if stream.attrs.get("Type") != "ObjStm":
                continue
            try:
                body = _decode_stream(stream)
                header = _Parser(body)
                first = stream.attrs.get("First", 0)
                entries = [
                    (header.parse(), header.parse())
                    for _ in range(stream.attrs.get("N", 0))
                ]
                for num, offset in entries:
                    objects.setdefault(num, _Parser(body, first + offset).parse())
            except (_SyntaxError, _UnsupportedFilter, zlib.error, ValueError, TypeError):
                logger.warning("Skipping unreadable object stream")
        return objects

    @classmethod
    def _find_catalog(cls, data: bytes, objects: dict):
        root = None
        for match in _TRAILER_RE.finditer(data):
            try:
                trailer = _Parser(data, match.end() - 2).parse()
            except _SyntaxError:
                continue
            if isinstance(trailer, dict) and "Root" in trailer:
                root = trailer["Root"]
        if root is None:
            for value in objects.values():
                if isinstance(value, _Stream) and value.attrs.get("Type") == "XRef":
                    root = value.attrs.get("Root", root)
        catalog = cls._resolve(objects, root) if root is not None else None
        if isinstance(catalog, dict):
            return catalog
        for value in objects.values():
            if isinstance(value, dict) and value.get("Type") == "Catalog":
                return value
        return None

    def page_count(self) -> int:
        """Number of pages in the document."""
        return len(self._pages)

    def page_text(self, index: int) -> str:
        """Raw text of the page at zero-based ``index``."""
        if not 0 <= index < len(self._pages):
            raise IndexError(f"page index {index} out of range")
        contents = self._resolve(self._objects, self._pages[index].get("Contents"))
        parts = contents if isinstance(contents, list) else [contents]
        try:
            streams = [self._resolve(self._objects, part) for part in parts]
            data = b"\n".join(
                _decode_stream(s) for s in streams if isinstance(s, _Stream)
            )
        except (_UnsupportedFilter, zlib.error, ValueError) as exc:
            raise TextExtractionError(index, f"content extraction failed: {exc}") from exc
        return _content_text(data)

    def iter_page_texts(self) -> Iterator[tuple[int, str]]:
        """Yield ``(index, text)`` for each page; unreadable pages are logged and skipped."""
        for index in range(len(self._pages)):
            try:
                yield index, self.page_text(index)
            except TextExtractionError as exc:
                logger.error("Failed to extract text from page %d: %s", index, exc)