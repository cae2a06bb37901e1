# application/services/body_presence_probe.py
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO, Dict, Optional

from domain.exceptions import ParseError

PROBE_LIMIT = 512

_TOKEN_CHARS = set(
    "!#$%&'*+-.^_`|~0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)


@dataclass(frozen=True)
class ParsedRequestHead:
    method: str
    target: str
    version: str
    headers: Dict[str, str]
    # None = no body
    body: Optional[BinaryIO]


class _ShortBody(io.BytesIO):
    """Body that ended before its declared Content-Length."""

    def read(self, size: Optional[int] = -1) -> bytes:
        remaining = len(self.getbuffer()) - self.tell()
        if size is None or size < 0 or size > remaining:
            raise OSError("unexpected EOF in request body")
        return super().read(size)


def _read_line(stream: BinaryIO) -> bytes:
    line = stream.readline()
    if not line:
        raise ParseError("unexpected end of input")
    if not line.endswith(b"\n"):
        raise ParseError("truncated line")
    return line.rstrip(b"\r\n")


def parse_request_head(raw: bytes) -> ParsedRequestHead:
    """
    Request line + headers; the remaining bytes become the body stream.
    Raises ParseError for anything that is not a usable request head.
    """
    stream = io.BytesIO(raw)
    request_line = _read_line(stream).decode("latin-1")
    parts = request_line.split(" ")
    if len(parts) != 3:
        raise ParseError(f"malformed request line: {request_line!r}")
    method, target, version = parts
    if not method or not set(method) <= _TOKEN_CHARS:
        raise ParseError(f"invalid method: {method!r}")
    if not target or not version.startswith("HTTP/"):
        raise ParseError(f"malformed request line: {request_line!r}")

    headers: Dict[str, str] = {}
    while True:
        line = _read_line(stream).decode("latin-1")
        if line == "":
            break
        if ":" not in line:
            raise ParseError(f"malformed header line: {line!r}")
        name, value = line.split(":", 1)
        if not name or not set(name) <= _TOKEN_CHARS:
            raise ParseError(f"malformed header name: {name!r}")
        key, value = name.lower(), value.strip()
        if key == "content-length" and headers.get(key, value) != value:
            raise ParseError("conflicting Content-Length headers")
        headers.setdefault(key, value)

    return ParsedRequestHead(
        method=method,
        target=target,
        version=version,
        headers=headers,
        body=_body_stream(stream, headers),
    )


def _body_stream(stream: BinaryIO, headers: Dict[str, str]) -> Optional[BinaryIO]:
    te = headers.get("transfer-encoding")
    if te is not None:
        if te.lower() != "chunked":
            raise ParseError(f"unsupported Transfer-Encoding: {te!r}")
        return io.BytesIO(_first_chunk(stream))

    length_value = headers.get("content-length")
    if length_value is None:
        return None
    # digits only: no sign, underscore or inner whitespace
    if not (length_value.isascii() and length_value.isdigit()):
        raise ParseError(f"invalid Content-Length: {length_value!r}")
    length = int(length_value)
    if length == 0:
        return None

    data = stream.read(length)
    if len(data) < length:
        return _ShortBody(data)
    return io.BytesIO(data)


def _first_chunk(stream: BinaryIO) -> bytes:
    size_line = _read_line(stream).decode("latin-1").split(";", 1)[0].strip()
    try:
        size = int(size_line, 16)
    except ValueError as e:
        raise ParseError(f"invalid chunk size: {size_line!r}", cause=e)
    data = stream.read(size)
    if len(data) < size:
        raise ParseError("truncated chunk")
    return data


def has_body(raw_text: str, limit: int = PROBE_LIMIT) -> bool:
    """
    True iff raw_text parses as a request head and at least one body byte
    can be read. Parse failures are a negative answer, never an error.
    """
    try:
        head = parse_request_head(raw_text.encode("utf-8", errors="replace"))
    except ParseError:
        return False
    if head.body is None:
        return False
    try:
        chunk = head.body.read(limit)
    except OSError:
        return False
    return len(chunk) > 0
