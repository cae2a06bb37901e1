# infrastructure/http/raw_request_serializer.py
from __future__ import annotations

from typing import BinaryIO, FrozenSet, List, Optional
from urllib.parse import urlsplit

from application.ports.wire import RawWireSerializerPort
from domain.exceptions import SerializationError
from domain.http_message import Headers, header_get


class RawRequestSerializer(RawWireSerializerPort):
    """
    Hand-crafted request -> wire bytes.

    Headers listed in unsafe_headers are written exactly as given (name and
    value), so malformed or duplicated headers reach the wire untouched.
    Everything else gets minimal cleanup: name stripped, CR/LF dropped.
    Host / Content-Length are added when absent.
    """

    def __init__(self, http_version: str = "HTTP/1.1"):
        self._http_version = http_version

    def serialize(
        self,
        method: str,
        url: str,
        path: str,
        headers: Headers,
        body: Optional[BinaryIO],
        unsafe_headers: FrozenSet[str] = frozenset(),
    ) -> bytes:
        try:
            data = body.read() if body is not None else b""
        except OSError as e:
            raise SerializationError(f"failed to read raw body: {e}", cause=e)
        if isinstance(data, str):
            data = data.encode("utf-8")

        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise SerializationError(f"invalid url: {url!r}", cause=e)

        lines: List[str] = [f"{method} {_request_target(parts, path)} {self._http_version}"]

        if header_get(headers, "Host") is None and parts.netloc:
            lines.append(f"Host: {parts.netloc}")

        for name, values in headers.items():
            unsafe = name in unsafe_headers
            for v in values:
                if unsafe:
                    lines.append(f"{name}: {v}")
                else:
                    lines.append(f"{name.strip()}: {_clean(v)}")

        if data and header_get(headers, "Content-Length") is None:
            lines.append(f"Content-Length: {len(data)}")

        head = "\r\n".join(lines) + "\r\n\r\n"
        try:
            return head.encode("utf-8") + data
        except UnicodeEncodeError as e:
            raise SerializationError(f"failed to encode request head: {e}", cause=e)


def _request_target(parts, path: str) -> str:
    base = parts.path or "/"
    if parts.query:
        base = f"{base}?{parts.query}"
    if not path:
        return base
    if parts.path in ("", "/"):
        return path if path.startswith("/") else "/" + path
    return parts.path.rstrip("/") + ("" if path.startswith("/") else "/") + path


def _clean(value: str) -> str:
    return value.replace("\r", "").replace("\n", "")
