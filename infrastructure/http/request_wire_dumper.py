# infrastructure/http/request_wire_dumper.py
from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

from application.ports.wire import BodyReaderPort, RequestWireDumperPort
from domain.exceptions import SerializationError
from domain.http_message import HttpRequest, header_get


def _seekable(stream) -> bool:
    seekable = getattr(stream, "seekable", None)
    return bool(seekable and seekable())


class StreamBodyReader(BodyReaderPort):
    def read(self, request: HttpRequest) -> bytes:
        body = request.body
        if body is None:
            return b""
        try:
            if _seekable(body):
                body.seek(0)
            data = body.read()
        except OSError as e:
            raise SerializationError(f"failed to read request body: {e}", cause=e)
        if isinstance(data, str):
            return data.encode("utf-8")
        return data


class HttpRequestWireDumper(RequestWireDumperPort):
    """
    GET /path?q=1 HTTP/1.1\\r\\n
    Host: example.com\\r\\n
    ...\\r\\n
    \\r\\n
    body
    """

    def dump(self, request: HttpRequest, include_body: bool = True) -> bytes:
        parts = urlsplit(request.url)
        if not parts.netloc:
            raise SerializationError(f"url without host: {request.url!r}")

        target = parts.path or "/"
        if parts.query:
            target = f"{target}?{parts.query}"

        lines: List[str] = [f"{request.method.upper()} {target} HTTP/1.1"]
        host = header_get(request.headers, "Host") or parts.netloc
        lines.append(f"Host: {host}")
        for name, values in request.headers.items():
            if name.lower() == "host":
                continue
            for v in values:
                if "\r" in v or "\n" in v:
                    raise SerializationError(f"invalid header value for {name}")
                lines.append(f"{name}: {v}")

        body = b""
        if include_body and request.body is not None:
            try:
                body = request.body.read()
            except OSError as e:
                raise SerializationError(f"failed to read request body: {e}", cause=e)
            if _seekable(request.body):
                request.body.seek(0)
        if body and header_get(request.headers, "Content-Length") is None:
            lines.append(f"Content-Length: {len(body)}")

        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("utf-8") + body
