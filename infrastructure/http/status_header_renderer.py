# infrastructure/http/status_header_renderer.py
from __future__ import annotations

from application.ports.wire import StatusHeaderRendererPort
from domain.exceptions import RenderError
from domain.http_message import HttpResponseMessage


class HttpStatusHeaderRenderer(StatusHeaderRendererPort):
    """
    HTTP/1.1 302 Found\\r\\n
    Location: /next\\r\\n
    \\r\\n
    """

    def render(self, resp: HttpResponseMessage) -> bytes:
        if not isinstance(resp.status, int) or not 100 <= resp.status <= 999:
            raise RenderError(f"invalid status: {resp.status!r}")

        lines = [resp.status_line]
        for name, values in (resp.headers or {}).items():
            if not name or "\r" in name or "\n" in name or ":" in name:
                raise RenderError(f"invalid header name: {name!r}")
            for v in values:
                lines.append(f"{name}: {v}")

        text = "\r\n".join(lines) + "\r\n\r\n"
        try:
            return text.encode("latin-1")
        except UnicodeEncodeError:
            return text.encode("utf-8")
