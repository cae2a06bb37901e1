# domain/http_message.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Optional

# name -> values (insertion order of names and values is kept)
Headers = Dict[str, List[str]]


def header_get(headers: Optional[Headers], name: str) -> Optional[str]:
    """First value of a header, case-insensitive on the name."""
    if not headers:
        return None
    wanted = name.lower()
    for k, values in headers.items():
        if k.lower() == wanted and values:
            return values[0]
    return None


def headers_from_pairs(pairs) -> Headers:
    out: Headers = {}
    for k, v in pairs:
        out.setdefault(k, []).append(v)
    return out


@dataclass
class HttpRequest:
    method: str
    url: str
    headers: Headers = field(default_factory=dict)
    body: Optional[BinaryIO] = None
    # 直前のホップのレスポンス（このリクエストがリダイレクトで生まれた場合のみ）
    response: Optional["HttpResponseMessage"] = None


@dataclass
class HttpResponseMessage:
    status: int
    reason: str = ""
    http_version: str = "HTTP/1.1"
    headers: Headers = field(default_factory=dict)
    body: Optional[BinaryIO] = None
    request: Optional[HttpRequest] = None

    @property
    def status_line(self) -> str:
        line = f"{self.http_version} {self.status}"
        return f"{line} {self.reason}" if self.reason else line


def preceding_response(resp: Optional[HttpResponseMessage]) -> Optional[HttpResponseMessage]:
    if resp is None or resp.request is None:
        return None
    return resp.request.response
