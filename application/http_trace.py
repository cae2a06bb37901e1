# application/http_trace.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WireTrace:
    method: str
    url: str
    kind: str  # "structured" / "raw"
    request_dump: bytes
    response_dump: bytes
    hops: int
    status: int
    body: bytes
    body_encoding: str = ""
    truncated: bool = False
    unread_bodies: int = 0
    decompress_error: Optional[str] = None
    request_has_body: bool = False

    @property
    def degraded(self) -> bool:
        return self.truncated or self.unread_bodies > 0 or self.decompress_error is not None
