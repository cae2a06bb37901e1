# domain/results.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.exceptions import DecompressionError


@dataclass(frozen=True)
class ChainDump:
    data: bytes
    hops: int
    truncated: bool = False
    unread_bodies: int = 0

    @property
    def degraded(self) -> bool:
        return self.truncated or self.unread_bodies > 0


@dataclass(frozen=True)
class DecodedBody:
    body: bytes
    encoding: str = ""
    error: Optional[DecompressionError] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None
