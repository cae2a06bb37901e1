# domain/generated_request.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from domain.http_message import Headers, HttpRequest


@dataclass(frozen=True)
class RawRequestSpec:
    """
    Hand-crafted request. Headers named in unsafe_headers are sent verbatim,
    bypassing any normalization.
    """
    method: str
    path: str = ""
    headers: Headers = field(default_factory=dict)
    data: str = ""
    unsafe_headers: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class GeneratedRequest:
    request: Optional[HttpRequest] = None
    raw_request: Optional[RawRequestSpec] = None

    def __post_init__(self) -> None:
        populated = (self.request is not None) + (self.raw_request is not None)
        if populated != 1:
            raise ValueError("GeneratedRequest needs exactly one of request / raw_request")

    @classmethod
    def structured(cls, request: HttpRequest) -> "GeneratedRequest":
        return cls(request=request)

    @classmethod
    def raw(cls, raw_request: RawRequestSpec) -> "GeneratedRequest":
        return cls(raw_request=raw_request)

    @property
    def kind(self) -> str:
        return "structured" if self.request is not None else "raw"
