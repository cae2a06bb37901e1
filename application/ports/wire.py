# application/ports/wire.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, FrozenSet, Optional

from domain.http_message import Headers, HttpRequest, HttpResponseMessage


class StatusHeaderRendererPort(ABC):
    @abstractmethod
    def render(self, resp: HttpResponseMessage) -> bytes:
        """Status line + headers, no body. Raises RenderError."""
        ...


class RawWireSerializerPort(ABC):
    @abstractmethod
    def serialize(
        self,
        method: str,
        url: str,
        path: str,
        headers: Headers,
        body: Optional[BinaryIO],
        unsafe_headers: FrozenSet[str] = frozenset(),
    ) -> bytes:
        """Raises SerializationError."""
        ...


class RequestWireDumperPort(ABC):
    @abstractmethod
    def dump(self, request: HttpRequest, include_body: bool = True) -> bytes:
        ...


class BodyReaderPort(ABC):
    @abstractmethod
    def read(self, request: HttpRequest) -> bytes:
        ...


class TemplateExpanderPort(ABC):
    @abstractmethod
    def expand(self, headers: Headers) -> Headers:
        ...
