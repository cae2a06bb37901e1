# domain/exceptions.py
from __future__ import annotations

from typing import Optional


class WireTraceError(Exception):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class RenderError(WireTraceError):
    """Status line / headers of a response could not be rendered."""


class DumpError(WireTraceError):
    """The final response of a redirect chain could not be dumped."""


class SerializationError(WireTraceError):
    """Raw or structured request wire dump failed."""


class DecompressionError(WireTraceError):
    """Body could not be decoded; the original bytes are still usable."""


class ParseError(WireTraceError):
    pass
