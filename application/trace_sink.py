# application/trace_sink.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from application.http_trace import WireTrace
from application.ports.logger import LoggerPort


class WireTraceSink(ABC):
    @abstractmethod
    def emit(self, trace: WireTrace, logger: LoggerPort) -> None:
        ...


class WireTraceEmitter:
    def __init__(self, sinks: Iterable[WireTraceSink]):
        self._sinks = list(sinks)

    def emit(self, trace: WireTrace, logger: LoggerPort) -> None:
        for s in self._sinks:
            s.emit(trace, logger)
