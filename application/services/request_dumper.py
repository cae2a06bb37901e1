# application/services/request_dumper.py
from __future__ import annotations

import io
from typing import Optional

from application.ports.logger import LoggerPort, NullLogger
from application.ports.wire import (
    BodyReaderPort,
    RawWireSerializerPort,
    RequestWireDumperPort,
    TemplateExpanderPort,
)
from domain.generated_request import GeneratedRequest, RawRequestSpec
from domain.http_message import HttpRequest


class RequestDumper:
    def __init__(
        self,
        wire_dumper: RequestWireDumperPort,
        body_reader: BodyReaderPort,
        raw_serializer: RawWireSerializerPort,
        expander: TemplateExpanderPort,
        logger: Optional[LoggerPort] = None,
    ):
        self._wire_dumper = wire_dumper
        self._body_reader = body_reader
        self._raw_serializer = raw_serializer
        self._expander = expander
        self._logger = logger or NullLogger()

    def dump(self, req: GeneratedRequest, resolved_url: str) -> bytes:
        if req.kind == "structured":
            data = self._dump_structured(req.request)
        elif req.kind == "raw":
            data = self._dump_raw(req.raw_request, resolved_url)
        else:
            raise ValueError(f"unknown request kind: {req.kind}")

        self._logger.debug("dump.request", kind=req.kind, url=resolved_url, size=len(data))
        return data

    def _dump_structured(self, request: HttpRequest) -> bytes:
        # 本文を読み出したら同じ内容の新しいストリームに差し替える
        body = self._body_reader.read(request)
        request.body = io.BytesIO(body) if request.body is not None else None
        return self._wire_dumper.dump(request, include_body=True)

    def _dump_raw(self, raw: RawRequestSpec, resolved_url: str) -> bytes:
        return self._raw_serializer.serialize(
            raw.method,
            resolved_url,
            raw.path,
            self._expander.expand(raw.headers),
            io.BytesIO(raw.data.encode("utf-8")),
            unsafe_headers=raw.unsafe_headers,
        )
