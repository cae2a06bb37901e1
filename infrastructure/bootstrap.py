# infrastructure/bootstrap.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from application.ports.logger import LoggerPort
from application.services.body_decompressor import BodyDecompressor
from application.services.redirect_chain_dumper import RedirectChainDumper
from application.services.request_dumper import RequestDumper
from application.services.template_expander import PlaceholderExpander
from application.services.wire_tracer import WireTracer
from infrastructure.config.trace_config import TraceConfig
from infrastructure.http.raw_request_serializer import RawRequestSerializer
from infrastructure.http.request_wire_dumper import HttpRequestWireDumper, StreamBodyReader
from infrastructure.http.status_header_renderer import HttpStatusHeaderRenderer


def build_request_dumper(
    values: Optional[Mapping[str, Any]] = None,
    logger: Optional[LoggerPort] = None,
) -> RequestDumper:
    return RequestDumper(
        wire_dumper=HttpRequestWireDumper(),
        body_reader=StreamBodyReader(),
        raw_serializer=RawRequestSerializer(),
        expander=PlaceholderExpander(values),
        logger=logger,
    )


def build_tracer(
    config: TraceConfig,
    logger: LoggerPort,
    values: Optional[Mapping[str, Any]] = None,
) -> WireTracer:
    return WireTracer(
        request_dumper=build_request_dumper(values, logger),
        chain_dumper=RedirectChainDumper(
            HttpStatusHeaderRenderer(),
            max_hops=config.max_redirect_hops,
            logger=logger,
        ),
        decompressor=BodyDecompressor(logger),
        logger=logger,
        probe_limit=config.probe_limit,
    )
