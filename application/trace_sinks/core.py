# application/trace_sinks/core.py
from __future__ import annotations

import hashlib

from application.http_trace import WireTrace
from application.ports.logger import LoggerPort
from application.services.redactor import mask_dump
from application.trace_sink import WireTraceSink


class WireTraceLogger(WireTraceSink):
    def emit(self, trace: WireTrace, logger: LoggerPort) -> None:
        logger.info(
            "http.trace",
            kind=trace.kind,
            method=trace.method,
            url=trace.url,
            status=trace.status,
            hops=trace.hops,
            body_len=len(trace.body),
            body_sha256=hashlib.sha256(trace.body).hexdigest(),
            body_encoding=trace.body_encoding,
            request_has_body=trace.request_has_body,
            degraded=trace.degraded,
        )

        if trace.degraded:
            logger.warning(
                "http.trace_degraded",
                url=trace.url,
                truncated=trace.truncated,
                unread_bodies=trace.unread_bodies,
                decompress_error=trace.decompress_error,
            )

        logger.debug(
            "http.request_dump",
            url=trace.url,
            dump=mask_dump(trace.request_dump.decode("latin-1")),
        )
        logger.debug(
            "http.response_dump",
            url=trace.url,
            head=mask_dump(trace.response_dump[:4000].decode("latin-1")),
        )
