# application/services/wire_tracer.py
from __future__ import annotations

from typing import Optional

from application.http_trace import WireTrace
from application.ports.logger import LoggerPort, NullLogger
from application.services.body_decompressor import BodyDecompressor
from application.services.body_presence_probe import PROBE_LIMIT, has_body
from application.services.redirect_chain_dumper import RedirectChainDumper
from application.services.request_dumper import RequestDumper
from domain.generated_request import GeneratedRequest
from domain.http_message import HttpResponseMessage


class WireTracer:
    """
    1 transaction -> WireTrace
    (request dump + redirect chain dump with the decoded final body)
    """

    def __init__(
        self,
        request_dumper: RequestDumper,
        chain_dumper: RedirectChainDumper,
        decompressor: BodyDecompressor,
        logger: Optional[LoggerPort] = None,
        probe_limit: int = PROBE_LIMIT,
    ):
        self._request_dumper = request_dumper
        self._chain_dumper = chain_dumper
        self._decompressor = decompressor
        self._logger = logger or NullLogger()
        self._probe_limit = probe_limit

    def trace(
        self,
        req: GeneratedRequest,
        resolved_url: str,
        resp: HttpResponseMessage,
        raw_body: bytes,
    ) -> WireTrace:
        log = self._logger.bind(url=resolved_url, kind=req.kind)

        request_dump = self._request_dumper.dump(req, resolved_url)
        log.debug("trace.request_dumped", size=len(request_dump))

        decoded = self._decompressor.decode(resp, raw_body)
        if decoded.degraded:
            log.warning("trace.decompress_failed", error=str(decoded.error))

        chain = self._chain_dumper.dump_chain(resp, decoded.body)
        log.debug(
            "trace.response_dumped",
            hops=chain.hops,
            truncated=chain.truncated,
            unread_bodies=chain.unread_bodies,
        )

        return WireTrace(
            method=_method_of(req),
            url=resolved_url,
            kind=req.kind,
            request_dump=request_dump,
            response_dump=chain.data,
            hops=chain.hops,
            status=resp.status,
            body=decoded.body,
            body_encoding=decoded.encoding,
            truncated=chain.truncated,
            unread_bodies=chain.unread_bodies,
            decompress_error=str(decoded.error) if decoded.error else None,
            request_has_body=has_body(
                request_dump.decode("utf-8", errors="replace"), limit=self._probe_limit
            ),
        )


def _method_of(req: GeneratedRequest) -> str:
    if req.request is not None:
        return req.request.method.upper()
    return req.raw_request.method.upper()
