# application/services/redirect_chain_dumper.py
from __future__ import annotations

from typing import List, Optional

from application.ports.logger import LoggerPort, NullLogger
from application.ports.wire import StatusHeaderRendererPort
from domain.exceptions import DumpError, RenderError
from domain.http_message import HttpResponseMessage, preceding_response
from domain.results import ChainDump

DEFAULT_MAX_HOPS = 32


class RedirectChainDumper:
    """
    Dumps a response together with every response that redirected to it.

    The HTTP client only hands back the final response; earlier hops hang off
    resp.request.response. The chain is walked backwards and emitted in the
    order the hops actually happened (first request first, final response last).
    """

    def __init__(
        self,
        renderer: StatusHeaderRendererPort,
        max_hops: int = DEFAULT_MAX_HOPS,
        logger: Optional[LoggerPort] = None,
    ):
        if max_hops < 1:
            raise ValueError("max_hops must be >= 1")
        self._renderer = renderer
        self._max_hops = max_hops
        self._logger = logger or NullLogger()

    def dump(self, resp: HttpResponseMessage, body: bytes) -> bytes:
        return self.dump_chain(resp, body).data

    def dump_chain(self, resp: HttpResponseMessage, body: bytes) -> ChainDump:
        try:
            head = self._renderer.render(resp)
        except RenderError as e:
            raise DumpError(f"failed to dump final response: {e}", cause=e)

        # final hop first; reversed on output
        records: List[bytes] = [head + (body or b"")]
        truncated = False
        unread = 0

        cur = preceding_response(resp)
        while cur is not None:
            if len(records) >= self._max_hops:
                truncated = True
                self._logger.warning(
                    "dump.chain_truncated",
                    reason="max_hops",
                    max_hops=self._max_hops,
                    hops=len(records),
                )
                break

            try:
                record = self._renderer.render(cur)
            except RenderError as e:
                truncated = True
                self._logger.warning(
                    "dump.chain_truncated",
                    reason="render_failed",
                    status=cur.status,
                    hops=len(records),
                    error=str(e),
                )
                break

            if cur.body is not None:
                try:
                    record += cur.body.read()
                except Exception as e:
                    unread += 1
                    self._logger.warning(
                        "dump.hop_body_unread",
                        status=cur.status,
                        error=str(e),
                    )

            records.append(record)
            cur = preceding_response(cur)

        self._logger.debug("dump.chain", hops=len(records), truncated=truncated)
        return ChainDump(
            data=b"".join(reversed(records)),
            hops=len(records),
            truncated=truncated,
            unread_bodies=unread,
        )
