# application/services/body_decompressor.py
from __future__ import annotations

import gzip
import io
import zlib
from typing import Optional, Tuple

from application.ports.logger import LoggerPort, NullLogger
from domain.exceptions import DecompressionError
from domain.http_message import HttpResponseMessage, header_get
from domain.results import DecodedBody


class BodyDecompressor:
    """
    Content-Encoding が gzip の場合のみ本文を展開する。
    失敗しても元のバイト列を返す（エラーは併せて返す）。
    """

    def __init__(self, logger: Optional[LoggerPort] = None):
        self._logger = logger or NullLogger()

    def decompress(
        self, resp: Optional[HttpResponseMessage], raw_body: bytes
    ) -> Tuple[bytes, Optional[DecompressionError]]:
        decoded = self.decode(resp, raw_body)
        return decoded.body, decoded.error

    def decode(self, resp: Optional[HttpResponseMessage], raw_body: bytes) -> DecodedBody:
        if resp is None:
            return DecodedBody(body=raw_body)

        encoding = (header_get(resp.headers, "Content-Encoding") or "").lower().strip()
        if "gzip" not in encoding:
            return DecodedBody(body=raw_body, encoding=encoding)

        try:
            with gzip.GzipFile(fileobj=io.BytesIO(raw_body), mode="rb") as reader:
                body = reader.read()
        except (OSError, EOFError, zlib.error) as e:
            self._logger.warning(
                "decompress.failed",
                encoding=encoding,
                body_len=len(raw_body),
                error=str(e),
            )
            return DecodedBody(
                body=raw_body,
                encoding=encoding,
                error=DecompressionError(f"gzip decode failed: {e}", cause=e),
            )

        self._logger.debug(
            "decompress.ok",
            encoding=encoding,
            body_len=len(raw_body),
            decoded_len=len(body),
        )
        return DecodedBody(body=body, encoding=encoding)
