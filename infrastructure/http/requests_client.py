# infrastructure/http/requests_client.py
from __future__ import annotations

import io
from typing import Any, Dict, List, Optional

import requests

from application.ports.http_client import HttpClientPort
from application.ports.logger import LoggerPort, NullLogger
from domain.http_message import Headers, HttpRequest, HttpResponseMessage, headers_from_pairs

_HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2", 30: "HTTP/3"}


class RequestsHttpClient(HttpClientPort):
    """
    requests.Session based client.

    requests keeps redirects as a flat resp.history list; this client rebuilds
    the backward-linked graph (resp.request.response -> previous hop) that the
    dump services walk. The final response body is left undecoded
    (Content-Encoding still applied) so it can be decoded explicitly. The one
    exception is an unfollowed redirect, whose body requests has already
    decoded; its Content-Encoding header is dropped to match.
    """

    def __init__(
        self,
        base_headers: Optional[Dict[str, str]] = None,
        timeout_sec: int = 20,
        max_redirects: int = 30,
        session: Optional[requests.Session] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self._session = session or requests.Session()
        self._session.max_redirects = max_redirects
        self._base_headers = base_headers or {}
        self._timeout = timeout_sec
        self._logger = logger or NullLogger()

    def fetch(
        self,
        method: str,
        url: str,
        headers: Optional[Headers] = None,
        data: Optional[bytes] = None,
        allow_redirects: Optional[bool] = None,
    ) -> HttpResponseMessage:
        merged: Dict[str, str] = dict(self._base_headers)
        for name, values in (headers or {}).items():
            # requests は同名ヘッダを1つしか持てない
            merged[name] = ", ".join(values)

        follow = True if allow_redirects is None else bool(allow_redirects)

        resp = self._session.request(
            method=method.upper(),
            url=url,
            headers=merged,
            data=data,
            timeout=self._timeout,
            allow_redirects=follow,
            stream=True,
        )
        decoded = False
        try:
            if follow or not resp.is_redirect:
                final_body = resp.raw.read(decode_content=False)
            else:
                # requests already consumed (and decoded) it while preparing Response.next
                final_body = resp.content
                decoded = True
        finally:
            resp.close()

        self._logger.info(
            "http.fetched",
            method=method.upper(),
            url=url,
            status=resp.status_code,
            final_url=str(resp.url),
            redirects=len(resp.history or []),
        )
        return to_message_chain(resp, final_body, decoded=decoded)

    def close(self) -> None:
        self._session.close()


def to_message_chain(
    resp: requests.Response,
    final_body: Optional[bytes] = None,
    decoded: bool = False,
) -> HttpResponseMessage:
    """
    requests.Response (+ history) -> final HttpResponseMessage with back links.
    decoded=True means final_body no longer carries its Content-Encoding, so
    that header is dropped from the final hop.
    """
    hops: List[requests.Response] = list(resp.history or []) + [resp]

    prev: Optional[HttpResponseMessage] = None
    for i, r in enumerate(hops):
        is_final = i == len(hops) - 1
        body = final_body if is_final and final_body is not None else r.content

        headers = _headers_of(r)
        req = _to_request(r.request)
        req.response = prev
        prev = HttpResponseMessage(
            status=r.status_code,
            reason=r.reason or "",
            http_version=_version_of(r),
            headers=_without_content_encoding(headers) if is_final and decoded else headers,
            body=io.BytesIO(body) if body is not None else None,
            request=req,
        )
    return prev


def _to_request(p: Optional[requests.PreparedRequest]) -> HttpRequest:
    if p is None:
        return HttpRequest(method="GET", url="")
    body = p.body
    if isinstance(body, str):
        body = body.encode("utf-8")
    return HttpRequest(
        method=p.method or "GET",
        url=p.url or "",
        headers={k: [v] for k, v in (p.headers or {}).items()},
        body=io.BytesIO(body) if isinstance(body, bytes) else None,
    )


def _version_of(r: requests.Response) -> str:
    version = getattr(r.raw, "version", None)
    return _HTTP_VERSIONS.get(version, "HTTP/1.1")


def _headers_of(r: requests.Response) -> Headers:
    raw_headers: Any = getattr(r.raw, "headers", None)
    iteritems = getattr(raw_headers, "iteritems", None)
    if callable(iteritems):
        # urllib3 HTTPHeaderDict: 同名ヘッダは値ごとに1件
        return headers_from_pairs(iteritems())
    return {k: [v] for k, v in r.headers.items()}


def _without_content_encoding(headers: Headers) -> Headers:
    return {k: v for k, v in headers.items() if k.lower() != "content-encoding"}
