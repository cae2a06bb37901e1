"""FastAPI アプリケーション - wire dump ユーティリティの REST エンドポイント"""
import base64
import binascii
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from application.services.body_decompressor import BodyDecompressor
from application.services.body_presence_probe import PROBE_LIMIT, has_body
from application.services.header_serializer import serialize_headers
from application.services.template_expander import TemplateExpandError
from domain.exceptions import SerializationError
from domain.generated_request import GeneratedRequest, RawRequestSpec
from domain.http_message import HttpResponseMessage
from infrastructure.bootstrap import build_request_dumper
from infrastructure.logging.loguru_logger import LoguruLogger


class HeadersRequest(BaseModel):
    headers: Dict[str, List[str]] = Field(default_factory=dict, description="Header multimap")


class HeadersResponse(BaseModel):
    text: str


class BodyProbeRequest(BaseModel):
    raw: str = Field(description="Raw HTTP request text")


class BodyProbeResponse(BaseModel):
    has_body: bool
    probe_limit: int = PROBE_LIMIT


class RawDumpRequest(BaseModel):
    """Raw request dump request"""
    url: str = Field(description="Resolved target URL")
    method: str = "GET"
    path: str = ""
    headers: Dict[str, List[str]] = Field(default_factory=dict)
    data: str = ""
    unsafe_headers: List[str] = Field(default_factory=list)
    values: Dict[str, Any] = Field(default_factory=dict, description="Placeholder values")


class RawDumpResponse(BaseModel):
    dump: str
    has_body: bool


class DecompressRequest(BaseModel):
    body_b64: str
    content_encoding: Optional[str] = None


class DecompressResponse(BaseModel):
    body_b64: str
    degraded: bool
    error: Optional[str] = None


app = FastAPI(
    title="wiretrace API",
    description="HTTP wire dump helpers",
    version="1.0.0",
)

_logger = LoguruLogger().bind(component="api")


@app.get("/")
def read_root():
    return {"service": "wiretrace", "status": "ok"}


@app.post("/headers/serialize", response_model=HeadersResponse)
def serialize(request: HeadersRequest) -> HeadersResponse:
    return HeadersResponse(text=serialize_headers(request.headers))


@app.post("/probe/body", response_model=BodyProbeResponse)
def probe_body(request: BodyProbeRequest) -> BodyProbeResponse:
    return BodyProbeResponse(has_body=has_body(request.raw))


@app.post("/dumps/raw", response_model=RawDumpResponse)
def dump_raw(request: RawDumpRequest) -> RawDumpResponse:
    dumper = build_request_dumper(request.values, _logger)
    generated = GeneratedRequest.raw(
        RawRequestSpec(
            method=request.method,
            path=request.path,
            headers=request.headers,
            data=request.data,
            unsafe_headers=frozenset(request.unsafe_headers),
        )
    )
    try:
        data = dumper.dump(generated, request.url)
    except (SerializationError, TemplateExpandError) as e:
        _logger.error("api.dump_failed", url=request.url, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    text = data.decode("utf-8", errors="replace")
    return RawDumpResponse(dump=text, has_body=has_body(text))


@app.post("/decompress", response_model=DecompressResponse)
def decompress(request: DecompressRequest) -> DecompressResponse:
    try:
        raw = base64.b64decode(request.body_b64, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="body_b64 is not valid base64")

    headers = {"Content-Encoding": [request.content_encoding]} if request.content_encoding else {}
    body, err = BodyDecompressor(_logger).decompress(HttpResponseMessage(status=200, headers=headers), raw)
    return DecompressResponse(
        body_b64=base64.b64encode(body).decode("ascii"),
        degraded=err is not None,
        error=str(err) if err else None,
    )
