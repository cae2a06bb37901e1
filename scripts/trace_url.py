#!/usr/bin/env python3
"""
Fetch a URL and print its complete wire trace (request + every redirect hop)

Usage:
  python scripts/trace_url.py <url> [--method POST] [-H "Name: value"]... [--data <text>]
                              [--config wiretrace.yaml] [--no-follow] [--save]

Examples:
  python scripts/trace_url.py http://example.com/
  python scripts/trace_url.py http://example.com/login --method POST --data "user=a" -H "X-Test: 1"
"""
from __future__ import annotations

import argparse
import io
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import requests

from application.trace_sink import WireTraceEmitter
from application.trace_sinks.core import WireTraceLogger
from domain.generated_request import GeneratedRequest
from domain.http_message import Headers, HttpRequest
from infrastructure.bootstrap import build_tracer
from infrastructure.config.trace_config import ConfigLoadError, TraceConfigLoader
from infrastructure.http.requests_client import RequestsHttpClient
from infrastructure.http.trace_artifact_saver import TraceArtifactSaver
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger


def _parse_headers(items: List[str]) -> Headers:
    headers: Headers = {}
    for item in items:
        name, sep, value = item.partition(":")
        if not sep:
            raise ValueError(f"invalid header (expected 'Name: value'): {item}")
        headers.setdefault(name.strip(), []).append(value.strip())
    return headers


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Print the wire trace of an HTTP transaction")
    p.add_argument("url")
    p.add_argument("--method", default="GET")
    p.add_argument("-H", "--header", action="append", default=[], dest="headers")
    p.add_argument("--data", default=None)
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--no-follow", action="store_true", help="Do not follow redirects")
    p.add_argument("--save", action="store_true", help="Write .req/.resp artifacts")
    return p


def main(argv: Optional[List[str]] = None, client: Optional[RequestsHttpClient] = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = TraceConfigLoader().load(args.config)
        headers = _parse_headers(args.headers)
    except (ConfigLoadError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)

    setup_console_logging(config.log_level)
    logger = LoguruLogger().bind(component="trace_url")

    client = client or RequestsHttpClient(
        timeout_sec=config.timeout_sec,
        max_redirects=config.max_redirect_hops,
        logger=logger,
    )
    data = args.data.encode("utf-8") if args.data is not None else None

    try:
        resp = client.fetch(
            args.method,
            args.url,
            headers=headers,
            data=data,
            allow_redirects=config.follow_redirects and not args.no_follow,
        )
    except requests.RequestException as e:
        logger.error("http.fetch_failed", url=args.url, error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    request = HttpRequest(
        method=args.method.upper(),
        url=args.url,
        headers=headers,
        body=io.BytesIO(data) if data is not None else None,
    )
    raw_body = resp.body.read() if resp.body is not None else b""

    tracer = build_tracer(config, logger)
    trace = tracer.trace(GeneratedRequest.structured(request), args.url, resp, raw_body)

    sinks = [WireTraceLogger()]
    if args.save:
        sinks.append(TraceArtifactSaver(config.artifact_dir))
    WireTraceEmitter(sinks).emit(trace, logger)

    out = sys.stdout
    out.write("=== REQUEST ===\n")
    out.write(trace.request_dump.decode("utf-8", errors="replace"))
    out.write("\n\n=== RESPONSE ({} hop{}) ===\n".format(trace.hops, "" if trace.hops == 1 else "s"))
    out.write(trace.response_dump.decode("utf-8", errors="replace"))
    out.write("\n")
    if trace.degraded:
        out.write("[!] trace degraded: earlier hops or body may be incomplete\n")

    sys.exit(0)


if __name__ == "__main__":
    main()
