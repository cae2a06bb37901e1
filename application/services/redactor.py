# application/services/redactor.py
from __future__ import annotations

from typing import Any, List, Mapping

SENSITIVE_KEYS = {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}

MASK = "********"


def mask_value(key: str, value: Any) -> Any:
    if key.strip().lower() in SENSITIVE_KEYS and value is not None:
        return MASK
    return value


def mask_headers(headers: Mapping[str, List[str]]) -> dict:
    return {k: [mask_value(k, v) for v in values] for k, values in headers.items()}


def mask_dump(text: str) -> str:
    """
    Mask sensitive "Name: value" lines inside a wire dump.
    Body lines are only touched when they happen to look like such a header.
    """
    out = []
    for line in text.splitlines(keepends=True):
        name, sep, _ = line.partition(":")
        if sep and name.strip().lower() in SENSITIVE_KEYS:
            ending = line[len(line.rstrip("\r\n")):]
            out.append(f"{name}: {MASK}{ending}")
        else:
            out.append(line)
    return "".join(out)
