# application/services/header_serializer.py
from __future__ import annotations

from io import StringIO
from typing import List, Mapping


def serialize_headers(headers: Mapping[str, List[str]]) -> str:
    """
    Headers -> "Name: value" lines.
    Multi-valued headers are written as repeated lines, never comma-joined.
    """
    buf = StringIO()
    for name, values in headers.items():
        buf.write(name)
        buf.write(": ")
        for i, value in enumerate(values):
            buf.write(value)
            if i != len(values) - 1:
                buf.write("\n")
                buf.write(name)
                buf.write(": ")
        buf.write("\n")
    return buf.getvalue()
