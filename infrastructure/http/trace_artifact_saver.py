# infrastructure/http/trace_artifact_saver.py
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from application.http_trace import WireTrace
from application.ports.logger import LoggerPort
from application.trace_sink import WireTraceSink


class TraceArtifactSaver(WireTraceSink):
    """
    1 request dump        -> NNN_<method>.req
    2 redirect chain dump -> NNN_<method>.resp

    1回の実行(セッション)ごとに1フォルダ
    """

    def __init__(self, root: str = "tmp/wiretrace"):
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S%f")[:-3]
        self._dir = self._root / ts
        self._index: int = 0

    @property
    def directory(self) -> Path:
        return self._dir

    def emit(self, trace: WireTrace, logger: LoggerPort) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        stem = f"{self._index:03}_{trace.method.lower()}"
        self._index += 1

        req_path = self._dir / f"{stem}.req"
        req_path.write_bytes(trace.request_dump)

        resp_path = self._dir / f"{stem}.resp"
        resp_path.write_bytes(trace.response_dump)

        logger.info(
            "http.artifacts.saved",
            url=trace.url,
            dir=str(self._dir),
            request=req_path.name,
            response=resp_path.name,
        )
