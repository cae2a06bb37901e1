from application.http_trace import WireTrace
from application.services.redactor import MASK
from application.trace_sink import WireTraceEmitter
from application.trace_sinks.core import WireTraceLogger
from tests.fakes import RecordingLogger


def _trace(**overrides) -> WireTrace:
    values = dict(
        method="GET",
        url="http://example.com/",
        kind="structured",
        request_dump=b"GET / HTTP/1.1\r\nHost: example.com\r\nCookie: sid=secret\r\n\r\n",
        response_dump=b"HTTP/1.1 200 OK\r\nSet-Cookie: sid=secret\r\n\r\nok",
        hops=1,
        status=200,
        body=b"ok",
    )
    values.update(overrides)
    return WireTrace(**values)


def test_logs_trace_summary_and_masked_dumps() -> None:
    logger = RecordingLogger()

    WireTraceEmitter([WireTraceLogger()]).emit(_trace(), logger)

    events = {name: fields for _, name, fields in logger.events}
    assert events["http.trace"]["status"] == 200
    assert events["http.trace"]["hops"] == 1
    assert events["http.trace"]["body_len"] == 2
    assert "secret" not in events["http.request_dump"]["dump"]
    assert MASK in events["http.response_dump"]["head"]
    assert "http.trace_degraded" not in logger.names()


def test_degraded_trace_emits_warning() -> None:
    logger = RecordingLogger()

    WireTraceLogger().emit(_trace(truncated=True, hops=3), logger)

    assert logger.names("warning") == ["http.trace_degraded"]


def test_emitter_calls_every_sink() -> None:
    calls = []

    class Sink(WireTraceLogger):
        def emit(self, trace, logger):
            calls.append(trace.url)

    WireTraceEmitter([Sink(), Sink()]).emit(_trace(), RecordingLogger())

    assert calls == ["http://example.com/", "http://example.com/"]
