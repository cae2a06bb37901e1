from application.http_trace import WireTrace
from infrastructure.http.trace_artifact_saver import TraceArtifactSaver
from tests.fakes import RecordingLogger


def test_writes_request_and_response_dumps(tmp_path) -> None:
    # Arrange
    saver = TraceArtifactSaver(root=str(tmp_path))
    logger = RecordingLogger()
    trace = WireTrace(
        method="GET",
        url="http://example.com/",
        kind="structured",
        request_dump=b"GET / HTTP/1.1\r\n\r\n",
        response_dump=b"HTTP/1.1 200 OK\r\n\r\nok",
        hops=1,
        status=200,
        body=b"ok",
    )

    # Act
    saver.emit(trace, logger)
    saver.emit(trace, logger)

    # Assert
    files = sorted(p.name for p in saver.directory.iterdir())
    assert files == ["000_get.req", "000_get.resp", "001_get.req", "001_get.resp"]
    assert (saver.directory / "000_get.resp").read_bytes() == b"HTTP/1.1 200 OK\r\n\r\nok"
    assert logger.names("info") == ["http.artifacts.saved", "http.artifacts.saved"]
