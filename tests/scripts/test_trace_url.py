from __future__ import annotations

import pytest
import requests

from infrastructure.http.requests_client import RequestsHttpClient
from scripts import trace_url
from tests.fakes import FakeAdapter


def _client() -> RequestsHttpClient:
    session = requests.Session()
    session.mount("http://fake/", FakeAdapter({
        "http://fake/old": (301, "Moved Permanently", [("Location", "/new")], b""),
        "http://fake/new": (200, "OK", [("Content-Type", "text/plain")], b"hello"),
    }))
    return RequestsHttpClient(session=session)


def test_trace_url_prints_request_and_chain(monkeypatch, tmp_path, capsys) -> None:
    # Arrange
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WIRETRACE_ARTIFACT_DIR", str(tmp_path / "artifacts"))

    # Act
    with pytest.raises(SystemExit) as excinfo:
        trace_url.main(["http://fake/old", "-H", "X-Test: 1", "--save"], client=_client())

    # Assert
    out = capsys.readouterr().out
    assert excinfo.value.code == 0
    assert "GET /old HTTP/1.1\r\nHost: fake\r\nX-Test: 1" in out
    assert "=== RESPONSE (2 hops) ===" in out
    assert out.index("301 Moved Permanently") < out.index("200 OK")
    assert "hello" in out
    saved = list((tmp_path / "artifacts").rglob("*.resp"))
    assert len(saved) == 1


def test_trace_url_rejects_bad_header(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        trace_url.main(["http://fake/old", "-H", "no-colon"], client=_client())

    assert excinfo.value.code == 2


def test_trace_url_reports_fetch_error(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    class FailingClient:
        def fetch(self, *args, **kwargs):
            raise requests.ConnectionError("refused")

    with pytest.raises(SystemExit) as excinfo:
        trace_url.main(["http://fake/old"], client=FailingClient())

    assert excinfo.value.code == 1
    assert "refused" in capsys.readouterr().err
