import io

import pytest

from domain.exceptions import RenderError
from domain.http_message import HttpResponseMessage
from infrastructure.http.status_header_renderer import HttpStatusHeaderRenderer


def test_renders_status_line_and_repeated_headers() -> None:
    resp = HttpResponseMessage(
        status=302,
        reason="Found",
        headers={"Location": ["/next"], "Set-Cookie": ["a=1", "b=2"]},
        body=None,
    )

    data = HttpStatusHeaderRenderer().render(resp)

    assert data == (
        b"HTTP/1.1 302 Found\r\n"
        b"Location: /next\r\n"
        b"Set-Cookie: a=1\r\n"
        b"Set-Cookie: b=2\r\n"
        b"\r\n"
    )


def test_body_is_never_rendered() -> None:
    resp = HttpResponseMessage(status=200, reason="OK", body=io.BytesIO(b"secret-body"))

    assert b"secret-body" not in HttpStatusHeaderRenderer().render(resp)
    assert resp.body.read() == b"secret-body"


@pytest.mark.parametrize(
    "resp",
    [
        HttpResponseMessage(status=42),
        HttpResponseMessage(status="200"),  # type: ignore[arg-type]
        HttpResponseMessage(status=200, headers={"Bad\r\nName": ["x"]}),
        HttpResponseMessage(status=200, headers={"": ["x"]}),
    ],
)
def test_invalid_responses_raise_render_error(resp) -> None:
    with pytest.raises(RenderError):
        HttpStatusHeaderRenderer().render(resp)
