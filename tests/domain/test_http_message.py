from domain.http_message import (
    HttpRequest,
    HttpResponseMessage,
    header_get,
    headers_from_pairs,
    preceding_response,
)


def test_header_get_is_case_insensitive() -> None:
    headers = {"Content-Encoding": ["gzip"], "X-Foo": ["a", "b"]}

    assert header_get(headers, "content-encoding") == "gzip"
    assert header_get(headers, "X-FOO") == "a"
    assert header_get(headers, "Missing") is None
    assert header_get(None, "X-Foo") is None


def test_headers_from_pairs_keeps_order() -> None:
    headers = headers_from_pairs([("Set-Cookie", "a=1"), ("Server", "x"), ("Set-Cookie", "b=2")])

    assert list(headers) == ["Set-Cookie", "Server"]
    assert headers["Set-Cookie"] == ["a=1", "b=2"]


def test_status_line() -> None:
    assert HttpResponseMessage(status=302, reason="Found").status_line == "HTTP/1.1 302 Found"
    assert HttpResponseMessage(status=200, http_version="HTTP/2").status_line == "HTTP/2 200"


def test_preceding_response_follows_back_links() -> None:
    first = HttpResponseMessage(status=301, request=HttpRequest(method="GET", url="http://a/"))
    final = HttpResponseMessage(
        status=200,
        request=HttpRequest(method="GET", url="http://b/", response=first),
    )

    assert preceding_response(final) is first
    assert preceding_response(first) is None
    assert preceding_response(None) is None
