import gzip

from application.services.body_decompressor import BodyDecompressor
from domain.exceptions import DecompressionError
from domain.http_message import HttpResponseMessage
from tests.fakes import RecordingLogger


def _resp(encoding=None) -> HttpResponseMessage:
    headers = {"Content-Encoding": [encoding]} if encoding is not None else {}
    return HttpResponseMessage(status=200, headers=headers)


class TestBodyDecompressor:
    def test_gzip_round_trip(self):
        original = b"<html>hello</html>" * 10

        body, err = BodyDecompressor().decompress(_resp("gzip"), gzip.compress(original))

        assert err is None
        assert body == original

    def test_encoding_is_trimmed_and_case_insensitive(self):
        body, err = BodyDecompressor().decompress(_resp("  GZIP "), gzip.compress(b"abc"))

        assert err is None
        assert body == b"abc"

    def test_gzip_substring_match(self):
        body, err = BodyDecompressor().decompress(_resp("x-gzip"), gzip.compress(b"abc"))

        assert err is None
        assert body == b"abc"

    def test_identity_returns_input(self):
        body, err = BodyDecompressor().decompress(_resp("identity"), b"plain")

        assert err is None
        assert body == b"plain"

    def test_missing_header_returns_input(self):
        body, err = BodyDecompressor().decompress(_resp(), b"plain")

        assert err is None
        assert body == b"plain"

    def test_absent_response_returns_input(self):
        body, err = BodyDecompressor().decompress(None, b"raw")

        assert err is None
        assert body == b"raw"

    def test_corrupt_gzip_falls_back_to_original(self):
        logger = RecordingLogger()
        corrupt = b"\x1f\x8bthis is not gzip"

        body, err = BodyDecompressor(logger).decompress(_resp("gzip"), corrupt)

        assert body == corrupt
        assert isinstance(err, DecompressionError)
        assert err.cause is not None
        assert "decompress.failed" in logger.names("warning")

    def test_truncated_gzip_falls_back_to_original(self):
        truncated = gzip.compress(b"some longer body " * 20)[:-12]

        body, err = BodyDecompressor().decompress(_resp("gzip"), truncated)

        assert body == truncated
        assert isinstance(err, DecompressionError)

    def test_decode_reports_encoding_and_degraded(self):
        ok = BodyDecompressor().decode(_resp("gzip"), gzip.compress(b"x"))
        bad = BodyDecompressor().decode(_resp("gzip"), b"junk")

        assert ok.encoding == "gzip"
        assert ok.degraded is False
        assert bad.degraded is True
        assert bad.body == b"junk"
