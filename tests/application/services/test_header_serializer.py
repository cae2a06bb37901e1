from application.services.header_serializer import serialize_headers


class TestSerializeHeaders:
    def test_multi_value_header_is_repeated(self):
        assert serialize_headers({"X-Foo": ["a", "b"]}) == "X-Foo: a\nX-Foo: b\n"

    def test_preserves_name_and_value_order(self):
        headers = {
            "Server": ["nginx"],
            "Set-Cookie": ["a=1", "b=2", "c=3"],
            "Content-Type": ["text/html"],
        }
        assert serialize_headers(headers) == (
            "Server: nginx\n"
            "Set-Cookie: a=1\n"
            "Set-Cookie: b=2\n"
            "Set-Cookie: c=3\n"
            "Content-Type: text/html\n"
        )

    def test_values_written_verbatim(self):
        assert serialize_headers({"X-Odd": ["  a, b ;c  "]}) == "X-Odd:   a, b ;c  \n"

    def test_empty(self):
        assert serialize_headers({}) == ""

    def test_name_without_values(self):
        assert serialize_headers({"X-Empty": []}) == "X-Empty: \n"
