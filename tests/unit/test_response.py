"""
Unit tests for Response.
"""

import pytest

from httpmessage.core.stream import ByteStream
from httpmessage.errors import InvalidInput
from httpmessage.http.response import Response
from httpmessage.http.status_codes import HTTPStatus


class TestResponseConstruction:
    """Tests for Response constructor arguments."""

    def test_defaults(self):
        response = Response()
        assert response.status_code == 200
        assert response.reason_phrase == "OK"
        assert response.protocol_version == "1.1"
        assert response.headers == {}

    def test_full_arguments(self):
        response = Response("memory:", 200, "", {"Host": "example.com"}, "1.0")

        assert isinstance(response.body, ByteStream)
        assert response.status_code == 200
        assert response.reason_phrase == "OK"
        assert response.headers == {"Host": ["example.com"]}
        assert response.protocol_version == "1.0"

    def test_header_values_trimmed(self):
        response = Response("memory:", 200, "", {"foo": " bar", "hello": "\t   world  "})
        assert response.headers == {"foo": ["bar"], "hello": ["world"]}

    def test_header_names_merged(self):
        response = Response("memory:", 200, "", {"Host": "example.com", "Foo": "bar", "foo": "baz"})
        assert response.headers == {"Host": ["example.com"], "foo": ["bar", "baz"]}

    def test_body_is_writable(self):
        response = Response("memory:")
        response.body.write(b"payload")
        assert bytes(response.body) == b"payload"

    @pytest.mark.parametrize("status_code", [1, 0, 99, 600, True, "200", 200.0])
    def test_invalid_status(self, status_code):
        with pytest.raises(InvalidInput):
            Response("memory:", status_code)

    @pytest.mark.parametrize("body", [False, "", 1, [], object()])
    def test_invalid_body(self, body):
        with pytest.raises(InvalidInput):
            Response(body)

    def test_accepts_enum(self):
        """HTTPStatus members are stored as plain ints."""
        response = Response("memory:", HTTPStatus.NOT_FOUND)
        assert response.status_code == 404
        assert type(response.status_code) is int


class TestResponseStatus:
    """Status codes and reason phrases."""

    def test_status_code(self):
        assert Response("memory:", 404).status_code == 404

    @pytest.mark.parametrize("code,phrase,expected", [
        (200, "", "OK"),
        (200, "Okay", "Okay"),
        (110, "", ""),
        (110, "foo", "foo"),
        (425, "", "Unordered Collection"),
    ])
    def test_with_status(self, code, phrase, expected):
        response = Response("memory:")
        other = response.with_status(code, phrase)

        assert other is not response
        assert other.status_code == code
        assert other.reason_phrase == expected
        assert response.status_code == 200

    @pytest.mark.parametrize("code", [1, 0, 600])
    def test_with_status_invalid(self, code):
        with pytest.raises(InvalidInput):
            Response("memory:").with_status(code)

    def test_with_status_invalid_phrase(self):
        with pytest.raises(InvalidInput):
            Response("memory:").with_status(200, None)

    def test_status_line(self):
        assert Response("memory:", 201).status_line == "HTTP/1.1 201 Created"
        assert Response("memory:", 110).status_line == "HTTP/1.1 110"

    def test_with_status_keeps_headers(self):
        response = Response("memory:").with_header("X-Id", "7").with_status(404)
        assert response.get_header_line("x-id") == "7"
