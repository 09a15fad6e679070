"""
Unit tests for HTTP request parsing.
"""

import pytest

from lessonserver.http.request import (
    HTTPRequest,
    LineCursor,
    RequestParser,
    scan_header,
    scan_request_line,
)


class TestRequestParser:
    """Tests for RequestParser class."""

    def test_parse_simple_get(self, sample_get_request: bytes):
        """Test parsing a simple GET request."""
        parser = RequestParser()
        request = parser.parse(sample_get_request, ("127.0.0.1", 12345))

        assert request.method == "GET"
        assert request.path == "/health"
        assert request.version == "HTTP/1.1"
        assert request.client_address == ("127.0.0.1", 12345)

    def test_parse_headers(self, sample_get_request: bytes):
        """Test that header names keep their case and values lose leading spaces."""
        request = RequestParser().parse(sample_get_request)

        assert request.headers["Host"] == "localhost:8080"
        assert request.headers["User-Agent"] == "pytest"
        assert request.get_header("Accept") == "application/json"
        assert request.get_header("accept") == ""

    def test_parse_body_lines(self, sample_post_request: bytes):
        """Test that every remaining line gets a trailing newline."""
        request = RequestParser().parse(sample_post_request)

        assert request.method == "POST"
        assert request.body == "first line\nsecond line\n"

    def test_header_without_colon_ignored(self):
        """Test that lines without a colon are skipped."""
        request = RequestParser().parse(b"GET / HTTP/1.1\r\nnonsense\r\nX-A: 1\r\n\r\n")

        assert request.headers == {"X-A": "1"}

    def test_value_keeps_later_colons(self):
        """Test that only the first colon splits name and value."""
        request = RequestParser().parse(b"GET / HTTP/1.1\r\nHost: example.com:8080\r\n\r\n")

        assert request.headers["Host"] == "example.com:8080"

    def test_empty_input(self):
        """Test that empty input yields empty fields instead of raising."""
        request = RequestParser().parse(b"")

        assert request.method == ""
        assert request.path == ""
        assert request.version == ""
        assert request.headers == {}
        assert request.body == ""

    def test_garbage_input(self):
        """Test that binary garbage never raises."""
        request = RequestParser().parse(b"\xff\xfe\x00\x01")

        assert isinstance(request, HTTPRequest)
        assert request.path == ""

    def test_missing_fields_padded(self):
        """Test that a short request line pads with empty strings."""
        request = RequestParser().parse(b"GET\r\n\r\n")

        assert request.method == "GET"
        assert request.path == ""
        assert request.version == ""

    def test_bare_newlines(self):
        """Test parsing with \\n line endings."""
        request = RequestParser().parse(b"GET /x HTTP/1.0\nA: b\n\nbody")

        assert request.path == "/x"
        assert request.headers == {"A": "b"}
        assert request.body == "body\n"


class TestScanFunctions:
    """Tests for the individual scan functions."""

    def test_line_cursor_drops_final_empty_line(self):
        cursor = LineCursor("a\nb\n")
        assert cursor.lines == ["a", "b"]

    def test_line_cursor_exhaustion(self):
        cursor = LineCursor("only")
        assert cursor.next_line() == "only"
        assert cursor.at_end()
        assert cursor.next_line() is None

    def test_scan_request_line(self):
        assert scan_request_line(LineCursor("DELETE /a/b HTTP/1.1\r\n")) == ("DELETE", "/a/b", "HTTP/1.1")

    @pytest.mark.parametrize("line,expected", [
        ("Host: x\r", ("Host", "x")),
        ("Host:x", ("Host", "x")),
        ("Empty:", ("Empty", "")),
        ("X-Pad:   padded  ", ("X-Pad", "padded  ")),
        ("no colon here", None),
    ])
    def test_scan_header(self, line, expected):
        assert scan_header(line) == expected
