"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Every response the server writes has the same shape:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                      ← status line           │
    │    Content-Type: text/html\r\n                                      │
    │    Content-Length: 1432\r\n                 ← bytes, not chars      │
    │    Access-Control-Allow-Origin: *\r\n                               │
    │    Connection: close\r\n                                            │
    │    \r\n                                                              │
    │    <!DOCTYPE html>...                       ← body, verbatim        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The four headers are fixed, in that order. No other header is ever added:
there is no keep-alive, no Date, no Server header. Content-Length is the
length of the encoded body, so a body containing "é" or emoji counts the
UTF-8 bytes.

=============================================================================
BUILDER PATTERN
=============================================================================

    response = (ResponseBuilder()
        .status(HTTPStatus.OK)
        .html("<h1>Hello</h1>")
        .build())

    # or, for a one-off write:
    data = build_response(404, "text/plain", "Not Found")

=============================================================================
"""

import json
from dataclasses import dataclass
from typing import Any, Union

from .status_codes import HTTPStatus, reason_phrase


@dataclass
class HTTPResponse:
    """
    A response ready to be serialized.

    status is a plain int so that codes outside HTTPStatus still serialize;
    their reason phrase falls back to "Internal Server Error".
    """

    status: int = HTTPStatus.OK
    content_type: str = "text/plain"
    body: bytes = b""
    version: str = "HTTP/1.1"

    def __post_init__(self):
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def status_line(self) -> str:
        """
        HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE, e.g. "HTTP/1.1 200 OK"
        """
        return f"{self.version} {int(self.status)} {reason_phrase(self.status)}"

    @property
    def headers(self) -> dict:
        """The fixed header block, in wire order."""
        return {
            "Content-Type": self.content_type,
            "Content-Length": str(len(self.body)),
            "Access-Control-Allow-Origin": "*",
            "Connection": "close",
        }

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

            HTTP/1.1 404 Not Found\\r\\n
            Content-Type: text/plain\\r\\n
            Content-Length: 9\\r\\n
            Access-Control-Allow-Origin: *\\r\\n
            Connection: close\\r\\n
            \\r\\n
            Not Found
        """
        lines = [self.status_line]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse.

        ResponseBuilder().status(404).text("Not Found").to_bytes()
    """

    def __init__(self):
        self._status: int = HTTPStatus.OK
        self._content_type: str = "text/plain"
        self._body: bytes = b""

    def status(self, status: int) -> "ResponseBuilder":
        self._status = status
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        self._content_type = content_type
        return self

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Set the raw body. Strings are UTF-8 encoded."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body
        return self

    def text(self, text: str) -> "ResponseBuilder":
        return self.content_type("text/plain").body(text)

    def html(self, html: str) -> "ResponseBuilder":
        return self.content_type("text/html").body(html)

    def json(self, data: Any, pretty: bool = False) -> "ResponseBuilder":
        """
        Serialize data to JSON and set it as the body.

        Non-ASCII text is kept as UTF-8 rather than escaped.
        """
        indent = 2 if pretty else None
        payload = json.dumps(data, indent=indent, ensure_ascii=False)
        return self.content_type("application/json").body(payload)

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            content_type=self._content_type,
            body=self._body,
        )

    def to_bytes(self) -> bytes:
        return self.build().to_bytes()


def build_response(status: int, content_type: str, body: Union[str, bytes]) -> bytes:
    """
    Serialize (status, content type, body) straight to wire bytes.

        >>> build_response(200, "text/plain", "hi")[:17]
        b'HTTP/1.1 200 OK\\r\\n'
    """
    return (ResponseBuilder()
        .status(status)
        .content_type(content_type)
        .body(body)
        .to_bytes())


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Error responses carry a short plain-text message, never JSON.
#
# =============================================================================

def bad_request(message: str = "Bad Request") -> HTTPResponse:
    return ResponseBuilder().status(HTTPStatus.BAD_REQUEST).text(message).build()


def not_found(message: str = "Not Found") -> HTTPResponse:
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).text(message).build()


def method_not_allowed(message: str = "Method Not Allowed") -> HTTPResponse:
    return ResponseBuilder().status(HTTPStatus.METHOD_NOT_ALLOWED).text(message).build()


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """
    Used when a handler raised. The message stays generic; the traceback
    goes to the log, never to the client.
    """
    return ResponseBuilder().status(HTTPStatus.INTERNAL_SERVER_ERROR).text(message).build()
