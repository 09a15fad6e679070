"""
=============================================================================
HTTP REQUEST PARSING
=============================================================================

Turns the bytes of one recv() into an HTTPRequest.

=============================================================================
A LENIENT PARSER
=============================================================================

The parser never raises. Whatever arrives on the socket produces a request
object, with missing pieces left as empty strings. Routing then degrades
naturally: an empty method or path simply matches nothing and becomes 404.

    GET /course/fundamentals/sockets HTTP/1.1\r\n     ← request line
    Host: localhost:8080\r\n                          ← header
    Accept: text/html\r\n                             ← header
    \r\n                                              ← end of headers
    name=value\n                                      ← body line(s)

Lines are split on "\n". A line that is empty or consists of a lone "\r"
ends the header section. Everything after it is the body, rebuilt line by
line with "\n" appended to each, so the body is text, not exact bytes.

=============================================================================
KNOWN LIMITATIONS
=============================================================================

- Content-Length is not used for framing. A request larger than the read
  buffer is silently truncated.
- The query string stays part of the path: "/health?x=1" is not "/health".
- Header names keep their original case. A repeated header keeps the
  value of its last occurrence.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class HTTPRequest:
    """
    Represents a parsed HTTP request.

        method:         "GET", "POST", ... ("" when missing)
        path:           Request target, query string included
        version:        "HTTP/1.1" or whatever the client sent
        headers:        Header name (verbatim case) → value
        body:           Remaining lines, each followed by "\n"
        client_address: (ip, port) of the peer, for logging
    """

    method: str = ""
    path: str = ""
    version: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    client_address: Tuple[str, int] = ("", 0)

    def get_header(self, name: str, default: str = "") -> str:
        """Exact-name header lookup."""
        return self.headers.get(name, default)


class LineCursor:
    """
    Walks the decoded request one line at a time.

    Splitting follows stream semantics: "a\nb\n" is two lines, not three,
    and a final line without a newline still counts.
    """

    def __init__(self, text: str):
        self.lines: List[str] = text.split("\n")
        if self.lines and self.lines[-1] == "":
            self.lines.pop()
        self.position = 0

    def at_end(self) -> bool:
        return self.position >= len(self.lines)

    def next_line(self) -> Optional[str]:
        if self.at_end():
            return None
        line = self.lines[self.position]
        self.position += 1
        return line


# =============================================================================
# SCAN FUNCTIONS
# =============================================================================
#
# One function per construct. Each consumes from the cursor and returns
# plain values; none of them can fail.
#
# =============================================================================

def scan_request_line(cursor: LineCursor) -> Tuple[str, str, str]:
    """
    Split the first line on whitespace into (method, path, version).

        >>> scan_request_line(LineCursor("GET / HTTP/1.1\\r\\n"))
        ('GET', '/', 'HTTP/1.1')
        >>> scan_request_line(LineCursor("GET"))
        ('GET', '', '')
    """
    line = cursor.next_line()
    if line is None:
        return "", "", ""

    parts = line.split()
    parts += [""] * (3 - len(parts))
    return parts[0], parts[1], parts[2]


def scan_header(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a header line on its first colon.

    One trailing "\\r" is removed and the value loses its leading spaces.
    Lines without a colon are not headers and yield None.
    """
    if line.endswith("\r"):
        line = line[:-1]

    name, colon, value = line.partition(":")
    if not colon:
        return None
    return name, value.lstrip(" ")


def scan_headers(cursor: LineCursor) -> Dict[str, str]:
    """Consume header lines up to and including the blank separator line."""
    headers: Dict[str, str] = {}
    while True:
        line = cursor.next_line()
        if line is None or line == "" or line == "\r":
            return headers

        header = scan_header(line)
        if header is not None:
            name, value = header
            headers[name] = value


def scan_body(cursor: LineCursor) -> str:
    """Everything left, each line with a newline appended."""
    parts = []
    while not cursor.at_end():
        parts.append(cursor.next_line() + "\n")
    return "".join(parts)


class RequestParser:
    """
    Parses raw HTTP request bytes into HTTPRequest objects.

    ==========================================================================
    PARSER ARCHITECTURE
    ==========================================================================

        Raw Request Bytes
              │
              ▼   decode utf-8 (invalid bytes replaced)
        ┌───────────────────────────────────────────────────────────────────┐
        │  LineCursor                                                       │
        │     │                                                             │
        │     ├── scan_request_line  → method, path, version               │
        │     ├── scan_headers       → {name: value}                       │
        │     └── scan_body          → "line\\n" * remaining                │
        └───────────────────────────────────────────────────────────────────┘
              │
              ▼
        HTTPRequest dataclass

    ==========================================================================
    """

    def parse(
        self,
        data: bytes,
        client_address: Tuple[str, int] = ("", 0),
    ) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest object.

        Never raises. Empty input yields a request whose fields are all
        empty strings.
        """
        text = data.decode("utf-8", errors="replace")
        cursor = LineCursor(text)

        method, path, version = scan_request_line(cursor)
        headers = scan_headers(cursor)
        body = scan_body(cursor)

        return HTTPRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
            client_address=client_address,
        )


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# HTTPRequest    Plain dataclass, nothing computed lazily
# LineCursor     Stream-style line splitting
# scan_*         One small function per construct
# RequestParser  Total: any bytes in, a request out
#
# =============================================================================
