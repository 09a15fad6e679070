"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The lesson server only ever answers with five status codes:

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  200   │ OK                    - page, asset or API payload        │
    │  400   │ Bad Request           - /course/ path without a lesson    │
    │  404   │ Not Found             - unknown path, asset or lesson     │
    │  405   │ Method Not Allowed    - path known under another method   │
    │  500   │ Internal Server Error - a handler raised                  │
    └────────┴───────────────────────────────────────────────────────────┘

Any other integer handed to the response layer is still written to the
status line as-is, but with the reason phrase "Internal Server Error".

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the server.

    IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """The reason phrase used in the status line."""
        return _STATUS_PHRASES[self]

    @property
    def is_error(self) -> bool:
        return self >= 400


# =============================================================================
# REASON PHRASES
# =============================================================================
#
# HTTP/1.1 404 Not Found
#          ─── ─────────
#           │      │
#           │      └── Reason phrase (from this dict)
#           └───────── Status code
#
# =============================================================================

_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}

DEFAULT_PHRASE = "Internal Server Error"


def reason_phrase(code: int) -> str:
    """
    Reason phrase for any integer status code.

        >>> reason_phrase(200)
        'OK'
        >>> reason_phrase(418)
        'Internal Server Error'
    """
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return DEFAULT_PHRASE
