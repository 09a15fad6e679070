"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

The wire side of the lesson server: bytes in, bytes out.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   b"GET /health HTTP/1.1\r\nHost: x\r\n\r\n"                │
    │ Output:  HTTPRequest(method="GET", path="/health", ...)             │
    │ Lenient: never raises, missing parts become ""                      │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ ROUTER (router.py)                                                  │
    │ ─────────────────────────────────────────────────────────────────── │
    │ /course/<module>/<lesson>  → content handler                        │
    │ /css/*, /js/*              → asset handler                          │
    │ routes[method][path]       → handler(body, headers) → str           │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE BUILDER (response.py)                                      │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Status line + four fixed headers + body                             │
    │ Content-Length is always the exact byte length of the body          │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest, RequestParser
from .response import (
    HTTPResponse,
    ResponseBuilder,
    build_response,
    bad_request,
    not_found,
    method_not_allowed,
    internal_error,
)
from .router import Router, Route
from .status_codes import HTTPStatus, reason_phrase
from .mime_types import get_mime_type

__all__ = [
    # Request parsing
    "HTTPRequest",
    "RequestParser",

    # Response building
    "HTTPResponse",
    "ResponseBuilder",
    "build_response",
    "bad_request",
    "not_found",
    "method_not_allowed",
    "internal_error",

    # Routing
    "Router",
    "Route",

    # Status codes
    "HTTPStatus",
    "reason_phrase",

    # MIME types
    "get_mime_type",
]
