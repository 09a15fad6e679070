"""
=============================================================================
URL ROUTER
=============================================================================

Exact-path routing plus two prefix families that never touch the table.

=============================================================================
ROUTING ARCHITECTURE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Incoming Request: GET /course/fundamentals/sockets                 │
    │        │                                                             │
    │        ▼                                                             │
    │   1. content prefix  /course/<module>/<lesson>                       │
    │        │   no "/" after the module  → 400 Invalid course path        │
    │        │   otherwise                → content handler                │
    │        ▼                                                             │
    │   2. asset prefixes  /css/<file>  /js/<file>                         │
    │        │                            → asset handler                  │
    │        ▼                                                             │
    │   3. route table  routes[method][path]                               │
    │        │   hit                      → handler(body, headers)         │
    │        │   path under other method  → 405                            │
    │        │   nothing                  → 404                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Prefix checks ignore the method: POST /course/a/b renders the lesson just
like GET does.

Lookup is exact and case-sensitive. "/Health" does not match "/health",
and "/health?verbose=1" does not match either.

=============================================================================
HANDLER SHAPE
=============================================================================

Table handlers receive the request body and header mapping and return the
response body as a string. The content type is fixed at registration:

    router.add_route("GET", "/health", health, content_type="application/json")

    @router.get("/", content_type="text/html")
    def home(body, headers):
        return "<h1>Welcome</h1>"

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .request import HTTPRequest
from .response import (
    HTTPResponse,
    ResponseBuilder,
    bad_request,
    internal_error,
    method_not_allowed,
    not_found,
)
from .status_codes import HTTPStatus


logger = logging.getLogger(__name__)

# (body, headers) -> response body
Handler = Callable[[str, Dict[str, str]], str]
# (module, lesson) -> response
ContentHandler = Callable[[str, str], HTTPResponse]
# request path -> response
AssetHandler = Callable[[str], HTTPResponse]


@dataclass
class Route:
    """
    A registered (method, path) pair.

        Route(method="GET", path="/health", handler=health,
              content_type="application/json")
    """

    method: str
    path: str
    handler: Handler
    content_type: str = "text/plain"


class Router:
    """
    Two-level route table (method → path → Route) with prefix dispatch.

    Routes are registered before the server starts and never change
    afterwards, so worker threads read the table without locking.
    """

    def __init__(self, content_prefix: str = "/course/", asset_prefixes: Tuple[str, ...] = ("/css/", "/js/")):
        self.content_prefix = content_prefix
        self.asset_prefixes = tuple(asset_prefixes)
        self._routes: Dict[str, Dict[str, Route]] = {}
        self._content_handler: Optional[ContentHandler] = None
        self._asset_handler: Optional[AssetHandler] = None

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(
        self,
        method: str,
        path: str,
        handler: Handler,
        content_type: str = "text/plain",
    ) -> Route:
        """
        Register a handler for an exact (method, path).

        Registering the same pair twice replaces the earlier handler.
        """
        route = Route(method=method, path=path, handler=handler, content_type=content_type)
        by_path = self._routes.setdefault(method, {})
        if path in by_path:
            logger.debug(f"Replacing route {method} {path}")
        by_path[path] = route
        return route

    def route(self, method: str, path: str, content_type: str = "text/plain") -> Callable[[Handler], Handler]:
        """Decorator form of add_route()."""
        def decorator(handler: Handler) -> Handler:
            self.add_route(method, path, handler, content_type)
            return handler
        return decorator

    def get(self, path: str, content_type: str = "text/plain") -> Callable[[Handler], Handler]:
        return self.route("GET", path, content_type)

    def post(self, path: str, content_type: str = "text/plain") -> Callable[[Handler], Handler]:
        return self.route("POST", path, content_type)

    def set_content_handler(self, handler: ContentHandler) -> None:
        """Handler for /<content_prefix>/<module>/<lesson>."""
        self._content_handler = handler

    def set_asset_handler(self, handler: AssetHandler) -> None:
        """Handler for paths under any asset prefix."""
        self._asset_handler = handler

    # =========================================================================
    # ROUTE MATCHING
    # =========================================================================

    def match(self, method: str, path: str) -> Optional[Route]:
        """Exact table lookup. Prefix families are not consulted here."""
        return self._routes.get(method, {}).get(path)

    def get_allowed_methods(self, path: str) -> List[str]:
        """Methods under which this exact path is registered."""
        return sorted(
            method for method, by_path in self._routes.items()
            if path in by_path
        )

    @staticmethod
    def split_content_path(remainder: str) -> Optional[Tuple[str, str]]:
        """
        Split "module/lesson" on its first "/".

            >>> Router.split_content_path("fundamentals/sockets")
            ('fundamentals', 'sockets')
            >>> Router.split_content_path("a/b/c")
            ('a', 'b/c')
            >>> Router.split_content_path("fundamentals") is None
            True
        """
        module, slash, lesson = remainder.partition("/")
        if not slash:
            return None
        return module, lesson

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a request to the appropriate handler.

        Never raises: a failing handler is logged and answered with 500.
        """
        try:
            return self._dispatch(request)
        except Exception:
            logger.exception(f"Handler failed for {request.method} {request.path}")
            return internal_error()

    def _dispatch(self, request: HTTPRequest) -> HTTPResponse:
        path = request.path

        # ─────────────────────────────────────────────────────────────────
        # 1. Content prefix
        # ─────────────────────────────────────────────────────────────────
        if self._content_handler and path.startswith(self.content_prefix):
            parts = self.split_content_path(path[len(self.content_prefix):])
            if parts is None:
                return bad_request("Invalid course path")
            return self._content_handler(*parts)

        # ─────────────────────────────────────────────────────────────────
        # 2. Asset prefixes
        # ─────────────────────────────────────────────────────────────────
        if self._asset_handler and path.startswith(self.asset_prefixes):
            return self._asset_handler(path)

        # ─────────────────────────────────────────────────────────────────
        # 3. Route table
        # ─────────────────────────────────────────────────────────────────
        route = self.match(request.method, path)
        if route is not None:
            body = route.handler(request.body, request.headers)
            return (ResponseBuilder()
                .status(HTTPStatus.OK)
                .content_type(route.content_type)
                .body(body)
                .build())

        if self.get_allowed_methods(path):
            return method_not_allowed()

        return not_found()

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def routes(self) -> List[Route]:
        """All registered table routes, grouped by method."""
        return [
            route
            for by_path in self._routes.values()
            for route in by_path.values()
        ]

    def print_routes(self) -> None:
        """
        Print all registered routes (useful for debugging).

            Registered Routes:
            ------------------------------------------------------------
              GET      /
              GET      /health
              *        /course/<module>/<lesson>
            ------------------------------------------------------------
        """
        print("\nRegistered Routes:")
        print("-" * 60)
        for route in self.routes():
            print(f"  {route.method:8} {route.path}")
        if self._content_handler:
            print(f"  {'*':8} {self.content_prefix}<module>/<lesson>")
        if self._asset_handler:
            for prefix in self.asset_prefixes:
                print(f"  {'*':8} {prefix}<file>")
        print("-" * 60)
