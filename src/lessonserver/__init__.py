"""
=============================================================================
LESSONSERVER - A COURSE SITE SERVED FROM RAW SOCKETS
=============================================================================

Serves a markdown course as HTML over a small HTTP/1.1 subset:

    lessons/
    ├── fundamentals/
    │   ├── introduction.md     ──►  GET /course/fundamentals/introduction
    │   └── sockets.md          ──►  GET /course/fundamentals/sockets
    └── advanced/
        └── ...

=============================================================================
PACKAGE LAYOUT
=============================================================================

    lessonserver/
    ├── config.py         ServerConfig
    ├── server.py         LessonServer, configure_logging
    ├── http/             request parsing, responses, status codes, router
    ├── content/          markdown rendering, course order, catalog, navigation
    ├── core/             listening socket, connections, worker threads
    └── handlers/         course pages, static files, home, health, sample API

=============================================================================
QUICK START
=============================================================================

    from lessonserver import LessonServer, ServerConfig

    server = LessonServer(ServerConfig(port=8080, lessons_dir="./lessons"))
    server.start()
    server.wait_for_shutdown()

Or from the command line:

    python -m lessonserver --port 8080 --lessons ./lessons

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .server import LessonServer, configure_logging
from .content import Catalog, ContentStore, CourseOrder, MarkdownRenderer
from .http import HTTPRequest, HTTPResponse, ResponseBuilder, Router, HTTPStatus

__all__ = [
    "__version__",
    "ServerConfig",
    "LessonServer",
    "configure_logging",
    "Catalog",
    "ContentStore",
    "CourseOrder",
    "MarkdownRenderer",
    "HTTPRequest",
    "HTTPResponse",
    "ResponseBuilder",
    "Router",
    "HTTPStatus",
]
