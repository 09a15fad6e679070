"""
=============================================================================
LESSON SERVER
=============================================================================

The top-level object that ties the pieces together:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         LessonServer                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   startup (once)                                                     │
    │     CourseOrder.load()  ──►  ContentStore.load()  ──►  Catalog       │
    │                                                          │           │
    │                                     ┌────────────────────┤           │
    │                                     ▼                    ▼           │
    │                            NavigationBuilder      CoursePageHandler  │
    │                                                          │           │
    │   Router ◄── content handler, asset handler, route table ┘           │
    │     ▲                                                                │
    │     │ handle(request)                                                │
    │   _handle_connection(conn) ◄── SocketServer ◄── TCP clients          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PER-CONNECTION FLOW (worker thread)
=============================================================================

    1. read      one recv(buffer_size); empty → close silently
    2. parse     RequestParser never fails, garbage becomes empty fields
    3. route     Router.handle never raises; handler errors become 500
    4. send      sendall; a vanished client is logged, not retried
    5. close     always, via the connection's context manager

Every answered request produces one line on the "lessonserver.access"
logger.

=============================================================================
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Tuple

from .config import ServerConfig
from .content.models import Catalog
from .content.navigation import NavigationBuilder
from .content.ordering import CourseOrder
from .content.store import ContentStore
from .core.connection import Connection
from .core.socket_server import SocketServer
from .core.workers import WorkerRegistry
from .handlers.pages import CoursePageHandler
from .handlers.static import StaticFileHandler
from .http.request import RequestParser
from .http.router import Handler, Router


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("lessonserver.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger and the lessonserver logger level."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger("lessonserver").setLevel(numeric)


class LessonServer:
    """
    Lesson/content server.

        config = ServerConfig(port=8080, lessons_dir="./lessons")
        server = LessonServer(config)

        @server.get("/health", content_type="application/json")
        def health(body, headers):
            return '{"status": "healthy"}'

        server.start()
        server.wait_for_shutdown()

    Routes must be registered before start(); the route table and the
    catalog are only read once connections are being served.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        catalog: Optional[Catalog] = None,
        order: Optional[CourseOrder] = None,
    ):
        self.config = config or ServerConfig()
        self.config.validate()

        # ─────────────────────────────────────────────────────────────────
        # CONTENT (loaded once)
        # ─────────────────────────────────────────────────────────────────

        self.order = order or CourseOrder.load(self.config.course_file)
        if catalog is None:
            catalog = ContentStore(self.order, self.config.lessons_dir).load()
        self.catalog = catalog

        self.navigation = NavigationBuilder(
            self.catalog,
            self.order,
            site_title=self.config.site_title,
            content_prefix=self.config.content_prefix,
        )

        # ─────────────────────────────────────────────────────────────────
        # ROUTING
        # ─────────────────────────────────────────────────────────────────

        self.router = Router(
            content_prefix=self.config.content_prefix,
            asset_prefixes=self.config.asset_prefixes,
        )
        self.router.set_content_handler(
            CoursePageHandler(self.catalog, self.navigation, self.config.site_title)
        )
        self.router.set_asset_handler(StaticFileHandler(self.static_root()))

        # ─────────────────────────────────────────────────────────────────
        # NETWORK
        # ─────────────────────────────────────────────────────────────────

        self._parser = RequestParser()
        self.workers = WorkerRegistry()
        self._socket_server = SocketServer(self.config, self.workers)

    def static_root(self) -> Path:
        """Configured assets root, else "static" beside the lessons root."""
        if self.config.static_dir:
            return Path(self.config.static_dir)
        if self.catalog.root is not None:
            return self.catalog.root.parent / "static"
        return Path("static")

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(self, method: str, path: str, handler: Handler, content_type: str = "text/plain") -> None:
        self.router.add_route(method, path, handler, content_type)

    def get(self, path: str, content_type: str = "text/plain") -> Callable[[Handler], Handler]:
        return self.router.get(path, content_type)

    def post(self, path: str, content_type: str = "text/plain") -> Callable[[Handler], Handler]:
        return self.router.post(path, content_type)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    @property
    def address(self) -> Tuple[str, int]:
        return self._socket_server.address

    def start(self) -> None:
        """
        Start serving in the background; returns once listening.

        Raises:
            OSError: the configured address could not be bound.
        """
        self._socket_server.start(self._handle_connection)

    def stop(self) -> None:
        """Stop accepting. Idempotent; in-flight workers are not joined."""
        self._socket_server.stop()

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_for_shutdown(timeout)

    def drain(self, timeout: Optional[float] = None) -> int:
        """Wait for in-flight connections; returns how many are left."""
        return self.workers.drain(timeout)

    # =========================================================================
    # REQUEST HANDLING (worker threads)
    # =========================================================================

    def _handle_connection(self, conn: Connection) -> None:
        with conn:
            started = time.monotonic()

            raw_request = conn.read_request()
            if not raw_request:
                logger.debug(f"[{conn.id}] Empty read, closing")
                return

            request = self._parser.parse(raw_request, conn.address)
            response = self.router.handle(request)

            data = response.to_bytes()
            sent = conn.send_response(data)

            duration_ms = (time.monotonic() - started) * 1000
            access_logger.info(
                f'{conn.client_ip} "{request.method} {request.path}" '
                f"{response.status} {len(data) if sent else 0} {duration_ms:.1f}ms"
            )
