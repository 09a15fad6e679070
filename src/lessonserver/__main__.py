"""
=============================================================================
LESSON SERVER CLI ENTRY POINT
=============================================================================

    # Defaults (0.0.0.0:8080, lessons probed from the working directory)
    python -m lessonserver

    # Custom port and content
    python -m lessonserver --port 3000 --lessons ./lessons --static ./static

    # Different course outline
    python -m lessonserver --course ./my-course.json

Every flag falls back to its LESSON_* environment variable, then to the
ServerConfig default.

=============================================================================
SHUTDOWN
=============================================================================

    SIGINT / SIGTERM
        │
        ▼
    server.stop()          stop accepting, close the listening socket
        │
        ▼
    wait_for_shutdown()    main thread wakes up
        │
        ▼
    server.drain(t)        give in-flight connections t seconds

=============================================================================
"""

import argparse
import logging
import signal
import sys
from dataclasses import replace
from typing import List, Optional

from . import __version__
from .config import ServerConfig
from .handlers import HealthHandler, HomePage, register_user_routes
from .server import LessonServer, configure_logging


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lessonserver",
        description="Course site server: markdown lessons rendered to HTML over raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m lessonserver                          # Run with defaults
  python -m lessonserver --port 3000              # Custom port
  python -m lessonserver --lessons ./lessons      # Explicit lessons root
  python -m lessonserver --log-level DEBUG        # Verbose logging
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 0.0.0.0)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on, 0 for any free port (default: 8080)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--lessons",
        default=None,
        help="Lessons root directory (default: probe ./lessons, ../lessons, ../../lessons)"
    )

    parser.add_argument(
        "--static", "-s",
        default=None,
        help="Directory with css/ and js/ (default: 'static' beside the lessons root)"
    )

    parser.add_argument(
        "--course",
        default=None,
        help="Course outline JSON (default: the packaged course.json)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"lessonserver {__version__}"
    )

    return parser


def config_from_args(args: argparse.Namespace, base: Optional[ServerConfig] = None) -> ServerConfig:
    """Overlay the flags that were given on top of base (env by default)."""
    config = base if base is not None else ServerConfig.from_env()
    overrides = {
        "host": args.host,
        "port": args.port,
        "lessons_dir": args.lessons,
        "static_dir": args.static,
        "course_file": args.course,
        "log_level": args.log_level,
    }
    return replace(config, **{key: value for key, value in overrides.items() if value is not None})


def register_routes(server: LessonServer) -> None:
    """The site's fixed routes: home page, health check, sample API."""
    home = HomePage(server.catalog, server.navigation, server.config.site_title)
    server.add_route("GET", "/", home, "text/html")

    health = HealthHandler(server.catalog, __version__, server.config.site_title)
    server.add_route("GET", "/health", health, "application/json")

    register_user_routes(server.router)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.log_level)

    # =========================================================================
    # CREATE SERVER
    # =========================================================================

    try:
        server = LessonServer(config)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load course: {e}")
        return 1

    register_routes(server)

    # =========================================================================
    # SIGNALS
    # =========================================================================

    def on_signal(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        server.stop()

    signal.signal(signal.SIGINT, on_signal)
    signal.signal(signal.SIGTERM, on_signal)

    # =========================================================================
    # RUN
    # =========================================================================

    try:
        server.start()
    except OSError as e:
        logger.error(f"Failed to start: {e}")
        return 1

    host, port = server.address
    logger.info(f"Serving {len(server.catalog)} modules at http://{host}:{port}/")
    if logger.isEnabledFor(logging.DEBUG):
        server.router.print_routes()

    # Short waits so the main thread stays responsive to signals.
    while not server.wait_for_shutdown(timeout=1.0):
        pass

    left = server.drain(config.shutdown_timeout)
    if left:
        logger.warning(f"Exiting with {left} connection(s) still open")
    logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
