"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

All tunables of the lesson server live in one dataclass.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m lessonserver --port 3000                        │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── LESSON_PORT=3000 python -m lessonserver                   │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
WHAT IS NOT CONFIGURABLE
=============================================================================

The wire format is fixed: every response carries the same four headers and
the connection is always closed after one response. There is no request
timeout; a client that never sends keeps one worker thread busy.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class ServerConfig:
    """
    Configuration for the lesson server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, accept_poll_interval

    CONTENT
    - lessons_dir, course_file, content_prefix, site_title

    STATIC ASSETS
    - static_dir, asset_prefixes

    LIFECYCLE / LOGGING
    - shutdown_timeout, log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """
    The IP address to bind to. "0.0.0.0" listens on every interface.
    """

    port: int = 8080
    """
    The port number to listen on. 0 asks the OS for an ephemeral port;
    the real port is reported by SocketServer.address after start().
    """

    backlog: int = 10
    """
    Maximum number of queued, not yet accepted connections.
    """

    buffer_size: int = 4096
    """
    Bytes read by the single recv() per connection. Anything beyond this
    is silently truncated.
    """

    accept_poll_interval: float = 0.5
    """
    Timeout on the listening socket, so the accept loop notices stop().
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    lessons_dir: Optional[str] = None
    """
    Lessons root. None means probe ./lessons, ../lessons, ../../lessons.
    """

    course_file: Optional[str] = None
    """
    JSON file with the canonical module/lesson order and titles.
    None uses the course.json shipped inside the package.
    """

    content_prefix: str = "/course/"
    """
    Paths under this prefix are rendered from the catalog.
    """

    site_title: str = "HTTP Server"
    """
    Name shown in the navbar, page titles and navigation header.
    """

    # ─────────────────────────────────────────────────────────────────────
    # STATIC ASSETS
    # ─────────────────────────────────────────────────────────────────────

    static_dir: Optional[str] = None
    """
    Assets root. None means "static" beside the resolved lessons root,
    falling back to ./static.
    """

    asset_prefixes: Tuple[str, ...] = ("/css/", "/js/")
    """
    Path prefixes served verbatim from static_dir.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LIFECYCLE / LOGGING
    # ─────────────────────────────────────────────────────────────────────

    shutdown_timeout: float = 5.0
    """
    How long the entry point waits for in-flight workers after stop().
    """

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        LESSON_HOST         Server host (default: 0.0.0.0)
        LESSON_PORT         Server port (default: 8080)
        LESSON_DIR          Lessons root (default: probe)
        LESSON_STATIC_DIR   Assets root (default: derived)
        LESSON_COURSE_FILE  Course order JSON (default: packaged)
        LESSON_LOG_LEVEL    Logging level (default: INFO)

        =====================================================================
        """
        return cls(
            host=os.getenv("LESSON_HOST", "0.0.0.0"),
            port=int(os.getenv("LESSON_PORT", "8080")),
            lessons_dir=os.getenv("LESSON_DIR"),
            static_dir=os.getenv("LESSON_STATIC_DIR"),
            course_file=os.getenv("LESSON_COURSE_FILE"),
            log_level=os.getenv("LESSON_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values. Raises ValueError on the first
        problem found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")

        if self.accept_poll_interval <= 0:
            raise ValueError("accept_poll_interval must be > 0")

        if self.shutdown_timeout < 0:
            raise ValueError("shutdown_timeout must be >= 0")

        for prefix in (self.content_prefix, *self.asset_prefixes):
            if not (prefix.startswith("/") and prefix.endswith("/")):
                raise ValueError(
                    f"Route prefix {prefix!r} must start and end with '/'"
                )

        if self.log_level.upper() not in (
            "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
        ):
            raise ValueError(f"Unknown log level: {self.log_level}")


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# 1. One dataclass holds every setting, with per-field docstrings
# 2. from_env() reads LESSON_* variables
# 3. validate() fails fast before any socket is opened
# =============================================================================
