"""
=============================================================================
HEALTH CHECK HANDLER
=============================================================================

    GET /health   →  200 application/json

    {
        "status": "healthy",
        "timestamp": "2026-01-01T12:00:00Z",
        "uptime_seconds": 3600,
        "version": "1.0.0",
        "course": "HTTP Server",
        "modules": 4,
        "lessons": 16
    }

There are no dependency checks: once the catalog is loaded nothing can
become unhealthy short of the process dying, so a response at all is the
signal. Counts come from the loaded catalog, which tells an operator
whether the lessons directory was found (a fallback catalog still reports
the canonical counts, but every lesson is a placeholder).

=============================================================================
"""

import json
import time
from typing import Any, Dict

from ..content.models import Catalog


class HealthHandler:
    """
    Route handler for /health.

        health = HealthHandler(catalog, version="1.0.0")
        router.get("/health", content_type="application/json")(health)
    """

    def __init__(self, catalog: Catalog, version: str = "1.0.0", course: str = "HTTP Server"):
        self.catalog = catalog
        self.version = version
        self.course = course
        self._start_time = time.time()

    def __call__(self, body: str, headers: Dict[str, str]) -> str:
        return json.dumps(self.status())

    def status(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "uptime_seconds": int(time.time() - self._start_time),
            "version": self.version,
            "course": self.course,
            "modules": len(self.catalog),
            "lessons": self.catalog.lesson_count,
            "fallback": self.catalog.fallback,
        }
