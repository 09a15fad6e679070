"""
pytest configuration and fixtures.
"""

import socket
import time
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lessonserver import LessonServer, ServerConfig
from lessonserver.content import ContentStore, CourseOrder


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /health HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with a two-line body."""
    return (
        b"POST /echo HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: text/plain\r\n"
        b"\r\n"
        b"first line\n"
        b"second line"
    )


@pytest.fixture
def course_order() -> CourseOrder:
    """A small two-module course outline."""
    return CourseOrder.from_dict({
        "modules": [
            {
                "name": "basics",
                "title": "Basics",
                "lessons": [
                    {"name": "intro", "title": "Introduction"},
                    {"name": "sockets", "title": "Sockets"},
                    {"name": "threads", "title": "Threads"},
                ],
            },
            {
                "name": "advanced",
                "title": "Advanced",
                "lessons": [
                    {"name": "tuning", "title": "Tuning"},
                ],
            },
        ]
    })


@pytest.fixture
def lessons_dir(tmp_path: Path) -> Path:
    """Lessons root laid out on disk in non-canonical order."""
    root = tmp_path / "lessons"

    basics = root / "basics"
    basics.mkdir(parents=True)
    (basics / "threads.md").write_text("# Threads\n\nOne thread per connection.\n", encoding="utf-8")
    (basics / "intro.md").write_text("# Welcome\n\n**bold** and `code` #networking\n", encoding="utf-8")
    (basics / "sockets.md").write_text("# Sockets\n\n- bind\n- listen\n", encoding="utf-8")

    advanced = root / "advanced"
    advanced.mkdir()
    (advanced / "tuning.md").write_text("# Tuning\n\n| Knob | Value |\n|---|---|\n| backlog | 10 |\n", encoding="utf-8")

    return root


@pytest.fixture
def catalog(course_order: CourseOrder, lessons_dir: Path):
    return ContentStore(course_order, lessons_dir).load()


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture
def running_server(course_order: CourseOrder, lessons_dir: Path, tmp_path: Path) -> Generator[LessonServer, None, None]:
    """A LessonServer on an ephemeral port with a few table routes."""
    static = tmp_path / "static"
    (static / "css").mkdir(parents=True)
    (static / "css" / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")

    config = ServerConfig(
        host="127.0.0.1",
        port=0,
        lessons_dir=str(lessons_dir),
        static_dir=str(static),
        accept_poll_interval=0.05,
        log_level="WARNING",
    )
    server = LessonServer(config, order=course_order)

    @server.get("/health", content_type="application/json")
    def health(body, headers):
        return '{"status": "healthy"}'

    @server.get("/slow")
    def slow(body, headers):
        time.sleep(0.3)
        return "slow"

    @server.post("/echo")
    def echo(body, headers):
        return body

    @server.get("/boom")
    def boom(body, headers):
        raise RuntimeError("handler failure")

    server.start()
    yield server
    server.stop()
    server.drain(timeout=2.0)
