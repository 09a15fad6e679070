"""
Unit tests for server configuration and the command line.
"""

import json

import pytest

from lessonserver import LessonServer
from lessonserver.__main__ import build_parser, config_from_args, register_routes
from lessonserver.config import ServerConfig
from lessonserver.http.request import HTTPRequest


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_defaults_valid(self):
        config = ServerConfig()
        config.validate()

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.content_prefix == "/course/"
        assert config.asset_prefixes == ("/css/", "/js/")

    @pytest.mark.parametrize("overrides", [
        {"port": -1},
        {"port": 65536},
        {"backlog": 0},
        {"buffer_size": 100},
        {"accept_poll_interval": 0},
        {"shutdown_timeout": -1},
        {"content_prefix": "course"},
        {"asset_prefixes": ("/css",)},
        {"log_level": "LOUD"},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            ServerConfig(**overrides).validate()

    def test_port_zero_allowed(self):
        ServerConfig(port=0).validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LESSON_HOST", "127.0.0.1")
        monkeypatch.setenv("LESSON_PORT", "3000")
        monkeypatch.setenv("LESSON_DIR", "/srv/lessons")
        monkeypatch.setenv("LESSON_LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.lessons_dir == "/srv/lessons"
        assert config.static_dir is None
        assert config.log_level == "DEBUG"


class TestCommandLine:
    """Tests for argument handling in the entry point."""

    def test_flags_override_base(self):
        args = build_parser().parse_args(["--port", "9000", "--lessons", "./l", "-l", "DEBUG"])

        config = config_from_args(args, ServerConfig(host="10.0.0.1", port=1))

        assert config.port == 9000
        assert config.host == "10.0.0.1"
        assert config.lessons_dir == "./l"
        assert config.log_level == "DEBUG"

    def test_env_used_when_no_flags(self, monkeypatch):
        monkeypatch.setenv("LESSON_PORT", "4000")

        config = config_from_args(build_parser().parse_args([]))

        assert config.port == 4000

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--version"])

        assert exc.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestRegisterRoutes:
    """Tests for the site's fixed routes."""

    @pytest.fixture
    def server(self, tmp_path):
        server = LessonServer(ServerConfig(lessons_dir=str(tmp_path / "missing")))
        register_routes(server)
        return server

    def test_home(self, server):
        response = server.router.handle(HTTPRequest(method="GET", path="/"))

        assert response.status == 200
        assert response.content_type == "text/html"
        assert b"Course Modules" in response.body

    def test_health(self, server):
        response = server.router.handle(HTTPRequest(method="GET", path="/health"))
        data = json.loads(response.body)

        assert response.content_type == "application/json"
        assert data["modules"] == 4
        assert data["lessons"] == 16
        assert data["fallback"] is True

    def test_users(self, server):
        response = server.router.handle(HTTPRequest(method="GET", path="/api/users/3"))
        assert json.loads(response.body)["user"]["name"] == "Bob Johnson"
