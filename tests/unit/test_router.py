"""
Unit tests for URL router.
"""

import pytest

from lessonserver.http.request import HTTPRequest
from lessonserver.http.response import HTTPResponse, ResponseBuilder
from lessonserver.http.router import Router


def make_request(method: str, path: str, body: str = "", headers=None) -> HTTPRequest:
    """Helper to create a request for testing."""
    return HTTPRequest(method=method, path=path, body=body, headers=headers or {})


def dummy_handler(body, headers) -> str:
    """Dummy handler for testing."""
    return "dummy"


class TestRouteTable:
    """Tests for exact (method, path) routing."""

    def test_match_exact(self):
        router = Router()
        router.add_route("GET", "/health", dummy_handler)

        assert router.match("GET", "/health").handler is dummy_handler
        assert router.match("GET", "/health/") is None
        assert router.match("POST", "/health") is None

    def test_handler_result_becomes_body(self):
        router = Router()
        router.add_route("GET", "/health", lambda body, headers: '{"ok": true}', "application/json")

        response = router.handle(make_request("GET", "/health"))

        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.body == b'{"ok": true}'

    def test_handler_receives_body_and_headers(self):
        router = Router()
        seen = {}

        @router.post("/echo")
        def echo(body, headers):
            seen["headers"] = headers
            return body

        response = router.handle(make_request("POST", "/echo", body="payload\n", headers={"X-A": "1"}))

        assert response.body == b"payload\n"
        assert seen["headers"] == {"X-A": "1"}

    def test_case_sensitive(self):
        """Test that /Health does not match /health."""
        router = Router()
        router.add_route("GET", "/health", dummy_handler)

        assert router.handle(make_request("GET", "/Health")).status == 404

    def test_unknown_path_404(self):
        router = Router()
        assert router.handle(make_request("GET", "/nope")).status == 404

    def test_wrong_method_405(self):
        router = Router()
        router.add_route("GET", "/health", dummy_handler)

        response = router.handle(make_request("POST", "/health"))

        assert response.status == 405
        assert router.get_allowed_methods("/health") == ["GET"]

    def test_last_registration_wins(self):
        router = Router()
        router.add_route("GET", "/x", lambda body, headers: "first")
        router.add_route("GET", "/x", lambda body, headers: "second")

        assert router.handle(make_request("GET", "/x")).body == b"second"
        assert len(router.routes()) == 1

    def test_handler_exception_500(self):
        router = Router()

        @router.get("/boom")
        def boom(body, headers):
            raise RuntimeError("broken")

        response = router.handle(make_request("GET", "/boom"))

        assert response.status == 500
        assert b"broken" not in response.body

    def test_empty_request_404(self):
        """Test that a request with no method or path is a 404."""
        router = Router()
        router.add_route("GET", "/", dummy_handler)

        assert router.handle(HTTPRequest()).status == 404


class TestContentPrefix:
    """Tests for the /course/<module>/<lesson> family."""

    def make_router(self):
        router = Router()
        calls = []

        def content(module, lesson) -> HTTPResponse:
            calls.append((module, lesson))
            return ResponseBuilder().html(f"{module}:{lesson}").build()

        router.set_content_handler(content)
        return router, calls

    def test_split_module_and_lesson(self):
        router, calls = self.make_router()

        response = router.handle(make_request("GET", "/course/basics/intro"))

        assert response.status == 200
        assert calls == [("basics", "intro")]

    def test_split_on_first_slash(self):
        router, calls = self.make_router()
        router.handle(make_request("GET", "/course/basics/a/b"))
        assert calls == [("basics", "a/b")]

    def test_any_method(self):
        router, calls = self.make_router()
        router.handle(make_request("POST", "/course/basics/intro"))
        assert calls == [("basics", "intro")]

    def test_missing_lesson_400(self):
        router, calls = self.make_router()

        response = router.handle(make_request("GET", "/course/basics"))

        assert response.status == 400
        assert response.body == b"Invalid course path"
        assert calls == []

    def test_prefix_checked_before_table(self):
        router, calls = self.make_router()
        router.add_route("GET", "/course/basics/intro", dummy_handler)

        router.handle(make_request("GET", "/course/basics/intro"))

        assert calls == [("basics", "intro")]

    @pytest.mark.parametrize("remainder,expected", [
        ("a/b", ("a", "b")),
        ("a/", ("a", "")),
        ("/b", ("", "b")),
        ("a", None),
        ("", None),
    ])
    def test_split_content_path(self, remainder, expected):
        assert Router.split_content_path(remainder) == expected


class TestAssetPrefixes:
    """Tests for /css/ and /js/ dispatch."""

    def test_asset_handler_gets_full_path(self):
        router = Router()
        seen = []
        router.set_asset_handler(lambda path: seen.append(path) or ResponseBuilder().build())

        router.handle(make_request("GET", "/css/style.css"))
        router.handle(make_request("GET", "/js/app.js"))
        router.handle(make_request("GET", "/img/logo.png"))

        assert seen == ["/css/style.css", "/js/app.js"]

    def test_custom_prefixes(self):
        router = Router(content_prefix="/learn/", asset_prefixes=("/assets/",))
        seen = []
        router.set_content_handler(lambda m, l: seen.append((m, l)) or ResponseBuilder().build())
        router.set_asset_handler(lambda path: seen.append(path) or ResponseBuilder().build())

        router.handle(make_request("GET", "/learn/a/b"))
        router.handle(make_request("GET", "/assets/x.css"))
        assert router.handle(make_request("GET", "/course/a/b")).status == 404

        assert seen == [("a", "b"), "/assets/x.css"]
