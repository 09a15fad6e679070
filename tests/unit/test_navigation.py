"""
Unit tests for lesson navigation.
"""

import pytest

from lessonserver.content.navigation import Navigation, NavigationBuilder, lesson_href


@pytest.fixture
def builder(catalog, course_order) -> NavigationBuilder:
    return NavigationBuilder(catalog, course_order, site_title="Test Site")


class TestNavigationBuilder:
    """Tests for tabs, lesson list and prev/next."""

    def test_tabs_link_to_first_lesson(self, builder):
        nav = builder.build("basics", "sockets")

        assert [tab.name for tab in nav.tabs] == ["basics", "advanced"]
        assert nav.tabs[0].href == "/course/basics/intro"
        assert nav.tabs[1].href == "/course/advanced/tuning"
        assert [tab.active for tab in nav.tabs] == [True, False]

    def test_lesson_list_marks_current(self, builder):
        nav = builder.build("basics", "sockets")

        assert [item.name for item in nav.lessons] == ["intro", "sockets", "threads"]
        assert [item.active for item in nav.lessons] == [False, True, False]
        assert nav.lessons[0].title == "Introduction"

    def test_middle_lesson(self, builder):
        nav = builder.build("basics", "sockets")
        assert (nav.previous, nav.next) == ("intro", "threads")

    def test_first_lesson_has_no_previous(self, builder):
        nav = builder.build("basics", "intro")
        assert nav.previous is None
        assert nav.next == "sockets"

    def test_last_lesson_has_no_next(self, builder):
        nav = builder.build("basics", "threads")
        assert nav.previous == "sockets"
        assert nav.next is None

    def test_single_lesson_module(self, builder):
        nav = builder.build("advanced", "tuning")
        assert (nav.previous, nav.next) == (None, None)

    def test_unknown_module_is_empty(self, builder):
        nav = builder.build("nope", "intro")

        assert nav == Navigation()
        assert nav.is_empty
        assert builder.render(nav) == ""

    def test_unknown_lesson_has_no_neighbours(self, builder):
        nav = builder.build("basics", "nope")

        assert not nav.is_empty
        assert (nav.previous, nav.next) == (None, None)
        assert not any(item.active for item in nav.lessons)

    def test_custom_prefix(self, catalog, course_order):
        builder = NavigationBuilder(catalog, course_order, content_prefix="/learn/")
        assert builder.build("basics", "intro").tabs[0].href == "/learn/basics/intro"


class TestNavigationHTML:
    """Tests for the rendered navigation block."""

    def test_render(self, builder):
        html = builder.render_for("basics", "sockets")

        assert "<h2>🚀 Test Site Course</h2>" in html
        assert '<span class="current-module">basics</span>' in html
        assert "<h3>Module: Basics</h3>" in html
        assert '<li class="active"><a href="/course/basics/sockets">Sockets</a></li>' in html
        assert '<a href="/course/basics/intro" class="nav-btn prev-btn">← Previous</a>' in html
        assert '<a href="/course/basics/threads" class="nav-btn next-btn">Next →</a>' in html

    def test_first_lesson_renders_no_previous_button(self, builder):
        html = builder.render_for("basics", "intro")
        assert "prev-btn" not in html
        assert "next-btn" in html

    def test_last_lesson_renders_no_next_button(self, builder):
        html = builder.render_for("basics", "threads")
        assert "prev-btn" in html
        assert "next-btn" not in html


def test_lesson_href():
    assert lesson_href("m", "l") == "/course/m/l"
    assert lesson_href("m", "l", "/x/") == "/x/m/l"
