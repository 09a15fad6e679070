"""
=============================================================================
HTML PAGES
=============================================================================

    GET /                            → HomePage        (route table)
    *   /course/<module>/<lesson>    → CoursePageHandler (content prefix)

Course pages are assembled from data that was rendered at startup:

    navigation HTML  +  <div class="lesson-content"> lesson.html </div>
                     │
                     ▼
                render_page()

Nothing on this path writes to the catalog.

=============================================================================
NOT FOUND PAGES
=============================================================================

    unknown module         → 404, "Module Not Found" page
    unknown lesson         → 404, "Lesson Not Found" page

Both are full HTML pages in the site layout, without navigation.

=============================================================================
"""

import logging
from typing import Dict

from ..content.models import Catalog
from ..content.navigation import DEFAULT_LESSON, NavigationBuilder, lesson_href
from ..http.response import HTTPResponse, ResponseBuilder
from ..http.status_codes import HTTPStatus
from .layout import render_page


logger = logging.getLogger(__name__)

MODULE_NOT_FOUND = "<h2>Module Not Found</h2><p>The requested module does not exist.</p>"
LESSON_NOT_FOUND = "<h2>Lesson Not Found</h2><p>The requested lesson does not exist.</p>"


class CoursePageHandler:
    """
    Content handler for /course/<module>/<lesson>.

        handler = CoursePageHandler(catalog, navigation)
        router.set_content_handler(handler)
    """

    def __init__(self, catalog: Catalog, navigation: NavigationBuilder, site_title: str = "HTTP Server"):
        self.catalog = catalog
        self.navigation = navigation
        self.site_title = site_title

    def __call__(self, module_name: str, lesson_name: str) -> HTTPResponse:
        return self.handle(module_name, lesson_name)

    def handle(self, module_name: str, lesson_name: str) -> HTTPResponse:
        module = self.catalog.get_module(module_name)
        if module is None:
            logger.debug(f"Unknown module: {module_name!r}")
            return self._page(HTTPStatus.NOT_FOUND, "Module Not Found", MODULE_NOT_FOUND)

        lesson = module.get_lesson(lesson_name)
        if lesson is None:
            logger.debug(f"Unknown lesson: {module_name!r}/{lesson_name!r}")
            return self._page(HTTPStatus.NOT_FOUND, "Lesson Not Found", LESSON_NOT_FOUND)

        navigation = self.navigation.render_for(module_name, lesson_name)
        content = f'{navigation}<div class="lesson-content">{lesson.html}</div>'
        title = f"{self.site_title} - {module_name} - {lesson_name}"
        return self._page(HTTPStatus.OK, title, content)

    def _page(self, status: int, title: str, content: str) -> HTTPResponse:
        html = render_page(title, content, self.site_title, self.course_href())
        return ResponseBuilder().status(status).html(html).build()

    def course_href(self) -> str:
        """Link to the first lesson of the first module."""
        for module in self.catalog:
            return lesson_href(module.name, module.first_lesson or DEFAULT_LESSON, self.navigation.content_prefix)
        return "/"


class HomePage:
    """
    Route handler for GET /: hero section plus one card per module.

    Registered with content_type="text/html".
    """

    def __init__(self, catalog: Catalog, navigation: NavigationBuilder, site_title: str = "HTTP Server"):
        self.catalog = catalog
        self.navigation = navigation
        self.site_title = site_title

    def __call__(self, body: str, headers: Dict[str, str]) -> str:
        return self.render()

    def render(self) -> str:
        prefix = self.navigation.content_prefix
        order = self.navigation.order
        start_href = "/"

        cards = []
        for number, module in enumerate(self.catalog, start=1):
            href = lesson_href(module.name, module.first_lesson or DEFAULT_LESSON, prefix)
            if number == 1:
                start_href = href
            titles = ", ".join(order.lesson_title(name) for name in module.lesson_names)
            cards.append(
                '<div class="module-item">'
                f"<h3>{number}. {module.title}</h3>"
                f"<p>{titles}</p>"
                f'<a href="{href}" class="module-link">Start Module →</a>'
                "</div>"
            )

        content = (
            '<div class="hero-section">'
            f"<h1>🚀 Learn {self.site_title} Development</h1>"
            f'<p class="hero-subtitle">{len(self.catalog)} modules, {self.catalog.lesson_count} lessons</p>'
            '<div class="hero-buttons">'
            f'<a href="{start_href}" class="btn btn-primary">Start Learning</a>'
            '<a href="/api/users" class="btn btn-secondary">View API</a>'
            "</div>"
            "</div>"
            '<div class="course-overview" id="course-overview">'
            "<h2>Course Modules</h2>"
            f'<div class="module-list">{"".join(cards)}</div>'
            "</div>"
        )
        return render_page(f"{self.site_title} Course", content, self.site_title, start_href)
