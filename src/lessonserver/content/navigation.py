"""
=============================================================================
LESSON NAVIGATION
=============================================================================

Builds the navigation block shown above every lesson:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ 🚀 HTTP Server Course          Home → Course → fundamentals         │
    ├─────────────────────────────────────────────────────────────────────┤
    │ [Fundamentals*] [Building Blocks] [Advanced Features] [Deployment]  │  tabs
    ├─────────────────────────────────────────────────────────────────────┤
    │ Module: Fundamentals                                                │
    │   • Introduction                                                    │
    │   • Socket Programming*                                             │  lessons
    │   • HTTP Protocol Basics                                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │ ← Previous                                               Next →    │  prev/next
    └─────────────────────────────────────────────────────────────────────┘

build() computes the structure; render() turns it into HTML. An unknown
module gives an empty Navigation, which renders to "".

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .models import Catalog
from .ordering import CourseOrder


# Tab target for a module without lessons.
DEFAULT_LESSON = "introduction"


@dataclass(frozen=True)
class NavItem:
    name: str
    title: str
    href: str
    active: bool = False


@dataclass(frozen=True)
class Navigation:
    module: str = ""
    module_title: str = ""
    tabs: Tuple[NavItem, ...] = ()
    lessons: Tuple[NavItem, ...] = ()
    previous: Optional[str] = None
    next: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.module


def lesson_href(module: str, lesson: str, prefix: str = "/course/") -> str:
    return f"{prefix}{module}/{lesson}"


class NavigationBuilder:
    """
    Computes tabs, lesson list and prev/next links against one Catalog.

    Display titles come from the course order; anything it doesn't name is
    shown by its raw id.
    """

    def __init__(
        self,
        catalog: Catalog,
        order: CourseOrder,
        site_title: str = "HTTP Server",
        content_prefix: str = "/course/",
    ):
        self.catalog = catalog
        self.order = order
        self.site_title = site_title
        self.content_prefix = content_prefix

    def build(self, module_name: str, lesson_name: str) -> Navigation:
        module = self.catalog.get_module(module_name)
        if module is None:
            return Navigation()

        tabs = tuple(
            NavItem(
                name=other.name,
                title=self.order.module_title(other.name),
                href=lesson_href(other.name, other.first_lesson or DEFAULT_LESSON, self.content_prefix),
                active=other.name == module_name,
            )
            for other in self.catalog
        )

        lessons = tuple(
            NavItem(
                name=name,
                title=self.order.lesson_title(name),
                href=lesson_href(module_name, name, self.content_prefix),
                active=name == lesson_name,
            )
            for name in module.lesson_names
        )

        previous, following = self.neighbours(module.lesson_names, lesson_name)

        return Navigation(
            module=module_name,
            module_title=self.order.module_title(module_name),
            tabs=tabs,
            lessons=lessons,
            previous=previous,
            next=following,
        )

    @staticmethod
    def neighbours(names: Tuple[str, ...], current: str) -> Tuple[Optional[str], Optional[str]]:
        """
        (previous, next) around current by position. Both None when current
        is not in names.

            >>> NavigationBuilder.neighbours(("a", "b", "c"), "a")
            (None, 'b')
        """
        if current not in names:
            return None, None

        index = names.index(current)
        previous = names[index - 1] if index > 0 else None
        following = names[index + 1] if index + 1 < len(names) else None
        return previous, following

    # =========================================================================
    # HTML
    # =========================================================================

    def render(self, navigation: Navigation) -> str:
        if navigation.is_empty:
            return ""

        parts = ['<div class="course-navigation">']

        # ─────────────────────────────────────────────────────────────────
        # Header with breadcrumb
        # ─────────────────────────────────────────────────────────────────
        parts.append('<div class="nav-header">')
        parts.append(f"<h2>🚀 {self.site_title} Course</h2>")
        parts.append('<div class="breadcrumb">')
        parts.append('<a href="/">Home</a> → ')
        parts.append('<a href="/#course-overview">Course</a> → ')
        parts.append(f'<span class="current-module">{navigation.module}</span>')
        parts.append("</div></div>")

        # ─────────────────────────────────────────────────────────────────
        # Module tabs
        # ─────────────────────────────────────────────────────────────────
        parts.append('<div class="module-tabs"><ul>')
        for tab in navigation.tabs:
            parts.append(self._render_item(tab))
        parts.append("</ul></div>")

        # ─────────────────────────────────────────────────────────────────
        # Lessons of the current module
        # ─────────────────────────────────────────────────────────────────
        parts.append('<div class="module-navigation">')
        parts.append(f"<h3>Module: {navigation.module_title}</h3>")
        parts.append('<ul class="lesson-list">')
        for item in navigation.lessons:
            parts.append(self._render_item(item))
        parts.append("</ul></div>")

        # ─────────────────────────────────────────────────────────────────
        # Previous / next
        # ─────────────────────────────────────────────────────────────────
        parts.append('<div class="lesson-navigation">')
        if navigation.previous:
            href = lesson_href(navigation.module, navigation.previous, self.content_prefix)
            parts.append(f'<a href="{href}" class="nav-btn prev-btn">← Previous</a>')
        if navigation.next:
            href = lesson_href(navigation.module, navigation.next, self.content_prefix)
            parts.append(f'<a href="{href}" class="nav-btn next-btn">Next →</a>')
        parts.append("</div>")

        parts.append("</div>")
        return "".join(parts)

    def render_for(self, module_name: str, lesson_name: str) -> str:
        return self.render(self.build(module_name, lesson_name))

    @staticmethod
    def _render_item(item: NavItem) -> str:
        active = ' class="active"' if item.active else ""
        return f'<li{active}><a href="{item.href}">{item.title}</a></li>'
