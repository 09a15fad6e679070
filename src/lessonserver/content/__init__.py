"""
=============================================================================
CONTENT PIPELINE
=============================================================================

    lessons/*.md ──► ContentStore ──► Catalog (immutable)
                        │                 │
                        ▼                 ▼
                 MarkdownRenderer   NavigationBuilder
                 (once per lesson)  (per request, read-only)

CourseOrder supplies the canonical module/lesson order and display titles.

=============================================================================
"""

from .markdown import MarkdownRenderer, extract_tags, extract_title
from .models import Catalog, Lesson, Module
from .navigation import Navigation, NavigationBuilder, NavItem
from .ordering import CourseOrder, order_names
from .store import ContentStore

__all__ = [
    "MarkdownRenderer",
    "extract_title",
    "extract_tags",
    "Catalog",
    "Lesson",
    "Module",
    "Navigation",
    "NavigationBuilder",
    "NavItem",
    "CourseOrder",
    "order_names",
    "ContentStore",
]
