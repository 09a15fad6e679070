"""
=============================================================================
CONTENT STORE
=============================================================================

Builds the Catalog once, at startup, from a directory of markdown files.

=============================================================================
DIRECTORY LAYOUT
=============================================================================

    lessons/
    ├── fundamentals/            ← Module "fundamentals"
    │   ├── introduction.md      ← Lesson "introduction"
    │   ├── sockets.md
    │   └── notes.txt            ← ignored (not .md)
    └── building-blocks/
        └── server-class.md

=============================================================================
ROOT PROBING
=============================================================================

Without an explicit directory the store tries, in order:

    1. <cwd>/lessons
    2. <cwd>/../lessons
    3. <cwd>/../../lessons
    4. lessons             (relative)

and uses the first one that is a directory. When none exists the store
returns the built-in fallback catalog: every module and lesson named in
the course order, each with placeholder HTML. That is logged as a warning;
the server still starts.

=============================================================================
ERRORS
=============================================================================

A lesson file that cannot be read or decoded is logged and left out of
its module. A module directory that cannot be listed is logged and left
out of the catalog. A root that cannot be listed is treated like a
missing one. Nothing here raises once a root has been chosen.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .markdown import MarkdownRenderer, extract_tags, extract_title
from .models import Catalog, Lesson, Module
from .ordering import CourseOrder


logger = logging.getLogger(__name__)

LESSONS_DIRNAME = "lessons"
LESSON_SUFFIX = ".md"


def placeholder_html(lesson_name: str) -> str:
    return f"<h2>{lesson_name}</h2><p>Lesson content is not available.</p>"


class ContentStore:
    """
    Loads lessons from disk into an immutable Catalog.

        store = ContentStore(CourseOrder.load())
        catalog = store.load()
    """

    def __init__(
        self,
        order: CourseOrder,
        lessons_dir: Optional[Union[str, Path]] = None,
        renderer: Optional[MarkdownRenderer] = None,
    ):
        self.order = order
        self.lessons_dir = Path(lessons_dir) if lessons_dir is not None else None
        self.renderer = renderer or MarkdownRenderer()

    # =========================================================================
    # ROOT DISCOVERY
    # =========================================================================

    def candidate_roots(self) -> List[Path]:
        if self.lessons_dir is not None:
            return [self.lessons_dir]

        cwd = Path.cwd()
        return [
            cwd / LESSONS_DIRNAME,
            cwd.parent / LESSONS_DIRNAME,
            cwd.parent.parent / LESSONS_DIRNAME,
            Path(LESSONS_DIRNAME),
        ]

    def find_root(self) -> Optional[Path]:
        for candidate in self.candidate_roots():
            if candidate.is_dir():
                return candidate
        return None

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self) -> Catalog:
        """Scan the lessons root and return the catalog. Called once."""
        root = self.find_root()
        if root is None:
            tried = ", ".join(str(path) for path in self.candidate_roots())
            logger.warning(f"No lessons directory found (tried {tried}); using built-in course outline")
            return self.fallback_catalog()

        logger.info(f"Loading lessons from {root}")

        try:
            entries = list(root.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list lessons directory {root}: {e}; using built-in course outline")
            return self.fallback_catalog()

        modules = {}
        for entry in entries:
            if not entry.is_dir():
                continue
            module = self.load_module(entry)
            if module is not None:
                modules[entry.name] = module

        ordered = [modules[name] for name in self.order.order_modules(modules)]
        catalog = Catalog(modules=tuple(ordered), root=root)

        logger.info(f"Loaded {len(catalog)} modules with {catalog.lesson_count} lessons")
        return catalog

    def load_module(self, directory: Path) -> Optional[Module]:
        """One module from one directory; lessons in canonical order. None when it can't be listed."""
        name = directory.name

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.warning(f"Skipping module {directory}: {e}")
            return None

        lessons = {}
        for entry in entries:
            if entry.suffix == LESSON_SUFFIX and entry.is_file():
                lesson = self.load_lesson(entry)
                if lesson is not None:
                    lessons[lesson.name] = lesson

        ordered = self.order.order_lessons(name, lessons)
        logger.debug(f"Module {name}: {', '.join(ordered) or '(empty)'}")

        return Module.create(
            name=name,
            title=self.order.module_title(name),
            lessons=(lessons[lesson_name] for lesson_name in ordered),
        )

    def load_lesson(self, path: Path) -> Optional[Lesson]:
        """Read, analyse and render one file. None when it can't be read."""
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping lesson {path}: {e}")
            return None

        return Lesson(
            name=path.stem,
            title=extract_title(text),
            text=text,
            html=self.renderer.render(text),
            tags=tuple(extract_tags(text)),
        )

    def fallback_catalog(self) -> Catalog:
        """Every canonical module and lesson, with placeholder content."""
        modules = [
            Module.create(
                name=module_name,
                title=self.order.module_title(module_name),
                lessons=self._placeholder_lessons(self.order.lessons_for(module_name)),
            )
            for module_name in self.order.module_names
        ]
        return Catalog(modules=tuple(modules), fallback=True)

    @staticmethod
    def _placeholder_lessons(names: Iterable[str]) -> Iterable[Lesson]:
        for name in names:
            yield Lesson(name=name, title=name, text="", html=placeholder_html(name))
