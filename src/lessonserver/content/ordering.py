"""
=============================================================================
CANONICAL COURSE ORDER
=============================================================================

Directory listings come back in whatever order the filesystem likes. The
course has a teaching order, kept as data in course.json:

    {
      "modules": [
        {"name": "fundamentals", "title": "Fundamentals",
         "lessons": [{"name": "introduction", "title": "Introduction"}, ...]},
        ...
      ]
    }

Names found on disk but absent from the file keep their discovery order
and go after the known ones. Titles missing from the file fall back to the
raw name.

=============================================================================
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union


logger = logging.getLogger(__name__)

DEFAULT_COURSE_FILE = Path(__file__).with_name("course.json")


def order_names(discovered: Iterable[str], canonical: Sequence[str]) -> List[str]:
    """
    Known names first in canonical order, then the rest in discovery order.

        >>> order_names(["threading", "extra", "introduction"],
        ...             ["introduction", "sockets", "threading"])
        ['introduction', 'threading', 'extra']
    """
    discovered = list(discovered)
    present = set(discovered)

    ordered = [name for name in canonical if name in present]
    known = set(ordered)
    ordered.extend(name for name in discovered if name not in known)
    return ordered


@dataclass(frozen=True)
class CourseOrder:
    """
    Canonical module order, per-module lesson order and display titles.
    """

    module_names: Tuple[str, ...] = ()
    lesson_names: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    module_titles: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    lesson_titles: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: dict) -> "CourseOrder":
        """
        Build from the parsed JSON document.

        Raises ValueError when the document does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"course order must be a JSON object, not {type(data).__name__}")

        modules = data.get("modules")
        if not isinstance(modules, list):
            raise ValueError("course order must contain a 'modules' list")

        module_names = []
        lesson_names = {}
        module_titles = {}
        lesson_titles = {}

        for entry in modules:
            try:
                name = entry["name"]
                lessons = entry.get("lessons", [])
                module_names.append(name)
                module_titles[name] = entry.get("title", name)
                lesson_names[name] = tuple(lesson["name"] for lesson in lessons)
                for lesson in lessons:
                    lesson_titles.setdefault(lesson["name"], lesson.get("title", lesson["name"]))
            except (KeyError, TypeError, AttributeError) as e:
                raise ValueError(f"Malformed course order entry {entry!r}: {e}") from e

        return cls(
            module_names=tuple(module_names),
            lesson_names=MappingProxyType(lesson_names),
            module_titles=MappingProxyType(module_titles),
            lesson_titles=MappingProxyType(lesson_titles),
        )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "CourseOrder":
        """
        Read a course order file. None loads the packaged course.json.

        I/O and JSON errors propagate; a broken order file is a startup
        failure, not something to degrade around.
        """
        path = Path(path) if path is not None else DEFAULT_COURSE_FILE
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        order = cls.from_dict(data)
        logger.debug(f"Loaded course order from {path}: {len(order.module_names)} modules")
        return order

    def lessons_for(self, module_name: str) -> Tuple[str, ...]:
        return self.lesson_names.get(module_name, ())

    def module_title(self, module_name: str) -> str:
        return self.module_titles.get(module_name, module_name)

    def lesson_title(self, lesson_name: str) -> str:
        return self.lesson_titles.get(lesson_name, lesson_name)

    def order_modules(self, discovered: Iterable[str]) -> List[str]:
        return order_names(discovered, self.module_names)

    def order_lessons(self, module_name: str, discovered: Iterable[str]) -> List[str]:
        return order_names(discovered, self.lessons_for(module_name))
