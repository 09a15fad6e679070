"""
=============================================================================
CONTENT MODEL
=============================================================================

    Catalog
      └── Module ("fundamentals", title "Fundamentals")
            ├── Lesson ("introduction", html cached)
            ├── Lesson ("sockets", html cached)
            └── ...

Everything here is frozen. Sequences are tuples and mappings are wrapped
in MappingProxyType, so once ContentStore has built a Catalog no thread
can change it, and worker threads read it without locks.

=============================================================================
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Lesson:
    """
    One markdown document.

    html is rendered once when the catalog is built and never again.
    """

    name: str
    title: str
    text: str
    html: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Module:
    """A directory of lessons, with lesson ids in display order."""

    name: str
    title: str
    lesson_names: Tuple[str, ...]
    lessons: Mapping[str, Lesson] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def create(cls, name: str, title: str, lessons: Iterable[Lesson]) -> "Module":
        """Build a module whose lesson order is the order of the iterable."""
        ordered = tuple(lessons)
        return cls(
            name=name,
            title=title,
            lesson_names=tuple(lesson.name for lesson in ordered),
            lessons=MappingProxyType({lesson.name: lesson for lesson in ordered}),
        )

    def get_lesson(self, name: str) -> Optional[Lesson]:
        return self.lessons.get(name)

    @property
    def first_lesson(self) -> Optional[str]:
        return self.lesson_names[0] if self.lesson_names else None

    def __len__(self) -> int:
        return len(self.lesson_names)


@dataclass(frozen=True)
class Catalog:
    """
    All modules, in display order.

        catalog = ContentStore(order).load()
        module = catalog.get_module("fundamentals")
        lesson = catalog.get_lesson("fundamentals", "sockets")
    """

    modules: Tuple[Module, ...] = ()
    root: Optional[Path] = None
    fallback: bool = False
    _index: Mapping[str, Module] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Frozen dataclass: assign the derived index through object.__setattr__.
        object.__setattr__(
            self, "_index", MappingProxyType({module.name: module for module in self.modules})
        )

    def get_module(self, name: str) -> Optional[Module]:
        return self._index.get(name)

    def get_lesson(self, module_name: str, lesson_name: str) -> Optional[Lesson]:
        module = self.get_module(module_name)
        if module is None:
            return None
        return module.get_lesson(lesson_name)

    @property
    def module_names(self) -> Tuple[str, ...]:
        return tuple(module.name for module in self.modules)

    @property
    def lesson_count(self) -> int:
        return sum(len(module) for module in self.modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)
