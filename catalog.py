# catalog.py
# Key-indexed course stores. All backends share one interface so the planner
# and loader never care which structure sits underneath.
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError

from course_parser import CourseRecord, normalize
from db_utils import save_course, fetch_course, fetch_all_courses, count_courses, clear_courses

logger = logging.getLogger(__name__)

BACKENDS = ("list", "map", "tree", "sql")


class CatalogError(Exception):
    """Base class for catalog problems."""


class CatalogUpdateError(CatalogError):
    """The backing store rejected a reload. Its previous contents are kept."""


class Catalog(ABC):
    """Course lookup keyed by normalized identifier."""

    @abstractmethod
    def insert_or_replace(self, record: CourseRecord):
        ...

    @abstractmethod
    def find(self, identifier: str) -> CourseRecord | None:
        """Return the course for the identifier (normalized first), or None."""

    @abstractmethod
    def all_sorted(self) -> list[CourseRecord]:
        """Return every course ordered by ascending identifier."""

    @abstractmethod
    def clear(self):
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def replace_all(self, records: Iterable[CourseRecord]):
        """Swap in new contents. Subclasses build the replacement before it becomes visible."""
        self.clear()
        for record in records:
            self.insert_or_replace(record)

    def __contains__(self, identifier) -> bool:
        return self.find(identifier) is not None


# ──────────────────────────────────────────────────────────────
# In-memory backends
# ──────────────────────────────────────────────────────────────

class ListCatalog(Catalog):
    """Plain list. Linear search, sorted on demand."""

    def __init__(self):
        self._courses: list[CourseRecord] = []

    def insert_or_replace(self, record: CourseRecord):
        for idx, existing in enumerate(self._courses):
            if existing.identifier == record.identifier:
                self._courses[idx] = record
                return
        self._courses.append(record)

    def find(self, identifier: str) -> CourseRecord | None:
        key = normalize(identifier)
        for course in self._courses:
            if course.identifier == key:
                return course
        return None

    def all_sorted(self) -> list[CourseRecord]:
        return sorted(self._courses, key=lambda c: c.identifier)

    def clear(self):
        self._courses = []

    def replace_all(self, records: Iterable[CourseRecord]):
        fresh = ListCatalog()
        for record in records:
            fresh.insert_or_replace(record)
        self._courses = fresh._courses

    def __len__(self) -> int:
        return len(self._courses)


class MapCatalog(Catalog):
    """Dict keyed by identifier. Sorting happens on the keys when listing."""

    def __init__(self):
        self._courses: dict[str, CourseRecord] = {}

    def insert_or_replace(self, record: CourseRecord):
        self._courses[record.identifier] = record

    def find(self, identifier: str) -> CourseRecord | None:
        return self._courses.get(normalize(identifier))

    def all_sorted(self) -> list[CourseRecord]:
        return [self._courses[key] for key in sorted(self._courses)]

    def clear(self):
        self._courses = {}

    def replace_all(self, records: Iterable[CourseRecord]):
        fresh = {}
        for record in records:
            fresh[record.identifier] = record
        self._courses = fresh

    def __len__(self) -> int:
        return len(self._courses)


@dataclass
class _Node:
    record: CourseRecord
    left: int = -1   # arena index of left child, -1 = none
    right: int = -1


class TreeCatalog(Catalog):
    """Unbalanced binary search tree stored in a node arena.

    Children are referenced by index into ``self._nodes`` instead of object
    pointers. Every walk is a loop, so a file already sorted by course id
    (the worst case, a linked list) can't hit the recursion limit.
    """

    def __init__(self):
        self._nodes: list[_Node] = []

    @property
    def _root(self) -> int:
        return 0 if self._nodes else -1

    def insert_or_replace(self, record: CourseRecord):
        key = record.identifier
        if not self._nodes:
            self._nodes.append(_Node(record))
            return

        idx = self._root
        while True:
            node = self._nodes[idx]
            if key == node.record.identifier:
                node.record = record  # duplicate key overwrites
                return
            if key < node.record.identifier:
                if node.left == -1:
                    node.left = len(self._nodes)
                    self._nodes.append(_Node(record))
                    return
                idx = node.left
            else:
                if node.right == -1:
                    node.right = len(self._nodes)
                    self._nodes.append(_Node(record))
                    return
                idx = node.right

    def find(self, identifier: str) -> CourseRecord | None:
        key = normalize(identifier)
        idx = self._root
        while idx != -1:
            node = self._nodes[idx]
            if key == node.record.identifier:
                return node.record
            idx = node.left if key < node.record.identifier else node.right
        return None

    def all_sorted(self) -> list[CourseRecord]:
        # In-order traversal with an explicit stack
        out = []
        stack = []
        idx = self._root
        while stack or idx != -1:
            while idx != -1:
                stack.append(idx)
                idx = self._nodes[idx].left
            idx = stack.pop()
            out.append(self._nodes[idx].record)
            idx = self._nodes[idx].right
        return out

    def height(self) -> int:
        """Number of levels in the tree (0 when empty)."""
        if not self._nodes:
            return 0
        best = 0
        stack = [(self._root, 1)]
        while stack:
            idx, depth = stack.pop()
            best = max(best, depth)
            node = self._nodes[idx]
            if node.left != -1:
                stack.append((node.left, depth + 1))
            if node.right != -1:
                stack.append((node.right, depth + 1))
        return best

    def clear(self):
        # Dropping the arena releases every node at once, no recursive teardown
        self._nodes = []

    def replace_all(self, records: Iterable[CourseRecord]):
        fresh = TreeCatalog()
        for record in records:
            fresh.insert_or_replace(record)
        self._nodes = fresh._nodes

    def __len__(self) -> int:
        return len(self._nodes)


# ──────────────────────────────────────────────────────────────
# Database backend
# ──────────────────────────────────────────────────────────────

class SqlCatalog(Catalog):
    """Courses live in the courses/prerequisites tables; every call is one short session."""

    def __init__(self, session_factory):
        self.Session = session_factory

    @contextmanager
    def _session(self):
        """Short-lived session; database failures surface as CatalogError."""
        with self.Session() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                session.rollback()
                raise CatalogError(f"Database error: {e}") from e

    def insert_or_replace(self, record: CourseRecord):
        with self._session() as session:
            save_course(session, record)
            session.commit()

    def find(self, identifier: str) -> CourseRecord | None:
        with self._session() as session:
            return fetch_course(session, normalize(identifier))

    def all_sorted(self) -> list[CourseRecord]:
        with self._session() as session:
            return fetch_all_courses(session)

    def clear(self):
        with self._session() as session:
            clear_courses(session)
            session.commit()

    def replace_all(self, records: Iterable[CourseRecord]):
        # One transaction: readers see either the old catalog or the new one
        try:
            with self._session() as session:
                clear_courses(session)
                for record in records:
                    save_course(session, record)
                session.commit()
        except CatalogError as e:
            logger.exception("Catalog reload failed, previous contents kept")
            raise CatalogUpdateError(str(e)) from e.__cause__

    def __len__(self) -> int:
        with self._session() as session:
            return count_courses(session)


def make_catalog(backend: str, session_factory=None) -> Catalog:
    """Build a catalog by backend name ('list', 'map', 'tree' or 'sql')."""
    backend = (backend or "").strip().lower()
    if backend == "list":
        return ListCatalog()
    if backend == "map":
        return MapCatalog()
    if backend == "tree":
        return TreeCatalog()
    if backend == "sql":
        if session_factory is None:
            raise ValueError("The sql backend needs a session factory")
        return SqlCatalog(session_factory)
    raise ValueError(f"Unknown catalog backend: {backend!r} (expected one of {', '.join(BACKENDS)})")
