"""
Course registry: owner of the in-memory course collection.

Every change follows the same pipeline:

    build the new list -> save it through the storage adapter -> adopt it -> notify observers

If saving fails, the exception propagates and the collection keeps its previous state.

The registry is a plain object created by the caller (CLI, interactive UI,
tests); there is no module-level instance.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional, Protocol

from yogalog.config import DEFAULT_DURATION
from yogalog.errors import InvalidCollectionError
from yogalog.model import CourseRecord, new_course_id

logger = logging.getLogger(__name__)

ADDED = "added"
REMOVED = "removed"
REPLACED = "replaced"

Observer = Callable[[str, "CourseRegistry"], None]


def _is_usable_id(value: Any) -> bool:
    return isinstance(value, (int, float, str)) and not isinstance(value, bool)


class Storage(Protocol):
    def load(self) -> list[CourseRecord]: ...

    def save(self, records: Iterable[CourseRecord]) -> None: ...


class CourseRegistry:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self._courses: list[CourseRecord] = list(storage.load())
        self._observers: list[Observer] = []
        logger.debug("Loaded %d courses", len(self._courses))

    def __len__(self) -> int:
        return len(self._courses)

    @property
    def courses(self) -> tuple[CourseRecord, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._courses)

    def get(self, course_id: Any) -> Optional[CourseRecord]:
        for course in self._courses:
            if course.id == course_id:
                return course
        return None

    def subscribe(self, callback: Observer) -> None:
        self._observers.append(callback)

    def unsubscribe(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def add(
        self,
        date: str,
        start_time: str,
        end_time: str,
        location: str,
        course_name: str,
        remarks: str = "",
    ) -> CourseRecord:
        """
        Log a new class. Field contents are not validated (empty strings are fine).
        """
        course = CourseRecord(
            id=new_course_id(c.id for c in self._courses),
            date=date,
            start_time=start_time,
            end_time=end_time,
            location=location,
            course_name=course_name,
            duration=DEFAULT_DURATION,
            remarks=remarks,
        )
        self._commit(ADDED, self._courses + [course])
        logger.debug("Added course id=%s date=%s location=%s", course.id, date, location)
        return course

    def remove(self, course_id: Any) -> bool:
        """
        Remove the course with the given id. Returns False if no such course exists.
        """
        kept = [c for c in self._courses if c.id != course_id]
        if len(kept) == len(self._courses):
            logger.debug("Remove: no course with id=%s", course_id)
            return False

        self._commit(REMOVED, kept)
        logger.debug("Removed course id=%s", course_id)
        return True

    def replace_all(self, records: Any) -> None:
        """
        Replace the whole collection (used by import).

        `records` must be a list of mappings or CourseRecord objects; anything
        else raises InvalidCollectionError and leaves the collection untouched.
        Missing or duplicated ids are replaced by fresh ones.
        """
        if not isinstance(records, list):
            raise InvalidCollectionError(f"expected a list of courses, got {type(records).__name__}")

        converted: list[CourseRecord] = []
        for i, item in enumerate(records):
            if isinstance(item, CourseRecord):
                converted.append(CourseRecord.from_dict(item.to_dict()))
            elif isinstance(item, Mapping):
                converted.append(CourseRecord.from_dict(item))
            else:
                raise InvalidCollectionError(f"entry {i} is not a course object: {item!r}")

        seen: set[Any] = set()
        for course in converted:
            if not _is_usable_id(course.id) or course.id in seen:
                old = course.id
                course.id = new_course_id(list(seen) + [c.id for c in converted])
                logger.warning("Imported course had missing/duplicate id %r, assigned %s", old, course.id)
            seen.add(course.id)

        self._commit(REPLACED, converted)
        logger.debug("Replaced collection with %d courses", len(converted))

    def _commit(self, event: str, courses: list[CourseRecord]) -> None:
        # the in-memory list only changes once storage accepted the new state
        self.storage.save(courses)
        self._courses = courses
        for callback in list(self._observers):
            callback(event, self)
