"""
Central data model: one logged yoga class.

The JSON representation (storage file and JSON export) uses the field names

    id, date, startTime, endTime, location, courseName, duration, remarks

while Python code uses snake_case attributes. Conversion happens only in
CourseRecord.from_dict() / CourseRecord.to_dict().

Records coming from storage or an import are taken as they are: a missing
field stays missing (attribute None) and is not written back, and unknown
keys are carried along in `extra` so nothing gets lost on the next save.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

# JSON key -> attribute name, in export order
FIELD_MAP = {
    "id": "id",
    "date": "date",
    "startTime": "start_time",
    "endTime": "end_time",
    "location": "location",
    "courseName": "course_name",
    "duration": "duration",
    "remarks": "remarks",
}


@dataclass
class CourseRecord:
    """
    Represents one taught class as stored in the course collection.
    """

    id: Optional[int]
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    course_name: Optional[str] = None
    duration: Any = None
    remarks: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CourseRecord":
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            attr = FIELD_MAP.get(key)
            if attr is None:
                extra[key] = value
            else:
                known[attr] = value
        known.setdefault("id", None)
        return cls(extra=extra, **known)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, attr in FIELD_MAP.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        out.update(self.extra)
        return out

    @property
    def hours(self) -> float:
        """
        Duration as a number; missing or non-numeric durations count as 0.
        """
        if isinstance(self.duration, bool):
            return 0
        if isinstance(self.duration, (int, float)):
            return self.duration
        return 0


def new_course_id(existing_ids: Iterable[Any], now_ms: Optional[int] = None) -> int:
    """
    Return a fresh id: the current time in milliseconds, bumped past the
    largest existing integer id so two adds in the same millisecond never clash.
    """
    candidate = int(time.time() * 1000) if now_ms is None else now_ms
    numeric = [x for x in existing_ids if isinstance(x, int) and not isinstance(x, bool)]
    if numeric:
        candidate = max(candidate, max(numeric) + 1)
    return candidate
