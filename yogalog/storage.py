"""
Persistent storage for the course collection.

This module manages one JSON file (by default ~/.yogalog/yogaCourses.json)
that holds the complete collection as a JSON array:

    [
      {"id": 1715331600000, "date": "2024-05-10", "startTime": "09:00", ...},
      ...
    ]

Design rationale:
- the file is read once at startup and fully rewritten after every change
- a missing or corrupted file is treated as "no courses yet"
- writes go through a temporary file + os.replace(), so readers never see
  a half-written collection
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from yogalog.config import default_data_path
from yogalog.model import CourseRecord

logger = logging.getLogger(__name__)


def _records_from_json(data: Any) -> list[CourseRecord]:
    if not isinstance(data, list):
        return []
    return [CourseRecord.from_dict(item) for item in data if isinstance(item, dict)]


def _records_to_json(records: Iterable[CourseRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)


def load_courses(path: str | Path | None = None) -> list[CourseRecord]:
    """
    Load the course collection from the storage file.

    Returns an empty list if the file does not exist or is invalid.

    This function never crashes the application if the file is missing or
    corrupted; the problem is only logged.
    """
    data_path = Path(path) if path is not None else default_data_path()

    # First run: file does not exist yet -> no courses logged
    if not data_path.exists():
        logger.debug("No course file at %s, starting empty", data_path)
        return []

    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable course file %s: %s", data_path, exc)
        return []

    if not isinstance(data, list):
        logger.warning("Ignoring course file %s: expected a JSON array", data_path)
        return []

    return _records_from_json(data)


def save_courses(records: Iterable[CourseRecord], path: str | Path | None = None) -> None:
    """
    Save the full course collection, replacing whatever was stored before.

    Creates parent directories if needed.
    """
    data_path = Path(path) if path is not None else default_data_path()
    data_path.parent.mkdir(parents=True, exist_ok=True)

    payload = _records_to_json(records)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{data_path.name}.", suffix=".tmp", dir=data_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, data_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug("Saved %s", data_path)


class JsonFileStorage:
    """
    Storage adapter bound to one JSON file.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_data_path()

    def load(self) -> list[CourseRecord]:
        return load_courses(self.path)

    def save(self, records: Iterable[CourseRecord]) -> None:
        save_courses(records, self.path)


class MemoryStorage:
    """
    Storage adapter that keeps the serialized collection in memory.

    It serializes exactly like JsonFileStorage, so a stored value that does
    not parse behaves the same way (empty collection on load).
    """

    def __init__(self, text: str | None = None) -> None:
        self.text = text

    def load(self) -> list[CourseRecord]:
        if self.text is None:
            return []
        try:
            data = json.loads(self.text)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unparseable stored courses: %s", exc)
            return []
        return _records_from_json(data)

    def save(self, records: Iterable[CourseRecord]) -> None:
        self.text = _records_to_json(records)
