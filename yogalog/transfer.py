"""
Bulk export / import of the course collection.

Formats:
- CSV (export only): UTF-8 with BOM so spreadsheet programs detect the
  encoding, fixed header row, one row per course in collection order.
  Fields are quoted by the csv module, so commas/quotes in locations or
  remarks do not break the file.
- JSON (export + import): the collection as a pretty-printed JSON array,
  same shape as the storage file.

Import replaces the whole collection. A payload that does not parse leaves
the registry untouched and is reported through ImportResult.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from yogalog.config import CSV_HEADERS, EXPORT_LABEL
from yogalog.errors import ImportInProgressError, InvalidCollectionError
from yogalog.model import CourseRecord
from yogalog.registry import CourseRegistry

logger = logging.getLogger(__name__)

EXPORT_KINDS = ("csv", "json")


@dataclass
class ImportResult:
    ok: bool
    count: int = 0
    error: Optional[str] = None


def _cell(value: object) -> object:
    return "" if value is None else value


def export_csv(records: Sequence[CourseRecord]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for c in records:
        writer.writerow(
            [
                _cell(c.date),
                _cell(c.start_time),
                _cell(c.end_time),
                _cell(c.location),
                _cell(c.course_name),
                _cell(c.duration),
                _cell(c.remarks),
            ]
        )
    return buf.getvalue().encode("utf-8-sig")


def export_json(records: Sequence[CourseRecord]) -> bytes:
    return json.dumps([c.to_dict() for c in records], indent=2, ensure_ascii=False).encode("utf-8")


def csv_filename(today: Optional[date] = None) -> str:
    return f"{EXPORT_LABEL}_{(today or date.today()).isoformat()}.csv"


def json_filename(today: Optional[date] = None) -> str:
    return f"{EXPORT_LABEL}_{(today or date.today()).isoformat()}.json"


def write_export(kind: str, records: Sequence[CourseRecord], out: str | Path, today: Optional[date] = None) -> Path:
    """
    Write a CSV or JSON export and return the file path.

    If `out` is an existing directory, the dated default file name is used inside it.
    """
    if kind not in EXPORT_KINDS:
        raise ValueError(f"unknown export format: {kind!r}")

    out_path = Path(out)
    if out_path.is_dir():
        out_path = out_path / (csv_filename(today) if kind == "csv" else json_filename(today))

    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = export_csv(records) if kind == "csv" else export_json(records)
    out_path.write_bytes(payload)
    logger.debug("Exported %d courses as %s to %s", len(records), kind, out_path)
    return out_path


def import_json(registry: CourseRegistry, data: bytes | str) -> ImportResult:
    """
    Replace the registry's collection with the courses in a JSON document.

    Only the structure is checked (a JSON array of objects); missing fields
    are accepted as they are.
    """
    try:
        text = data.decode("utf-8-sig") if isinstance(data, bytes) else data
        parsed = json.loads(text)
        registry.replace_all(parsed)
    except (UnicodeDecodeError, json.JSONDecodeError, InvalidCollectionError) as exc:
        logger.warning("Import rejected: %s", exc)
        return ImportResult(ok=False, error=str(exc))

    return ImportResult(ok=True, count=len(registry))


def import_json_file(registry: CourseRegistry, path: str | Path) -> ImportResult:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Import file %s not readable: %s", path, exc)
        return ImportResult(ok=False, error=str(exc))
    return import_json(registry, data)


class AsyncImporter:
    """
    Runs file imports on a single background thread.

    Only one import may be pending at a time: start() raises
    ImportInProgressError while the previous future is not done yet.
    The returned future resolves to an ImportResult and never raises for
    unreadable or malformed files.
    """

    def __init__(self, registry: CourseRegistry) -> None:
        self.registry = registry
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="yogalog-import")
        self._pending: Optional[Future] = None

    @property
    def busy(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def start(self, path: str | Path) -> "Future[ImportResult]":
        if self.busy:
            raise ImportInProgressError("an import is already running")
        self._pending = self._executor.submit(import_json_file, self.registry, path)
        return self._pending

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "AsyncImporter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
