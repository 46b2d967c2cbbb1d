"""
Derived views over the course collection.

All functions here are pure: they take a sequence of CourseRecord objects
(usually registry.courses) and return plain data for the CLI / interactive
UI to print. Nothing is cached and nothing is written.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from yogalog.model import CourseRecord

Month = tuple[int, int]

LIST_PAGE = "list"
STATS_PAGE = "statistics"
PAGES = (LIST_PAGE, STATS_PAGE)


class _NoData:
    """Marker for "no course in the selected month"."""

    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA = _NoData()


@dataclass
class ListEntry:
    id: object
    date: str
    time_range: str
    location: str
    course_name: str
    remarks: Optional[str]


def _safe_str(x: object) -> str:
    return "" if x is None else str(x)


def parse_date(text: Optional[str]) -> Optional[date]:
    if not isinstance(text, str):
        return None
    try:
        return datetime.strptime(text.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def format_date(text: Optional[str]) -> str:
    """
    Display format for course dates: 2024/05/10.
    """
    d = parse_date(text)
    if d is None:
        return _safe_str(text)
    return d.strftime("%Y/%m/%d")


def format_time_range(course: CourseRecord) -> str:
    return f"{_safe_str(course.start_time)} - {_safe_str(course.end_time)}"


def sorted_courses(records: Sequence[CourseRecord]) -> list[CourseRecord]:
    """
    Newest date first. Equal dates keep their relative order; courses with
    an unreadable date go to the end.
    """
    dated = [c for c in records if parse_date(c.date) is not None]
    undated = [c for c in records if parse_date(c.date) is None]
    dated.sort(key=lambda c: parse_date(c.date), reverse=True)
    return dated + undated


def render_list(records: Sequence[CourseRecord]) -> list[ListEntry]:
    entries: list[ListEntry] = []
    for c in sorted_courses(records):
        entries.append(
            ListEntry(
                id=c.id,
                date=format_date(c.date),
                time_range=format_time_range(c),
                location=_safe_str(c.location),
                course_name=_safe_str(c.course_name),
                remarks=_safe_str(c.remarks) or None,
            )
        )
    return entries


def total_hours(records: Sequence[CourseRecord]) -> float:
    return sum(c.hours for c in records)


def month_of(course: CourseRecord) -> Optional[Month]:
    d = parse_date(course.date)
    if d is None:
        return None
    return (d.year, d.month)


def location_breakdown(records: Sequence[CourseRecord], year: int, month: int) -> dict[str, float] | _NoData:
    """
    Hours per location for one calendar month.

    Returns NO_DATA (not an empty dict) when no course falls into the month.
    """
    hours: dict[str, float] = defaultdict(int)
    found = False
    for c in records:
        if month_of(c) != (year, month):
            continue
        found = True
        # imported locations may be any JSON value; group by their text
        hours[_safe_str(c.location)] += c.hours

    if not found:
        return NO_DATA
    return dict(hours)


def month_options(records: Sequence[CourseRecord], today: Optional[date] = None) -> list[Month]:
    """
    Months to offer in the month selector, most recent first.

    The current month is always present; if no course falls into it, it is
    put in front of the list regardless of ordering.
    """
    today = today or date.today()
    months = sorted({m for m in (month_of(c) for c in records) if m is not None}, reverse=True)

    current = (today.year, today.month)
    if current not in months:
        months.insert(0, current)
    return months


def month_label(month: Month) -> str:
    year, mon = month
    return f"{year:04d}-{mon:02d}"


def parse_month(text: str) -> Month:
    """
    Parse 'YYYY-MM' into (year, month). Raises ValueError on bad input.
    """
    d = datetime.strptime(text.strip(), "%Y-%m")
    return (d.year, d.month)
