"""
Unit tests for the derived views (list, totals, monthly breakdown, month selector).
"""

import unittest
from datetime import date

from yogalog.model import CourseRecord
from yogalog.views import (
    NO_DATA,
    format_date,
    location_breakdown,
    month_label,
    month_options,
    parse_month,
    render_list,
    sorted_courses,
    total_hours,
)


def _course(course_id, d, location="Studio A", remarks="", duration=1) -> CourseRecord:
    return CourseRecord(
        id=course_id,
        date=d,
        start_time="09:00",
        end_time="10:00",
        location=location,
        course_name="Vinyasa",
        duration=duration,
        remarks=remarks,
    )


class TestListView(unittest.TestCase):
    def test_newest_first(self) -> None:
        courses = [_course(1, "2024-04-01"), _course(2, "2024-05-10"), _course(3, "2023-12-24")]
        self.assertEqual([c.id for c in sorted_courses(courses)], [2, 1, 3])

    def test_ties_keep_order_and_bad_dates_last(self) -> None:
        courses = [_course(1, "oops"), _course(2, "2024-05-10"), _course(3, "2024-05-10")]
        self.assertEqual([c.id for c in sorted_courses(courses)], [2, 3, 1])

    def test_render_list_entry(self) -> None:
        entries = render_list([_course(1, "2024-05-10"), _course(2, "2024-05-11", remarks="bring mats")])
        self.assertEqual(entries[0].date, "2024/05/11")
        self.assertEqual(entries[0].remarks, "bring mats")
        self.assertEqual(entries[1].time_range, "09:00 - 10:00")
        self.assertIsNone(entries[1].remarks)

    def test_format_date_passthrough(self) -> None:
        self.assertEqual(format_date("2024-05-10"), "2024/05/10")
        self.assertEqual(format_date("someday"), "someday")
        self.assertEqual(format_date(None), "")


class TestStatistics(unittest.TestCase):
    def test_total_hours_counts_all_months(self) -> None:
        courses = [_course(1, "2024-05-10"), _course(2, "2023-01-01"), _course(3, "2024-05-11", duration=None)]
        self.assertEqual(total_hours(courses), 2)
        self.assertEqual(total_hours([]), 0)

    def test_breakdown_groups_by_location(self) -> None:
        courses = [
            _course(1, "2024-05-10", "Studio A"),
            _course(2, "2024-05-12", "Studio B"),
            _course(3, "2024-05-20", "Studio A"),
            _course(4, "2024-06-01", "Studio B"),
        ]
        self.assertEqual(location_breakdown(courses, 2024, 5), {"Studio A": 2, "Studio B": 1})

    def test_breakdown_empty_month(self) -> None:
        courses = [_course(1, "2024-05-10")]
        self.assertIs(location_breakdown(courses, 2024, 7), NO_DATA)
        self.assertIs(location_breakdown([], 2024, 5), NO_DATA)

    def test_month_options_sorted_and_unique(self) -> None:
        courses = [_course(1, "2024-03-02"), _course(2, "2024-05-10"), _course(3, "2024-05-11")]
        self.assertEqual(month_options(courses, today=date(2024, 5, 20)), [(2024, 5), (2024, 3)])

    def test_month_options_current_month_in_front(self) -> None:
        courses = [_course(1, "2024-08-02"), _course(2, "2024-03-10")]
        self.assertEqual(
            month_options(courses, today=date(2024, 6, 1)), [(2024, 6), (2024, 8), (2024, 3)]
        )

    def test_month_options_empty_collection(self) -> None:
        self.assertEqual(month_options([], today=date(2026, 10, 19)), [(2026, 10)])
        today = date.today()
        self.assertIn((today.year, today.month), month_options([]))

    def test_month_helpers(self) -> None:
        self.assertEqual(month_label((2024, 5)), "2024-05")
        self.assertEqual(parse_month("2024-05"), (2024, 5))
        with self.assertRaises(ValueError):
            parse_month("May 2024")


class TestImportedOddValues(unittest.TestCase):
    """
    Imported data is taken as-is, so fields may hold any JSON value.
    """

    def setUp(self) -> None:
        self.courses = [
            CourseRecord.from_dict({"id": 1, "date": "2024-05-10", "location": ["A"], "duration": 1}),
            CourseRecord.from_dict({"id": 2, "date": "2024-05-11", "location": 101, "courseName": 7, "duration": 1}),
            CourseRecord.from_dict({"id": 3, "date": "2024-05-12", "location": "Studio A", "duration": 1}),
            CourseRecord.from_dict({"id": 4, "date": 20240513, "startTime": 900, "remarks": 0}),
        ]

    def test_render_list_returns_text(self) -> None:
        entries = render_list(self.courses)
        self.assertEqual([e.id for e in entries], [3, 2, 1, 4])
        for e in entries:
            for value in (e.date, e.time_range, e.location, e.course_name):
                self.assertIsInstance(value, str)
        self.assertEqual(entries[1].location, "101")
        self.assertEqual(entries[1].course_name, "7")
        self.assertEqual(entries[3].date, "20240513")
        self.assertEqual(entries[3].time_range, "900 - ")
        self.assertEqual(entries[3].remarks, "0")

    def test_breakdown_groups_by_text(self) -> None:
        stats = location_breakdown(self.courses, 2024, 5)
        self.assertEqual(stats, {"['A']": 1, "101": 1, "Studio A": 1})
        # keys are comparable, so callers can sort them
        self.assertEqual(sorted(stats), ["101", "Studio A", "['A']"])


if __name__ == "__main__":
    unittest.main()
