"""
Tests for the interactive menu.

Prompts are scripted by patching _prompt; output goes into an in-memory
rich Console.
"""

import io
import os
import tempfile
import unittest
from datetime import date
from pathlib import Path
from typing import Optional
from unittest import mock

from rich.console import Console

from yogalog.interactive import Session, run_interactive
from yogalog.registry import CourseRegistry
from yogalog.storage import MemoryStorage
from yogalog.views import STATS_PAGE


class TestInteractive(unittest.TestCase):
    def setUp(self) -> None:
        self.out = io.StringIO()
        patcher = mock.patch("yogalog.interactive.console", Console(file=self.out, width=200))
        patcher.start()
        self.addCleanup(patcher.stop)
        self.registry = CourseRegistry(MemoryStorage())

    def _run(self, *answers: str, session: Optional[Session] = None) -> str:
        with mock.patch("yogalog.interactive._prompt", side_effect=list(answers)):
            run_interactive(self.registry, session)
        return self.out.getvalue()

    def test_add_then_statistics(self) -> None:
        session = Session(today=date(2024, 5, 20))
        out = self._run(
            "3", "2024-05-10", "09:00", "10:00", "Studio A", "Vinyasa", "", "2", "0", session=session
        )

        self.assertEqual(len(self.registry), 1)
        self.assertIn("Course added.", out)
        self.assertIn("Total hours: 1", out)
        self.assertIn("Hours per location (2024-05)", out)
        self.assertIn("Studio A", out)
        self.assertEqual(session.page, STATS_PAGE)

    def test_statistics_empty_month(self) -> None:
        self.registry.add("2024-05-10", "09:00", "10:00", "Studio A", "Vinyasa")
        out = self._run("2", "0", session=Session(today=date(2024, 6, 3)))
        self.assertIn("2024-06: no courses this month.", out)

    def test_choose_month(self) -> None:
        self.registry.add("2024-05-10", "09:00", "10:00", "Studio A", "Vinyasa")
        session = Session(today=date(2024, 6, 3))
        out = self._run("5", "2", "0", session=session)
        self.assertEqual(session.month, (2024, 5))
        self.assertIn("Hours per location (2024-05)", out)

    def test_delete_course(self) -> None:
        self.registry.add("2024-05-10", "09:00", "10:00", "Studio A", "Vinyasa")
        out = self._run("4", "1", "0")
        self.assertEqual(len(self.registry), 0)
        self.assertIn("Course deleted.", out)

    def test_import_failure_keeps_courses(self) -> None:
        self.registry.add("2024-05-10", "09:00", "10:00", "Studio A", "Vinyasa")
        with tempfile.TemporaryDirectory() as d:
            bad = Path(d) / "bad.json"
            bad.write_text("{{{", encoding="utf-8")
            out = self._run("8", str(bad), "0")
        self.assertIn("Import failed", out)
        self.assertEqual(len(self.registry), 1)

    def test_import_success(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            good = Path(d) / "good.json"
            good.write_text('[{"id": 1, "date": "2024-05-10", "location": "Park", "duration": 1}]', encoding="utf-8")
            out = self._run("8", str(good), "0")
        self.assertIn("Import successful.", out)
        self.assertEqual(self.registry.get(1).location, "Park")

    def test_export_csv_default_name(self) -> None:
        self.registry.add("2024-05-10", "09:00", "10:00", "Studio A", "Vinyasa")
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.dict(os.environ, {"YOGALOG_EXPORT_DIR": d}):
                self._run("6", "", "0", session=Session(today=date(2024, 5, 31)))
            path = Path(d) / "yoga_courses_2024-05-31.csv"
            self.assertTrue(path.exists())
            self.assertIn("Studio A", path.read_text(encoding="utf-8-sig"))

    def test_bracketed_text_on_list_and_statistics(self) -> None:
        self.registry.add("2024-05-10", "09:00", "10:00", "Room [/]", "Flow [/b]", "[bold]mats[/bold]")
        self.registry.add("2024-05-11", "09:00", "10:00", "Studio [red]", "Yin", "")

        out = self._run("1", "2", "0", session=Session(today=date(2024, 5, 20)))

        self.assertIn("Room [/]", out)
        self.assertIn("Flow [/b]", out)
        self.assertIn("[bold]mats[/bold]", out)
        self.assertIn("Studio [red]", out)

    def test_imported_non_text_values_render(self) -> None:
        self.registry.replace_all(
            [
                {"id": 1, "date": "2024-05-10", "location": 101, "courseName": 7, "duration": 1},
                {"id": 2, "date": "2024-05-11", "location": ["A"], "duration": 1},
                {"id": 3, "date": "2024-05-12", "location": "Studio A", "duration": 1},
            ]
        )

        out = self._run("1", "2", "0", session=Session(today=date(2024, 5, 20)))

        self.assertIn("101", out)
        self.assertIn("['A']", out)
        self.assertIn("Total hours: 3", out)


if __name__ == "__main__":
    unittest.main()
