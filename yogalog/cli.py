"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    yogalog add --date 2024-05-10 --start 09:00 --end 10:00 --location "Studio A" --course Vinyasa
    yogalog list
    yogalog remove <id>
    yogalog total
    yogalog stats --month 2024-05
    yogalog months
    yogalog export csv [--out PATH]
    yogalog import <file.json>
    yogalog interactive

Note:
- The interactive UI lives in yogalog/interactive.py
- This CLI is intentionally simple and prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path

from yogalog.config import default_data_path, default_export_dir, default_log_level, setup_logging
from yogalog.registry import CourseRegistry
from yogalog.storage import JsonFileStorage
from yogalog.transfer import EXPORT_KINDS, csv_filename, import_json_file, json_filename, write_export
from yogalog.views import (
    NO_DATA,
    location_breakdown,
    month_label,
    month_options,
    parse_month,
    render_list,
    total_hours,
)

logger = logging.getLogger(__name__)


def _fmt_hours(value: float) -> str:
    return f"{value:g}"


def _cmd_add(args: argparse.Namespace, registry: CourseRegistry) -> int:
    """
    Log a new class. Fields are taken as given (no validation).
    """
    course = registry.add(
        date=args.date,
        start_time=args.start,
        end_time=args.end,
        location=args.location,
        course_name=args.course,
        remarks=args.remarks,
    )
    print(f"Course added: {course.id} ({len(registry)} courses)")
    return 0


def _cmd_remove(args: argparse.Namespace, registry: CourseRegistry) -> int:
    if not registry.remove(args.course_id):
        print(f"Not found: {args.course_id}")
        return 1
    print(f"Course deleted: {args.course_id} ({len(registry)} courses)")
    return 0


def _cmd_list(args: argparse.Namespace, registry: CourseRegistry) -> int:
    entries = render_list(registry.courses)
    if not entries:
        print("No courses logged yet.")
        return 0

    for e in entries:
        line = f"{e.id} | {e.date} | {e.time_range} | {e.location} | {e.course_name}"
        if e.remarks:
            line += f" | {e.remarks}"
        print(line)
    return 0


def _cmd_total(args: argparse.Namespace, registry: CourseRegistry) -> int:
    print(f"Total hours: {_fmt_hours(total_hours(registry.courses))}")
    return 0


def _cmd_stats(args: argparse.Namespace, registry: CourseRegistry) -> int:
    """
    Print hours per location for one month (default: current month).
    """
    if args.month:
        try:
            year, month = parse_month(args.month)
        except ValueError:
            print(f"Invalid month '{args.month}', expected YYYY-MM.")
            return 1
    else:
        today = date.today()
        year, month = today.year, today.month

    print(f"Month: {month_label((year, month))}")
    stats = location_breakdown(registry.courses, year, month)
    if stats is NO_DATA:
        print("No courses this month.")
        return 0

    for location, hours in sorted(stats.items()):
        print(f"{location or '(no location)'}: {_fmt_hours(hours)} h")
    return 0


def _cmd_months(args: argparse.Namespace, registry: CourseRegistry) -> int:
    for m in month_options(registry.courses):
        print(month_label(m))
    return 0


def _cmd_export(args: argparse.Namespace, registry: CourseRegistry) -> int:
    if args.out:
        out = Path(args.out).expanduser()
    else:
        out = default_export_dir() / (csv_filename() if args.kind == "csv" else json_filename())
    path = write_export(args.kind, registry.courses, out)
    print(f"Exported {len(registry)} courses to: {path}")
    return 0


def _cmd_import(args: argparse.Namespace, registry: CourseRegistry) -> int:
    result = import_json_file(registry, args.file)
    if not result.ok:
        print(f"Import failed: {result.error}")
        return 1
    print(f"Import successful: {result.count} courses")
    return 0


def _course_id(text: str) -> int | str:
    """
    Ids created by yogalog are integers; imported data may use strings.
    """
    text = text.strip()
    return int(text) if text.lstrip("-").isdigit() else text


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="yogalog", description="Yoga course log")
    parser.add_argument("--data", type=str, default=None, help="Course data file (default: ~/.yogalog/yogaCourses.json)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_add = sub.add_parser("add", help="Log a class")
    p_add.add_argument("--date", default="", help="Date (YYYY-MM-DD)")
    p_add.add_argument("--start", default="", help="Start time (e.g. 09:00)")
    p_add.add_argument("--end", default="", help="End time (e.g. 10:00)")
    p_add.add_argument("--location", default="", help="Venue")
    p_add.add_argument("--course", default="", help="Course name")
    p_add.add_argument("--remarks", default="", help="Optional note")

    p_remove = sub.add_parser("remove", help="Delete a class by id")
    p_remove.add_argument("course_id", type=_course_id, help="Course id (see 'list')")

    sub.add_parser("list", help="List classes, newest first")
    sub.add_parser("total", help="Show total hours taught")

    p_stats = sub.add_parser("stats", help="Hours per location for a month")
    p_stats.add_argument("--month", type=str, default=None, help="Month (YYYY-MM), default: current month")

    sub.add_parser("months", help="List selectable months")

    p_export = sub.add_parser("export", help="Export all classes")
    p_export.add_argument("kind", choices=EXPORT_KINDS, help="Export format")
    p_export.add_argument("--out", type=str, default=None, help="Output file or directory (default: ~/Downloads)")

    p_import = sub.add_parser("import", help="Replace all classes with a JSON export")
    p_import.add_argument("file", type=str, help="JSON file")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


COMMANDS = {
    "add": _cmd_add,
    "remove": _cmd_remove,
    "list": _cmd_list,
    "total": _cmd_total,
    "stats": _cmd_stats,
    "months": _cmd_months,
    "export": _cmd_export,
    "import": _cmd_import,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or default_log_level())

    data_path = Path(args.data).expanduser() if args.data else default_data_path()
    registry = CourseRegistry(JsonFileStorage(data_path))

    if args.command == "interactive":
        from yogalog.interactive import run_interactive

        run_interactive(registry)
        raise SystemExit(0)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args, registry))
    except OSError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}")
        raise SystemExit(1)
