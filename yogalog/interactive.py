from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yogalog.config import default_export_dir
from yogalog.registry import ADDED, REMOVED, REPLACED, CourseRegistry
from yogalog.transfer import AsyncImporter, csv_filename, json_filename, write_export
from yogalog.views import (
    LIST_PAGE,
    NO_DATA,
    STATS_PAGE,
    Month,
    location_breakdown,
    month_label,
    month_options,
    render_list,
    total_hours,
)

console = Console()

NOTIFICATIONS = {
    ADDED: "[green]Course added.[/]",
    REMOVED: "[green]Course deleted.[/]",
    REPLACED: "[green]Import successful.[/]",
}


@dataclass
class Session:
    """Presentation state of one interactive run."""

    page: str = LIST_PAGE
    month: Optional[Month] = None
    today: date = field(default_factory=date.today)


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg, markup=False)


def _notify(event: str, registry: CourseRegistry) -> None:
    msg = NOTIFICATIONS.get(event)
    if msg:
        _println(msg)


def _fmt_hours(value: float) -> str:
    return f"{value:g}"


def run_interactive(registry: CourseRegistry, session: Optional[Session] = None) -> None:
    """
    Interactive menu loop with a "list" page and a "statistics" page.
    """
    session = session or Session()
    registry.subscribe(_notify)
    importer = AsyncImporter(registry)

    try:
        while True:
            _print_header(registry, session)
            if session.page == STATS_PAGE:
                _show_statistics(registry, session)
            else:
                _show_list(registry)

            choice = _prompt(
                "\n[1] Course list\n"
                "[2] Statistics\n"
                "[3] Add course\n"
                "[4] Delete course\n"
                "[5] Choose month (statistics)\n"
                "[6] Export CSV\n"
                "[7] Export JSON\n"
                "[8] Import JSON\n"
                "[0] Exit\n"
                "Select: "
            ).strip()

            if choice == "0":
                _println("Bye.")
                return

            if choice == "1":
                session.page = LIST_PAGE
            elif choice == "2":
                session.page = STATS_PAGE
            elif choice == "3":
                _flow_add(registry)
                # back to the list after a successful add
                session.page = LIST_PAGE
            elif choice == "4":
                _flow_delete(registry)
            elif choice == "5":
                _flow_choose_month(registry, session)
                session.page = STATS_PAGE
            elif choice == "6":
                _flow_export(registry, "csv", session)
            elif choice == "7":
                _flow_export(registry, "json", session)
            elif choice == "8":
                _flow_import(importer)
            else:
                _println("Invalid choice.")
    finally:
        registry.unsubscribe(_notify)
        importer.close()


def _print_header(registry: CourseRegistry, session: Session) -> None:
    _println("\n=== Yoga course log ===")
    page = "Course list" if session.page == LIST_PAGE else "Statistics"
    _println(f"Page: [bold]{page}[/] | Courses: {len(registry)}")


def _show_list(registry: CourseRegistry) -> None:
    entries = render_list(registry.courses)
    if not entries:
        _println("No courses logged yet.")
        return

    table = Table(title="Courses", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Location")
    table.add_column("Course")
    table.add_column("Remarks")
    for i, e in enumerate(entries, start=1):
        table.add_row(
            str(i),
            escape(e.date),
            escape(e.time_range),
            escape(e.location),
            f"[bold cyan]{escape(e.course_name)}[/]",
            escape(e.remarks or ""),
        )
    console.print(table)


def _selected_month(registry: CourseRegistry, session: Session) -> Month:
    options = month_options(registry.courses, today=session.today)
    if session.month in options:
        return session.month
    return options[0]


def _show_statistics(registry: CourseRegistry, session: Session) -> None:
    _println(f"Total hours: [yellow]{_fmt_hours(total_hours(registry.courses))}[/]")

    month = _selected_month(registry, session)
    stats = location_breakdown(registry.courses, *month)
    if stats is NO_DATA:
        _println(f"{month_label(month)}: no courses this month.")
        return

    table = Table(title=f"Hours per location ({month_label(month)})", box=box.SIMPLE)
    table.add_column("Location")
    table.add_column("Hours", justify="right")
    for location, hours in sorted(stats.items()):
        table.add_row(escape(location), f"[yellow]{_fmt_hours(hours)}[/]")
    console.print(table)


def _flow_add(registry: CourseRegistry) -> None:
    """
    Ask for the six form fields; duration is always 1 hour.
    """
    d = _prompt("Date (YYYY-MM-DD): ").strip()
    start = _prompt("Start time (HH:MM): ").strip()
    end = _prompt("End time (HH:MM): ").strip()
    location = _prompt("Location: ").strip()
    name = _prompt("Course name: ").strip()
    remarks = _prompt("Remarks [optional]: ").strip()

    registry.add(date=d, start_time=start, end_time=end, location=location, course_name=name, remarks=remarks)


def _flow_delete(registry: CourseRegistry) -> None:
    entries = render_list(registry.courses)
    if not entries:
        _println("No courses logged yet.")
        return

    _show_list(registry)
    pick = _prompt("Enter number to delete (or blank to cancel): ").strip()
    if not pick:
        return
    if not pick.isdigit():
        _println("Not a number.")
        return

    idx = int(pick)
    if not (1 <= idx <= len(entries)):
        _println("Out of range.")
        return

    registry.remove(entries[idx - 1].id)


def _flow_choose_month(registry: CourseRegistry, session: Session) -> None:
    options = month_options(registry.courses, today=session.today)

    _println("\nAvailable months:")
    for i, m in enumerate(options, start=1):
        _println(f"{i}) {month_label(m)}")

    pick = _prompt("Choose month number (blank = first): ").strip()
    if pick and pick.isdigit() and 1 <= int(pick) <= len(options):
        session.month = options[int(pick) - 1]
    else:
        session.month = options[0]


def _flow_export(registry: CourseRegistry, kind: str, session: Session) -> None:
    export_dir = default_export_dir()
    default_name = csv_filename(session.today) if kind == "csv" else json_filename(session.today)

    out_in = _prompt(f"Please enter desired file name, default is [{default_name}]: ").strip()
    out_path = export_dir / out_in if out_in else export_dir / default_name

    # enforce extension
    if out_path.suffix.lower() != f".{kind}":
        out_path = out_path.with_suffix(f".{kind}")

    path = write_export(kind, registry.courses, out_path)
    _println(f"\nExported {len(registry)} courses.")
    _println(f"Saved to: {escape(str(path.resolve()))}")


def _flow_import(importer: AsyncImporter) -> None:
    raw = _prompt("JSON file to import (replaces all courses) [blank = cancel]: ").strip()
    if not raw:
        return

    future = importer.start(Path(raw).expanduser())
    with console.status("Importing..."):
        result = future.result()

    # success is announced by the registry observer
    if not result.ok:
        _println(f"[red]Import failed:[/] {escape(result.error or '')}")
