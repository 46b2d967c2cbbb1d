"""
Runtime configuration: file locations, export naming and logging.

Paths are returned by functions instead of module constants so that tests
(and the --data CLI option) can point the application somewhere else.

Environment overrides:

    YOGALOG_DATA_FILE   JSON file holding the whole course collection
    YOGALOG_EXPORT_DIR  default directory for CSV/JSON exports
    YOGALOG_LOG_LEVEL   logging level (DEBUG, INFO, WARNING, ...)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

DATA_FILE_NAME = "yogaCourses.json"

# prefix of exported files: yoga_courses_2024-05-10.csv
EXPORT_LABEL = "yoga_courses"

# fixed column order of the CSV export
CSV_HEADERS = ["date", "start time", "end time", "location", "course name", "duration", "remarks"]

# every class logged through the form counts as one hour
DEFAULT_DURATION = 1

LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def default_data_path() -> Path:
    """
    Return the path of the JSON file that stores the course collection.
    """
    override = os.getenv("YOGALOG_DATA_FILE", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".yogalog" / DATA_FILE_NAME


def default_export_dir() -> Path:
    """
    Return the directory exports are written to when no path is given.

    Defaults to the user's Downloads folder (works on Windows/macOS/Linux).
    """
    override = os.getenv("YOGALOG_EXPORT_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / "Downloads"


def default_log_level() -> str:
    return os.getenv("YOGALOG_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"


def setup_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the CLI / interactive session.

    Unknown level names fall back to WARNING instead of crashing the CLI.
    """
    name = (level or default_log_level()).upper()
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
