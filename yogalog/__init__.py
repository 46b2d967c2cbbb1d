"""
yogalog: a small personal log for taught yoga classes.

Records are kept in one JSON file and can be listed, summed up per month and
location, and exported as CSV/JSON.
"""

from pathlib import Path

__version__ = (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
