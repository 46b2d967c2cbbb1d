"""
Exceptions raised by the yogalog core.

Only two situations are errors at all: an import payload that is not a list
of records, and a second import started while one is still pending.
Everything else (missing storage file, deleting an unknown id, ...) is
handled as a normal result.
"""

from __future__ import annotations


class YogaLogError(Exception):
    """Base class for all yogalog errors."""


class InvalidCollectionError(YogaLogError, ValueError):
    """Data handed to CourseRegistry.replace_all() is not a list of records."""


class ImportInProgressError(YogaLogError, RuntimeError):
    """An asynchronous import was requested while another one is still running."""
