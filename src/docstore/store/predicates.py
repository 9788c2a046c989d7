"""Caller-supplied record filters.

A predicate is any callable taking a ``Record`` and returning something
truthy for a match. Selection treats a predicate that raises as a
non-match, so one faulty filter never aborts a whole scan.
"""

import logging
from collections.abc import Callable
from typing import Any

from docstore.schema.models import Record

logger = logging.getLogger(__name__)

Predicate = Callable[[Record], Any]


def matches(predicate: Predicate, record: Record) -> bool:
    """Evaluate ``predicate`` on ``record``; an exception counts as no match."""
    try:
        return bool(predicate(record))
    except Exception as e:
        logger.debug(f"Predicate raised {type(e).__name__}: {e}; excluding record")
        return False


def both(first: Predicate, second: Predicate) -> Predicate:
    """Return a predicate matching records that satisfy ``first`` and ``second``."""

    def combined(record: Record) -> bool:
        return bool(first(record)) and bool(second(record))

    return combined
