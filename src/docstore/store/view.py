"""Views: live, named, predicate-filtered projections over a table.

A view caches the locators of the table entries matching its predicate.
The table rebuilds every view registered on it after each add/remove, so
the cache is always current once a write returns. Rebuilding is a full
rescan, costing O(views x entries) per write in exchange for cheap reads.

Chained views (``view.make_view``) are registered on the underlying
table, not on the parent view, and get rebuilt directly by table writes.

Usage:
    admins = users.make_view("admins", lambda r: r.role == "admin")
    admins.get_all()
    admins.select(lambda r: r.uID > 10)
    active = admins.make_view("active_admins", lambda r: r.active)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from docstore.schema.models import GlobalKey, Record
from docstore.store.predicates import Predicate, both, matches

if TYPE_CHECKING:
    from docstore.store.table import Table

logger = logging.getLogger(__name__)


class View:
    """A live filtered index over a table's keys.

    Args:
        source: Table whose entries are projected.
        name: View name, unique within ``source`` (last registration wins).
        predicate: Membership filter.
    """

    def __init__(self, source: Table, name: str, predicate: Predicate) -> None:
        self.source: Table = source
        self.name: str = name
        self.predicate: Predicate = predicate
        self._keys: list[GlobalKey] = source.select_keys(predicate)

    def __repr__(self) -> str:
        return f"View({self.name!r} on {self.source.name!r}, members={len(self._keys)})"

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def keys(self) -> list[GlobalKey]:
        """Locators of the current members."""
        return list(self._keys)

    def _rebuild(self) -> None:
        """Recompute the cached membership from the source."""
        self._keys = self.source.select_keys(self.predicate)
        logger.debug(
            f"Rebuilt view '{self.name}' on '{self.source.name}': {len(self._keys)} members"
        )

    def _members(self) -> Iterator[tuple[GlobalKey, Record]]:
        for locator in self._keys:
            yield locator, self.source.get(locator.entry_key)

    def select(self, predicate: Predicate) -> list[Record]:
        """Filter the current members further without changing the view."""
        return [record for _, record in self._members() if matches(predicate, record)]

    def select_keys(self, predicate: Predicate) -> list[GlobalKey]:
        """Like ``select`` but returns locators."""
        return [locator for locator, record in self._members() if matches(predicate, record)]

    def get_all(self) -> list[Record]:
        """Return every current member as a merged record."""
        return [record for _, record in self._members()]

    def make_view(self, name: str, predicate: Predicate) -> View:
        """Derive a view matching this view's predicate AND ``predicate``.

        The new view is registered on the underlying table. No existence
        check: a same-named view on the table is replaced.
        """
        return self.source.make_view(name, both(self.predicate, predicate))

    def delete(self) -> None:
        """Unregister this view from its table."""
        if self.source.views.get(self.name) is self:
            del self.source.views[self.name]
