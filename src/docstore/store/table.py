"""Tables: keyed shard storage with ancestor cascading.

A table owns a model, an entry store (storage key -> shard) and a set of
named views. Ancestors and descendants are held as table *names* resolved
through the database's shared table mapping.

Writes cascade upward: every ancestor validates the record against its
own model and stores its shard under an extended key (see
``docstore.schema.keypath``). Writes are two-phase: every level is
validated before any level is stored, so a mismatch at any level
leaves every table untouched.

Usage:
    users = db.make_table("User", {"uID": 1, "email": ""})
    admins = db.make_table("Admin", {"editAnything": True}, ["User"])

    admins.add("u1", {"uID": 1, "email": "a@example.com", "editAnything": True})
    admins.get("u1")            # Record with uID, email, editAnything
    users.select(lambda r: r.uID == 1)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from docstore.errors import NoSuchItem
from docstore.schema.keypath import check_key, extend, make_global_key, origin
from docstore.schema.models import GlobalKey, Record, TableSummary
from docstore.schema.validator import build_shard
from docstore.store.predicates import Predicate, matches
from docstore.store.view import View

logger = logging.getLogger(__name__)


class Table:
    """A named table of shards, optionally inheriting from ancestor tables.

    Tables are created through ``Database.make_table``, which validates the
    model and ancestor names and links descendants; the constructor does
    no checking of its own.

    Args:
        tables: The owning database's name -> Table mapping (shared).
        name: Table name, unique within the database.
        model: Field name -> representative value. Copied.
        ancestors: Names of ancestor tables, in declaration order.
    """

    def __init__(
        self,
        tables: dict[str, Table],
        name: str,
        model: Mapping[str, Any],
        ancestors: list[str] | None = None,
    ) -> None:
        self._tables: dict[str, Table] = tables
        self.name: str = name
        self.model: dict[str, Any] = dict(model)
        self.entries: dict[str, dict[str, Any]] = {}
        self.ancestors: list[str] = list(ancestors or [])
        self.descendants: list[str] = []
        self.views: dict[str, View] = {}

    def __repr__(self) -> str:
        return f"Table({self.name!r}, entries={len(self.entries)})"

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def keys(self) -> list[str]:
        """Return every storage key held by this table, in insertion order."""
        return list(self.entries)

    def _ancestor_tables(self) -> list[Table]:
        return [self._tables[name] for name in self.ancestors]

    def _require(self, storage_key: str) -> None:
        if storage_key not in self.entries:
            raise NoSuchItem(f"No entry '{storage_key}' in table '{self.name}'")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, key: str, value: Mapping[str, Any]) -> None:
        """Add (or overwrite) a record, cascading to every ancestor.

        Args:
            key: Record key. Must not contain the path delimiter.
            value: Candidate record. Fields outside a table's model are
                ignored at that level; missing fields are stored as ``None``.

        Raises:
            ReservedCharacterUsed: If ``key`` contains the delimiter.
            ModelMismatch: If any level's model disagrees with a field kind.
                Nothing is stored in that case.
        """
        check_key(key)
        writes = self._plan_add(key, value)

        for table, storage_key, shard in writes:
            table.entries[storage_key] = shard
            logger.debug(f"Stored shard '{storage_key}' in table '{table.name}'")

        self._rebuild_views(table for table, _, _ in writes)

    def _plan_add(
        self,
        storage_key: str,
        value: Mapping[str, Any],
    ) -> list[tuple[Table, str, dict[str, Any]]]:
        """Validate ``value`` at this level and every ancestor level.

        Returns the writes to perform, ancestors before this table.
        """
        shard = build_shard(self.model, value, self.name)

        writes: list[tuple[Table, str, dict[str, Any]]] = []
        for ancestor in self._ancestor_tables():
            writes.extend(ancestor._plan_add(extend(self.name, storage_key), value))
        writes.append((self, storage_key, shard))
        return writes

    def remove(self, key: str) -> None:
        """Remove a record and its shards in every ancestor.

        Raises:
            ReservedCharacterUsed: If ``key`` contains the delimiter.
            NoSuchItem: If this table holds no entry for ``key``.
        """
        check_key(key)
        self._remove(key)

    def _remove(self, storage_key: str) -> None:
        removals = self._plan_remove(storage_key)

        for table, shard_key in removals:
            del table.entries[shard_key]
            logger.debug(f"Removed shard '{shard_key}' from table '{table.name}'")

        self._rebuild_views(table for table, _ in removals)

    def _plan_remove(self, storage_key: str) -> list[tuple[Table, str]]:
        """Locate every shard of the logical record before deleting any."""
        self._require(storage_key)

        removals: list[tuple[Table, str]] = []
        for ancestor in self._ancestor_tables():
            removals.extend(ancestor._plan_remove(extend(self.name, storage_key)))
        removals.append((self, storage_key))
        return removals

    @staticmethod
    def _rebuild_views(tables: Iterable[Table]) -> None:
        # A table reached twice through a diamond is rebuilt once
        seen: set[int] = set()
        for table in tables:
            if id(table) in seen:
                continue
            seen.add(id(table))
            for view in list(table.views.values()):
                view._rebuild()

    def delete(self) -> None:
        """Delete this table, every descendant table and all shards.

        Descendants go first, so none of them ever sees a deleted ancestor.
        Removing this table's own entries cascades to the ancestors, so
        their shards for this table's records disappear as well.

        Raises:
            NoSuchItem: If this table was already deleted. A table created
                later under the same name is left untouched.
        """
        if self._tables.get(self.name) is not self:
            raise NoSuchItem(f"Table '{self.name}' has already been deleted")

        for name in list(self.descendants):
            descendant = self._tables.get(name)
            if descendant is not None:
                descendant.delete()

        self.views.clear()

        for storage_key in list(self.entries):
            if storage_key in self.entries:
                self._remove(storage_key)

        for ancestor in self._ancestor_tables():
            if self.name in ancestor.descendants:
                ancestor.descendants.remove(self.name)

        del self._tables[self.name]
        logger.info(f"Deleted table '{self.name}'")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> Record:
        """Return the logical record for ``key``, merged across ancestors.

        Shards are merged self first, then each ancestor depth-first in
        declaration order; a later shard overwrites an earlier one on a
        shared field name, so ancestor values win over this table's.

        Args:
            key: Raw key, or a storage key taken from a ``GlobalKey``.

        Raises:
            NoSuchItem: If this table holds no entry for ``key``.
        """
        self._require(key)

        merged: dict[str, Any] = {}
        for shard in self._gather(key):
            merged.update(shard)
        return Record(merged)

    def _gather(self, storage_key: str) -> list[dict[str, Any]]:
        shards: list[dict[str, Any]] = []
        own = self.entries.get(storage_key)
        if own is not None:
            shards.append(own)
        for ancestor in self._ancestor_tables():
            shards.extend(ancestor._gather(extend(self.name, storage_key)))
        return shards

    def get_key(self, key: str) -> GlobalKey:
        """Return the locator of this table's shard for ``key``.

        Raises:
            NoSuchItem: If this table holds no entry for ``key``.
        """
        self._require(key)
        return make_global_key(self.name, key)

    def _scan(self, predicate: Predicate) -> Iterator[tuple[str, Record]]:
        for storage_key in list(self.entries):
            record = self.get(storage_key)
            if matches(predicate, record):
                yield storage_key, record

    def select(self, predicate: Predicate) -> list[Record]:
        """Return merged records matching ``predicate``, in insertion order.

        A predicate that raises for a record excludes that record.
        """
        return [record for _, record in self._scan(predicate)]

    def select_keys(self, predicate: Predicate) -> list[GlobalKey]:
        """Like ``select`` but returns locators."""
        return [
            make_global_key(self.name, storage_key)
            for storage_key, _ in self._scan(predicate)
        ]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def make_view(self, name: str, predicate: Predicate) -> View:
        """Register a live view; a same-named view is silently replaced."""
        view = View(self, name, predicate)
        self.views[name] = view
        logger.debug(f"Registered view '{name}' on table '{self.name}'")
        return view

    def get_view(self, name: str) -> View:
        """Return the view registered under ``name``.

        Raises:
            NoSuchItem: If no such view exists.
        """
        view = self.views.get(name)
        if view is None:
            raise NoSuchItem(f"No view '{name}' on table '{self.name}'")
        return view

    def summary(self) -> TableSummary:
        """Summarize this table's shape and size."""
        return TableSummary(
            name=self.name,
            fields=list(self.model),
            ancestors=list(self.ancestors),
            descendants=list(self.descendants),
            entry_count=len(self.entries),
            own_entry_count=sum(1 for key in self.entries if origin(key) is None),
            views=list(self.views),
        )
