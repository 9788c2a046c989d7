"""Databases: named containers of tables.

Usage:
    from docstore.store.database import Database

    db = Database("game")
    db.make_table("User", {"uID": 1, "email": ""})
    db.make_table("Admin", {"editAnything": True}, ["User"])

    admins = db.get_table("Admin")
    admins.add("u1", {"uID": 1, "editAnything": True})
    locator = admins.get_key("u1")
    db.get_item(locator)        # Admin's own shard, no ancestor merge
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from docstore.errors import ModelExists, ModelInvalid, ModelMissing, NoSuchItem
from docstore.schema.models import GlobalKey, Record
from docstore.schema.validator import validate_model, validate_table_name
from docstore.store.table import Table

logger = logging.getLogger(__name__)


class Database:
    """A named set of tables linked by ancestor relationships."""

    def __init__(self, name: str) -> None:
        self.name: str = name
        self.tables: dict[str, Table] = {}

    def __repr__(self) -> str:
        return f"Database({self.name!r}, tables={list(self.tables)})"

    def __contains__(self, name: object) -> bool:
        return name in self.tables

    def table_names(self) -> list[str]:
        """Return table names in creation order."""
        return list(self.tables)

    def get_item(self, locator: GlobalKey) -> Record:
        """Resolve a locator by direct lookup in the addressed table.

        Returns only that table's own shard: the path is not re-derived
        and ancestors are not merged.

        Raises:
            NoSuchItem: If the table or the entry does not exist.
        """
        table = self.get_table(locator.table_key)
        shard = table.entries.get(locator.entry_key)
        if shard is None:
            raise NoSuchItem(
                f"No entry '{locator.entry_key}' in table '{locator.table_key}'"
            )
        return Record(shard)

    def make_table(
        self,
        name: str,
        model: Mapping[str, Any],
        ancestors: Sequence[str] | None = None,
    ) -> Table:
        """Create a table, optionally inheriting from existing tables.

        Every check runs before any linkage is made, so a failed call
        leaves the database exactly as it was.

        Args:
            name: New table name.
            model: Field name -> representative value.
            ancestors: Names of existing tables whose models this table
                extends. Records added here are mirrored into each.

        Returns:
            The new ``Table``.

        Raises:
            ModelExists: If ``name`` is already in use.
            ModelInvalid: If ``model`` is not a field mapping, or the
                ancestor list is malformed, repeats a name or forms a cycle.
            ModelMissing: If a named ancestor does not exist.
            ReservedCharacterUsed: If ``name`` contains the path delimiter.
        """
        validate_table_name(name)
        if name in self.tables:
            raise ModelExists(f"Table '{name}' already exists in database '{self.name}'")
        validate_model(model)

        ancestor_names = self._check_ancestors(name, ancestors)

        table = Table(self.tables, name, model, ancestor_names)
        self.tables[name] = table
        for ancestor_name in ancestor_names:
            self.tables[ancestor_name].descendants.append(name)

        logger.info(
            f"Created table '{name}' in database '{self.name}'"
            + (f" with ancestors {ancestor_names}" if ancestor_names else "")
        )
        return table

    def _check_ancestors(self, name: str, ancestors: Sequence[str] | None) -> list[str]:
        """Validate an ancestor declaration without touching any table."""
        if ancestors is None:
            return []
        if isinstance(ancestors, str) or not isinstance(ancestors, Sequence):
            raise ModelInvalid(
                f"Ancestors of '{name}' must be a list of table names, "
                f"got {type(ancestors).__name__}"
            )

        ancestor_names = list(ancestors)
        if len(set(ancestor_names)) != len(ancestor_names):
            raise ModelInvalid(f"Ancestors of '{name}' repeat a table: {ancestor_names}")

        missing = [a for a in ancestor_names if a not in self.tables]
        if missing:
            raise ModelMissing(
                f"Ancestor table(s) missing for '{name}': {', '.join(map(str, missing))}"
            )

        if self._reaches(ancestor_names, name):
            raise ModelInvalid(f"Ancestors of '{name}' would form a cycle")

        return ancestor_names

    def _reaches(self, start: list[str], target: str) -> bool:
        """Return True if ``target`` is reachable by walking up from ``start``."""
        stack = list(start)
        visited: set[str] = set()
        while stack:
            current = stack.pop()
            if current == target:
                return True
            if current in visited:
                continue
            visited.add(current)
            table = self.tables.get(current)
            if table is not None:
                stack.extend(table.ancestors)
        return False

    def get_table(self, name: str) -> Table:
        """Return the table called ``name``.

        Raises:
            NoSuchItem: If the table doesn't exist.
        """
        table = self.tables.get(name)
        if table is None:
            raise NoSuchItem(f"No table '{name}' in database '{self.name}'")
        return table
