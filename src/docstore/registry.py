"""Database registry keyed by name and lifespan.

A ``Registry`` is an explicit context object owned by the caller: it maps
``(name, lifespan)`` to ``Database`` instances and holds the global store.

Two lifespans:
1. ``Lifespan.TEMP``: lives as long as the registry (dropped by ``close()``)
2. ``Lifespan.SAVE``: lives in the host's save container and is written to
   and read from save files with ``save()``/``load()``

Usage:
    from docstore.registry import Lifespan, Registry

    with Registry() as registry:
        db = registry.new_db("world", Lifespan.SAVE)
        db.make_table("User", {"uID": 1, "email": ""})
        registry.save("saves/slot1.json")

    registry = Registry()
    registry.load("saves/slot1.json")
    registry.get_db("world", "Save").get_table("User")
"""

import json
import logging
from collections.abc import Mapping, MutableMapping
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from docstore.config.models import StoreConfig
from docstore.errors import NoSuchItem
from docstore.global_store import GlobalStore
from docstore.snapshot.dump_restore import (
    ViewPredicates,
    dump_database,
    restore_database,
    validate_snapshot,
)
from docstore.snapshot.models import SNAPSHOT_VERSION
from docstore.store.database import Database

logger = logging.getLogger(__name__)

DEFAULT_SAVE_NAME = "save.json"


class Lifespan(str, Enum):
    """How long a registered database lives."""

    TEMP = "Temp"
    SAVE = "Save"


class Registry:
    """Maps database names to ``Database`` instances per lifespan.

    Args:
        save_container: Host-provided mapping that holds Save-lifespan
            databases. Defaults to a new dict.
        global_store: Store for global values. Defaults to one built from
            ``config``.
        config: Store configuration. Defaults to ``StoreConfig()``.
    """

    def __init__(
        self,
        save_container: MutableMapping[str, Database] | None = None,
        global_store: GlobalStore | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        self.config: StoreConfig = config or StoreConfig()
        self.temporary: dict[str, Database] = {}
        self.saved: MutableMapping[str, Database] = (
            save_container if save_container is not None else {}
        )
        self.global_store: GlobalStore = (
            global_store if global_store is not None else GlobalStore.from_config(self.config)
        )

    def __enter__(self) -> "Registry":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _scope(self, lifespan: Lifespan | str) -> MutableMapping[str, Database]:
        """Return the container for ``lifespan``.

        Raises:
            ValueError: If ``lifespan`` is not ``"Temp"`` or ``"Save"``.
        """
        if Lifespan(lifespan) is Lifespan.TEMP:
            return self.temporary
        return self.saved

    def new_db(self, name: str, lifespan: Lifespan | str) -> Database:
        """Create (or replace) the database ``name`` in ``lifespan``."""
        scope = self._scope(lifespan)
        db = Database(name)
        scope[name] = db
        logger.info(f"Created database '{name}' ({Lifespan(lifespan).value})")
        return db

    def delete_db(self, name: str, lifespan: Lifespan | str) -> None:
        """Drop the database ``name`` from ``lifespan``; absent is not an error."""
        scope = self._scope(lifespan)
        if scope.pop(name, None) is not None:
            logger.info(f"Deleted database '{name}' ({Lifespan(lifespan).value})")

    def get_db(self, name: str, lifespan: Lifespan | str) -> Database:
        """Return the database ``name`` in ``lifespan``.

        Raises:
            NoSuchItem: If the database doesn't exist.
        """
        db = self._scope(lifespan).get(name)
        if db is None:
            raise NoSuchItem(f"No {Lifespan(lifespan).value} database '{name}'")
        return db

    def close(self) -> None:
        """Tear down the ephemeral scope. Saved databases are kept."""
        self.temporary.clear()

    # ------------------------------------------------------------------
    # Persisted scope
    # ------------------------------------------------------------------

    def _save_path(self, path: str | Path | None) -> Path:
        if path is not None:
            return Path(path)
        return Path(self.config.save_dir) / DEFAULT_SAVE_NAME

    def save(self, path: str | Path | None = None) -> str:
        """Write every Save-lifespan database to one JSON file.

        Args:
            path: Target file. Defaults to ``<save_dir>/save.json``.

        Returns:
            Absolute path to the written file.
        """
        output_path = self._save_path(path)
        data = {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "version": SNAPSHOT_VERSION,
                "database_count": len(self.saved),
            },
            "databases": [dump_database(db) for db in self.saved.values()],
        }

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Saved {len(self.saved)} database(s) to {output_path}")
        return str(output_path.resolve())

    def load(
        self,
        path: str | Path | None = None,
        view_predicates: Mapping[str, ViewPredicates] | None = None,
    ) -> None:
        """Replace the Save-lifespan databases with those in a save file.

        Every database in the file is validated before the save container
        is touched.

        Args:
            path: Save file. Defaults to ``<save_dir>/save.json``.
            view_predicates: ``{db_name: {table_name: {view_name: predicate}}}``.

        Raises:
            FileNotFoundError: If the save file doesn't exist.
            ValueError: If the file or any database in it is invalid.
        """
        input_path = self._save_path(path)
        try:
            with open(input_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {input_path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("databases"), list):
            raise ValueError(f"{input_path} is not a docstore save file")

        for snapshot in data["databases"]:
            validation = validate_snapshot(snapshot)
            if not validation.valid:
                raise ValueError(f"Invalid save file: {'; '.join(validation.errors)}")

        view_predicates = view_predicates or {}
        restored = [
            restore_database(snapshot, view_predicates.get(snapshot["name"]))
            for snapshot in data["databases"]
        ]

        self.saved.clear()
        for db in restored:
            self.saved[db.name] = db
        logger.info(f"Loaded {len(restored)} database(s) from {input_path}")
