"""Dump and restore databases as JSON-compatible snapshots.

Restoring is how a persisted database gets its behavior back: the
snapshot's plain data is rebuilt into full ``Database``/``Table``/``View``
objects. Tables are re-created through ``Database.make_table``, so every
construction check runs again; shards are written back at their storage
keys without re-cascading.

Usage:
    from docstore.snapshot.dump_restore import (
        dump_database,
        restore_database,
        save_snapshot,
        load_snapshot,
        validate_snapshot,
    )

    path = save_snapshot(db, "saves/game.json")

    db = load_snapshot(
        path,
        view_predicates={"User": {"admins": lambda r: r.role == "admin"}},
    )
"""

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from docstore.errors import ModelInvalid, ModelMismatch, ReservedCharacterUsed
from docstore.schema.models import SnapshotValidationResult
from docstore.schema.validator import validate_member, validate_model, validate_table_name
from docstore.snapshot.models import (
    SNAPSHOT_VERSION,
    DatabaseSnapshot,
    SnapshotMetadata,
    TableSnapshot,
)
from docstore.store.database import Database
from docstore.store.predicates import Predicate

logger = logging.getLogger(__name__)

ViewPredicates = Mapping[str, Mapping[str, Predicate]]


def dump_database(db: Database) -> dict[str, Any]:
    """Capture ``db`` as a JSON-compatible dict.

    Tables are emitted in creation order, which always puts an ancestor
    before its descendants (an ancestor must exist to be named).

    Args:
        db: Database to capture.

    Returns:
        Dict with ``metadata``, ``name`` and ``tables`` keys.
    """
    tables = [
        TableSnapshot(
            name=table.name,
            model=dict(table.model),
            ancestors=list(table.ancestors),
            entries={key: dict(shard) for key, shard in table.entries.items()},
            views=list(table.views),
        )
        for table in db.tables.values()
    ]
    snapshot = DatabaseSnapshot(
        metadata=SnapshotMetadata(
            created_at=datetime.now().isoformat(),
            version=SNAPSHOT_VERSION,
            table_count=len(tables),
        ),
        name=db.name,
        tables=tables,
    )
    return snapshot.model_dump()


def restore_database(
    data: dict[str, Any],
    view_predicates: ViewPredicates | None = None,
) -> Database:
    """Rebuild a database from a snapshot dict.

    Args:
        data: Snapshot as produced by ``dump_database``.
        view_predicates: ``{table_name: {view_name: predicate}}``. Views
            listed in the snapshot without a predicate here are skipped
            with a warning.

    Returns:
        The restored ``Database``.

    Raises:
        ValueError: If the snapshot fails validation.
    """
    validation = validate_snapshot(data)
    if not validation.valid:
        raise ValueError(f"Invalid snapshot: {'; '.join(validation.errors)}")

    snapshot = DatabaseSnapshot.model_validate(data)
    view_predicates = view_predicates or {}

    db = Database(snapshot.name)
    for table_snapshot in snapshot.tables:
        table = db.make_table(
            table_snapshot.name, table_snapshot.model, table_snapshot.ancestors
        )
        for storage_key, shard in table_snapshot.entries.items():
            table.entries[storage_key] = {
                field_name: shard.get(field_name) for field_name in table.model
            }

    # Views last, so their initial scan sees every table's shards
    for table_snapshot in snapshot.tables:
        table = db.get_table(table_snapshot.name)
        predicates = view_predicates.get(table_snapshot.name, {})
        for view_name in table_snapshot.views:
            predicate = predicates.get(view_name)
            if predicate is None:
                logger.warning(
                    f"No predicate supplied for view '{view_name}' on "
                    f"'{table_snapshot.name}'; view not restored"
                )
                continue
            table.make_view(view_name, predicate)

    logger.info(
        f"Restored database '{db.name}' ({len(db.tables)} tables)"
    )
    return db


def validate_snapshot(data: Any) -> SnapshotValidationResult:
    """Validate snapshot structure and data integrity.

    Checks the snapshot shape and version, that every table name and
    model would be accepted by ``Database.make_table``, that each table's
    ancestors are distinct, known and listed before it, and that every
    shard matches its table's model.

    Args:
        data: Parsed snapshot (normally a dict loaded from JSON).

    Returns:
        ``SnapshotValidationResult`` with ``errors`` and ``warnings``.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(data, dict):
        errors.append("Snapshot must be a JSON object")
        return SnapshotValidationResult(valid=False, errors=errors)

    for key in ("metadata", "name", "tables"):
        if key not in data:
            errors.append(f"Missing required key: {key}")
    if errors:
        return SnapshotValidationResult(valid=False, errors=errors)

    try:
        snapshot = DatabaseSnapshot.model_validate(data)
    except ValidationError as e:
        errors.append(f"Malformed snapshot: {e.error_count()} validation error(s)")
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            errors.append(f"  {location}: {err['msg']}")
        return SnapshotValidationResult(valid=False, errors=errors)

    if snapshot.metadata.version != SNAPSHOT_VERSION:
        errors.append(
            f"Unsupported snapshot version '{snapshot.metadata.version}' "
            f"(expected '{SNAPSHOT_VERSION}')"
        )

    seen: dict[str, TableSnapshot] = {}
    for table in snapshot.tables:
        if table.name in seen:
            errors.append(f"Duplicate table '{table.name}'")
            continue

        try:
            validate_table_name(table.name)
            validate_model(table.model)
        except (ModelInvalid, ReservedCharacterUsed) as e:
            errors.append(f"Table '{table.name}': {e}")
            continue

        if len(set(table.ancestors)) != len(table.ancestors):
            errors.append(f"Table '{table.name}' repeats an ancestor: {table.ancestors}")

        for ancestor in table.ancestors:
            if ancestor not in seen:
                errors.append(
                    f"Table '{table.name}' names ancestor '{ancestor}' "
                    f"that is not listed before it"
                )

        _check_entries(table, errors, warnings)
        seen[table.name] = table

    return SnapshotValidationResult(
        valid=len(errors) == 0, errors=errors, warnings=warnings
    )


def _check_entries(table: TableSnapshot, errors: list[str], warnings: list[str]) -> None:
    """Check every shard of ``table`` against its model."""
    for storage_key, shard in table.entries.items():
        extra = sorted(set(shard) - set(table.model))
        if extra:
            errors.append(
                f"{table.name} entry '{storage_key}' has fields outside the model: "
                f"{', '.join(extra)}"
            )

        missing = sorted(set(table.model) - set(shard))
        if missing:
            warnings.append(
                f"{table.name} entry '{storage_key}' lacks fields "
                f"{', '.join(missing)} (restored as null)"
            )

        for field_name, value in shard.items():
            if field_name not in table.model:
                continue
            try:
                validate_member(value, table.model[field_name])
            except ModelMismatch as e:
                errors.append(
                    f"{table.name} entry '{storage_key}' field '{field_name}': {e}"
                )


def save_snapshot(db: Database, output_path: str | Path) -> str:
    """Write a snapshot of ``db`` to a JSON file.

    Returns:
        Absolute path to the written file.
    """
    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path_obj, "w", encoding="utf-8") as f:
        json.dump(dump_database(db), f, indent=2)

    logger.info(f"Saved snapshot of '{db.name}' to {output_path_obj}")
    return str(output_path_obj.resolve())


def read_snapshot(path: str | Path) -> dict[str, Any]:
    """Read a snapshot file without restoring it.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not valid JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def load_snapshot(
    path: str | Path,
    view_predicates: ViewPredicates | None = None,
) -> Database:
    """Read a snapshot file and restore the database it holds."""
    return restore_database(read_snapshot(path), view_predicates)

