"""Database snapshots: dump, restore and validate.

A snapshot is the persisted form of a database. Restoring one rebuilds
full ``Database``/``Table``/``View`` objects; view predicates are supplied
again by the caller.

Usage:
    from docstore.snapshot import DatabaseSnapshot, TableSnapshot
    from docstore.snapshot import dump_database, restore_database, validate_snapshot
    from docstore.snapshot import save_snapshot, load_snapshot
"""

from docstore.snapshot.dump_restore import (
    dump_database,
    load_snapshot,
    read_snapshot,
    restore_database,
    save_snapshot,
    validate_snapshot,
)
from docstore.snapshot.models import DatabaseSnapshot, SnapshotMetadata, TableSnapshot

__all__ = [
    "DatabaseSnapshot",
    "SnapshotMetadata",
    "TableSnapshot",
    "dump_database",
    "restore_database",
    "validate_snapshot",
    "save_snapshot",
    "read_snapshot",
    "load_snapshot",
]
