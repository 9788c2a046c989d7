"""Snapshot file models.

A snapshot captures one database: every table's model, ancestor names,
shards (at their storage keys) and view names. View predicates are code
and are not captured; callers supply them again on restore.

Usage:
    from docstore.snapshot.models import DatabaseSnapshot

    snapshot = DatabaseSnapshot.model_validate(json.loads(text))
    [t.name for t in snapshot.tables]
"""

from typing import Any

from pydantic import BaseModel, Field

SNAPSHOT_VERSION = "1.0"


class SnapshotMetadata(BaseModel):
    """Header of a snapshot file."""

    created_at: str = ""
    version: str = SNAPSHOT_VERSION
    table_count: int = 0


class TableSnapshot(BaseModel):
    """One table of a snapshot."""

    name: str
    model: dict[str, Any]
    ancestors: list[str] = Field(default_factory=list)
    entries: dict[str, dict[str, Any]] = Field(default_factory=dict)
    views: list[str] = Field(default_factory=list)


class DatabaseSnapshot(BaseModel):
    """A whole database. Tables are ordered ancestors first."""

    metadata: SnapshotMetadata = Field(default_factory=SnapshotMetadata)
    name: str
    tables: list[TableSnapshot] = Field(default_factory=list)
