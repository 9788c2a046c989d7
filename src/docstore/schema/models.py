"""Value objects and result models.

This module contains:
- Locator: GlobalKey
- Records: Record (merged, read-only view of a logical record)
- Result models: TableSummary, SnapshotValidationResult
"""

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Locator
# ============================================================================


class GlobalKey(BaseModel):
    """Opaque locator of one shard: table name plus resolved storage key.

    Produced by ``Table.get_key``/``select_keys`` and consumed by
    ``Database.get_item``. ``entry_key`` is not a plain user key once the
    table has ancestors.
    """

    model_config = ConfigDict(frozen=True)

    table_key: str
    entry_key: str


# ============================================================================
# Records
# ============================================================================


class Record(Mapping):
    """Read-only record built by copying shard fields.

    Fields are readable by item or attribute:

        >>> r = Record({"uID": 1, "email": None})
        >>> r["uID"], r.uID
        (1, 1)
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_fields", dict(fields or {}))

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f"Record has no field '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Record is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Record is read-only")

    def __repr__(self) -> str:
        return f"Record({self._fields!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable copy of the fields."""
        return dict(self._fields)


# ============================================================================
# Result Models
# ============================================================================


class TableSummary(BaseModel):
    """Shape and size of a table, used by ``docstore inspect``."""

    name: str
    fields: list[str] = Field(default_factory=list)
    ancestors: list[str] = Field(default_factory=list)
    descendants: list[str] = Field(default_factory=list)
    entry_count: int = 0
    own_entry_count: int = 0
    views: list[str] = Field(default_factory=list)


class SnapshotValidationResult(BaseModel):
    """Result of snapshot validation."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        """Count of errors that make the snapshot unusable."""
        return len(self.errors)

    def format_report(self) -> str:
        """Format validation result as human-readable report."""
        if self.valid and not self.warnings:
            return "Snapshot valid"

        lines = ["Snapshot valid" if self.valid else "Snapshot validation failed:"]

        if self.errors:
            lines.append(f"\n  Errors ({len(self.errors)}):")
            for error in self.errors:
                lines.append(f"    - {error}")

        if self.warnings:
            lines.append(f"\n  Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                lines.append(f"    - {warning}")

        return "\n".join(lines)
