"""Models, validation and key-path encoding.

Provides the model validator (``validate_member``, ``build_shard``,
``validate_model``), the key-path codec (``check_key``, ``extend``,
``split``), and value objects (``GlobalKey``, ``Record``).

Usage:
    from docstore.schema import GlobalKey, Record, validate_member
    from docstore.schema import check_key, extend, split
"""

from docstore.schema.keypath import (
    DELIMITER,
    check_key,
    extend,
    make_global_key,
    origin,
    segment,
    split,
)
from docstore.schema.models import (
    GlobalKey,
    Record,
    SnapshotValidationResult,
    TableSummary,
)
from docstore.schema.validator import (
    build_shard,
    validate_member,
    validate_model,
    validate_table_name,
)

__all__ = [
    "DELIMITER",
    "check_key",
    "segment",
    "extend",
    "split",
    "origin",
    "make_global_key",
    "GlobalKey",
    "Record",
    "TableSummary",
    "SnapshotValidationResult",
    "validate_member",
    "build_shard",
    "validate_model",
    "validate_table_name",
]
