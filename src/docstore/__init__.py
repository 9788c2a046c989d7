"""docstore: Embedded in-memory document store with table inheritance and live views.

Provides named tables holding keyed records validated against a model,
multi-level ancestor tables that mirror every write, live filtered views,
a lifespan-keyed database registry, a small global key-value store and
JSON snapshots.

Usage:
    from docstore import Database, Registry, Lifespan
    from docstore import GlobalKey, Record, NoSuchItem, ModelMismatch
    from docstore import save_snapshot, load_snapshot, load_store_config
"""

__version__ = "0.1.0"

# Errors
from docstore.errors import (
    DocStoreError,
    GlobalSizeLimitReached,
    ModelExists,
    ModelInvalid,
    ModelMismatch,
    ModelMissing,
    NoSuchItem,
    ReservedCharacterUsed,
)

# Schema
from docstore.schema.models import GlobalKey, Record

# Store
from docstore.store import Database, Table, View

# Registry and global values
from docstore.global_store import GlobalStore
from docstore.registry import Lifespan, Registry

# Config
from docstore.config.loader import load_store_config
from docstore.config.models import StoreConfig

# Snapshots
from docstore.snapshot import (
    dump_database,
    load_snapshot,
    restore_database,
    save_snapshot,
    validate_snapshot,
)

__all__ = [
    # Errors
    "DocStoreError",
    "NoSuchItem",
    "ModelExists",
    "ModelInvalid",
    "ModelMissing",
    "ModelMismatch",
    "ReservedCharacterUsed",
    "GlobalSizeLimitReached",
    # Schema
    "GlobalKey",
    "Record",
    # Store
    "Database",
    "Table",
    "View",
    # Registry
    "Registry",
    "Lifespan",
    "GlobalStore",
    # Config
    "load_store_config",
    "StoreConfig",
    # Snapshots
    "dump_database",
    "restore_database",
    "validate_snapshot",
    "save_snapshot",
    "load_snapshot",
]
