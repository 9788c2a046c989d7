"""Storage-key encoding for records mirrored through an ancestor chain.

The same caller-chosen key is reused at every inheritance level. An ancestor
can hold shards for several descendants at once, so each cascade step
prepends the segment of the table doing the cascading:

    Admin.add("u1", ...)      # Admin stores "u1"
    -> User stores            "%Admin%u1"
    -> Base stores            "%User%%Admin%u1"

The originating table's segment sits nearest the raw key; each
intermediate level is added further out. Pure logic, no table access.

Usage:
    from docstore.schema.keypath import check_key, extend, split

    check_key("u1")
    stored = extend("User", extend("Admin", "u1"))
    path, raw = split(stored)   # (["User", "Admin"], "u1")
"""

from docstore.errors import ReservedCharacterUsed
from docstore.schema.models import GlobalKey

DELIMITER = "%"


def check_key(key: str) -> None:
    """Reject a caller-supplied key that contains the delimiter.

    Args:
        key: Raw record key as passed to ``Table.add``/``Table.remove``.

    Raises:
        ReservedCharacterUsed: If ``key`` contains ``DELIMITER``.
    """
    if DELIMITER in key:
        raise ReservedCharacterUsed(
            f"Key '{key}' contains reserved character '{DELIMITER}'"
        )


def segment(table_name: str) -> str:
    """Return the path segment for ``table_name``."""
    return f"{DELIMITER}{table_name}{DELIMITER}"


def extend(table_name: str, storage_key: str) -> str:
    """Extend ``storage_key`` with the segment of the cascading table."""
    return segment(table_name) + storage_key


def split(storage_key: str) -> tuple[list[str], str]:
    """Split a storage key into its table path and the raw key.

    Args:
        storage_key: Key as stored in some table's entry store.

    Returns:
        Tuple of ``(path, raw_key)``. ``path`` lists table names outermost
        first; it is empty for a raw key.

    Example:
        >>> split("%User%%Admin%u1")
        (['User', 'Admin'], 'u1')
        >>> split("u1")
        ([], 'u1')
    """
    path: list[str] = []
    rest = storage_key
    while rest.startswith(DELIMITER):
        end = rest.find(DELIMITER, 1)
        if end == -1:
            break
        path.append(rest[1:end])
        rest = rest[end + 1:]
    return path, rest


def origin(storage_key: str) -> str | None:
    """Return the name of the table the record was added through.

    ``None`` means the key is raw, i.e. the record belongs to the table
    holding it.
    """
    path, _ = split(storage_key)
    return path[-1] if path else None


def make_global_key(table_name: str, storage_key: str) -> GlobalKey:
    """Build the opaque locator for a shard stored in ``table_name``."""
    return GlobalKey(table_key=table_name, entry_key=storage_key)
