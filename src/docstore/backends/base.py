"""Key-value backend protocol definition.

Defines the ``KeyValueBackend`` Protocol that the global store writes
through to. Backends are small, persistent and size-limited; they hold
string values only.

Usage:
    from docstore.backends.base import KeyValueBackend

    def remember(backend: KeyValueBackend) -> None:
        backend.set_item("high_score", "1200")
        backend.get_item("high_score")      # "1200"
        backend.remove_item("high_score")
"""

from typing import Protocol


class BackendFullError(Exception):
    """Raised by a backend that has no room for a value."""

    pass


class KeyValueBackend(Protocol):
    """Persistent key-value store interface that all backends implement.

    All methods are synchronous.
    """

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            BackendFullError: If the value does not fit.
        """
        ...

    def get_item(self, key: str) -> str | None:
        """Return the value under ``key``, or ``None`` if absent."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is not an error."""
        ...


def item_size(key: str, value: str) -> int:
    """Bytes a key/value pair counts against a backend's capacity."""
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))
