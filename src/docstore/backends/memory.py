"""In-process key-value backend.

Usage:
    from docstore.backends.memory import MemoryBackend

    backend = MemoryBackend(capacity_bytes=1024)
    backend.set_item("k", "v")
"""

from docstore.backends.base import BackendFullError, item_size

DEFAULT_CAPACITY_BYTES = 5 * 1024 * 1024


class MemoryBackend:
    """Size-limited ``KeyValueBackend`` held in a dict.

    Args:
        capacity_bytes: Total UTF-8 bytes of keys and values allowed.
    """

    def __init__(self, capacity_bytes: int = DEFAULT_CAPACITY_BYTES) -> None:
        self.capacity_bytes: int = capacity_bytes
        self._items: dict[str, str] = {}

    @property
    def used_bytes(self) -> int:
        """Bytes currently counted against capacity."""
        return sum(item_size(k, v) for k, v in self._items.items())

    def set_item(self, key: str, value: str) -> None:
        current = self._items.get(key)
        freed = item_size(key, current) if current is not None else 0
        if self.used_bytes - freed + item_size(key, value) > self.capacity_bytes:
            raise BackendFullError(
                f"Storing '{key}' would exceed {self.capacity_bytes} bytes"
            )
        self._items[key] = value

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
