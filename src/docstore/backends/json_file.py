"""JSON-file key-value backend.

Every write rewrites the whole file; the store is meant for a handful of
small values that must survive process restarts.

Usage:
    from docstore.backends.json_file import JsonFileBackend

    backend = JsonFileBackend("global.json", capacity_bytes=64 * 1024)
    backend.set_item("unlocked_ending", "true")
"""

import json
from pathlib import Path

from docstore.backends.base import BackendFullError, item_size
from docstore.backends.memory import DEFAULT_CAPACITY_BYTES


class JsonFileBackend:
    """Size-limited ``KeyValueBackend`` persisted to a JSON object file.

    Args:
        path: File to read and write. Created on first write.
        capacity_bytes: Total UTF-8 bytes of keys and values allowed.

    Raises:
        ValueError: If ``path`` exists but does not hold a JSON object of
            strings.
    """

    def __init__(
        self,
        path: str | Path,
        capacity_bytes: int = DEFAULT_CAPACITY_BYTES,
    ) -> None:
        self.path: Path = Path(path)
        self.capacity_bytes: int = capacity_bytes
        self._items: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ValueError(f"{self.path} must hold a JSON object of strings")
        return data

    def _flush(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, indent=2), encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        used = sum(item_size(k, v) for k, v in self._items.items() if k != key)
        if used + item_size(key, value) > self.capacity_bytes:
            raise BackendFullError(
                f"Storing '{key}' would exceed {self.capacity_bytes} bytes"
            )
        # Memory only changes once the file write succeeds
        items = {**self._items, key: value}
        self._flush(items)
        self._items = items

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def remove_item(self, key: str) -> None:
        if key not in self._items:
            return
        items = {k: v for k, v in self._items.items() if k != key}
        self._flush(items)
        self._items = items
