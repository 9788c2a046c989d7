"""Global values that outlive any single database.

``GlobalStore`` is a write-through cache over a small persistent
``KeyValueBackend``. Backends are size-limited, so use it sparingly and
only for small string values.

Usage:
    from docstore.global_store import GlobalStore
    from docstore.backends import JsonFileBackend

    store = GlobalStore(JsonFileBackend("global.json"))
    store.add("cleared_once", "yes")
    store.get("cleared_once")       # "yes"
    store.remove("cleared_once")
"""

import logging

from docstore.backends.base import BackendFullError, KeyValueBackend
from docstore.backends.json_file import JsonFileBackend
from docstore.backends.memory import MemoryBackend
from docstore.config.models import StoreConfig
from docstore.errors import GlobalSizeLimitReached, NoSuchItem

logger = logging.getLogger(__name__)


class GlobalStore:
    """Write-through string cache over a ``KeyValueBackend``.

    Args:
        backend: Persistent store written on every ``add``/``remove``.
    """

    def __init__(self, backend: KeyValueBackend | None = None) -> None:
        self.backend: KeyValueBackend = backend if backend is not None else MemoryBackend()
        self._cache: dict[str, str] = {}

    @classmethod
    def from_config(cls, config: StoreConfig) -> "GlobalStore":
        """Build a store with the backend described by ``config``."""
        settings = config.global_store
        if settings.path:
            return cls(JsonFileBackend(settings.path, settings.capacity_bytes))
        return cls(MemoryBackend(settings.capacity_bytes))

    def add(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` in the cache and the backend.

        Raises:
            TypeError: If ``value`` is not a string.
            GlobalSizeLimitReached: If the backend has no room. The cache
                keeps its previous value for ``key``.
        """
        if not isinstance(value, str):
            raise TypeError(f"Global values must be strings, got {type(value).__name__}")

        try:
            self.backend.set_item(key, value)
        except BackendFullError as e:
            raise GlobalSizeLimitReached(str(e)) from e
        self._cache[key] = value

    def remove(self, key: str) -> None:
        """Remove ``key`` from the cache and the backend."""
        self._cache.pop(key, None)
        self.backend.remove_item(key)

    def get(self, key: str) -> str:
        """Return the value under ``key``, reading through to the backend.

        Raises:
            NoSuchItem: If neither the cache nor the backend holds ``key``.
        """
        if key in self._cache:
            logger.debug(f"Global cache hit for '{key}'")
            return self._cache[key]

        logger.debug(f"Global cache miss for '{key}'")
        value = self.backend.get_item(key)
        if value is None:
            raise NoSuchItem(f"No global value '{key}'")
        self._cache[key] = value
        return value
