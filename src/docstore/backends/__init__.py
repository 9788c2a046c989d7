"""Key-value backends package.

Provides the ``KeyValueBackend`` Protocol and the concrete backends the
global store writes through to: ``MemoryBackend`` (process lifetime) and
``JsonFileBackend`` (survives restarts).

Usage:
    from docstore.backends import KeyValueBackend, MemoryBackend, JsonFileBackend
"""

from docstore.backends.base import BackendFullError, KeyValueBackend
from docstore.backends.json_file import JsonFileBackend
from docstore.backends.memory import MemoryBackend

__all__ = [
    "KeyValueBackend",
    "BackendFullError",
    "MemoryBackend",
    "JsonFileBackend",
]
