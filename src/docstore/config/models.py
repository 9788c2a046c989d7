"""Pydantic models for docstore configuration."""

from typing import Literal

from pydantic import BaseModel, Field

from docstore.backends.memory import DEFAULT_CAPACITY_BYTES


# ============================================================================
# Configuration Models
# ============================================================================


class GlobalStoreSettings(BaseModel):
    """Settings for the global key-value store (``[global]`` in docstore.toml)."""

    path: str | None = None  # None keeps values in memory only
    capacity_bytes: int = Field(default=DEFAULT_CAPACITY_BYTES, gt=0)


class StoreConfig(BaseModel):
    """Complete docstore configuration from docstore.toml."""

    save_dir: str = "saves"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    global_store: GlobalStoreSettings = Field(default_factory=GlobalStoreSettings)
