"""Configuration management: TOML loading and config models.

Usage:
    >>> from docstore.config import load_store_config, StoreConfig, GlobalStoreSettings
"""

from docstore.config.loader import load_store_config
from docstore.config.models import GlobalStoreSettings, StoreConfig

__all__ = ["load_store_config", "StoreConfig", "GlobalStoreSettings"]
