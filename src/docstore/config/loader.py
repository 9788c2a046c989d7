"""Configuration loading for docstore."""

import tomllib
from pathlib import Path

from docstore.config.models import GlobalStoreSettings, StoreConfig

DEFAULT_CONFIG_NAME = "docstore.toml"


def load_store_config(config_path: Path | None = None) -> StoreConfig:
    """Load docstore configuration from TOML file.

    Args:
        config_path: Path to docstore.toml. When ``None``, ``docstore.toml``
            in the current working directory is used if present, otherwise
            the defaults are returned.

    Returns:
        StoreConfig with store and global-store settings

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValueError: If config format is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            return StoreConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Store config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    store_settings = data.get("store", {})
    global_settings = data.get("global", {})

    return StoreConfig(
        **store_settings,
        global_store=GlobalStoreSettings(**global_settings),
    )
