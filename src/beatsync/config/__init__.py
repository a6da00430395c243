"""Configuration loading and per-target settings."""

from beatsync.config.ide_store import IdeConfigStore
from beatsync.config.loader import (
    home_config_exists,
    load_config,
    local_config_exists,
    resolve_content_root,
    save_config,
)
from beatsync.config.schema import DEFAULT_CONFIG, SyncConfig

__all__ = [
    "DEFAULT_CONFIG",
    "IdeConfigStore",
    "SyncConfig",
    "home_config_exists",
    "load_config",
    "local_config_exists",
    "resolve_content_root",
    "save_config",
]
