"""Configuration file loading, merging and content-root resolution."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from beatsync.config.schema import DEFAULT_CONFIG, SyncConfig
from beatsync.errors import WriteError

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".beatsync"
CONFIG_FILENAME = "config.yaml"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.beatsync/config.yaml."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def get_local_config_path(project_dir: Path | None = None) -> Path:
    """Get path to the project config: {project_dir}/.beatsync/config.yaml.

    Defaults to the current directory.
    """
    base = project_dir if project_dir is not None else Path.cwd()
    return base / CONFIG_DIRNAME / CONFIG_FILENAME


def home_config_exists() -> bool:
    """Check if the global home config exists."""
    return get_home_config_path().exists()


def local_config_exists(project_dir: Path | None = None) -> bool:
    """Check if the project config exists."""
    return get_local_config_path(project_dir).exists()


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config mapping.

    Returns None if the file is missing or empty. Invalid YAML and
    non-mapping documents are logged and treated as missing.
    """
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", path)
        return None
    return data


def load_config(project_dir: Path | None = None) -> SyncConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.beatsync/config.yaml)
    3. Project config ({project_dir}/.beatsync/config.yaml)
    """
    config = DEFAULT_CONFIG
    for path in (get_home_config_path(), get_local_config_path(project_dir)):
        data = load_yaml_config(path)
        if data:
            config = config.merge(SyncConfig.from_dict(data))
            logger.debug("Loaded config from %s", path)
    return config


def resolve_content_root(
    config: SyncConfig, project_dir: Path, override: Path | None = None
) -> Path:
    """Locate the BEAT installation for a project.

    An explicit override wins. Otherwise the configured content_root is
    taken relative to the project directory; "~" is expanded and absolute
    paths are used as is.
    """
    if override is not None:
        return override
    content_root = Path(config.content_root or DEFAULT_CONFIG.content_root or "beat")
    return project_dir / content_root.expanduser()


def save_config(config: SyncConfig, path: Path) -> None:
    """Save config to a YAML file.

    Creates parent directories if needed. Only non-None values are saved.

    Raises:
        WriteError: the file could not be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise WriteError(path, str(e)) from e
