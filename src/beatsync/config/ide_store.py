"""Per-target configuration persisted in the content tree."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

from beatsync.artifacts.manifest import CONFIG_DIRNAME
from beatsync.errors import DeleteError, WriteError

logger = logging.getLogger(__name__)

IDES_DIRNAME = "ides"


class IdeConfigStore:
    """Load and save per-target settings under {content_root}/_cfg/ides/."""

    def __init__(self, content_root: Path) -> None:
        self._dir = content_root / CONFIG_DIRNAME / IDES_DIRNAME

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, name: str) -> Path:
        """Get path to a target's config file: {name}.yaml."""
        return self._dir / f"{name}.yaml"

    def has(self, name: str) -> bool:
        return self.path_for(name).exists()

    def load(self, name: str) -> dict[str, Any] | None:
        """Load a target's stored record.

        Returns None if the file is missing, empty or not valid YAML.
        """
        path = self.path_for(name)
        if not path.exists():
            return None
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load config for %s: %s", name, e)
            return None
        if not isinstance(data, dict):
            return None
        return data

    def load_all(self) -> dict[str, dict[str, Any]]:
        """Load every stored target's configuration, keyed by target name."""
        configs: dict[str, dict[str, Any]] = {}
        if not self._dir.is_dir():
            return configs

        for path in sorted(self._dir.glob("*.yaml")):
            data = self.load(path.stem)
            if data is None:
                continue
            configuration = data.get("configuration")
            configs[path.stem] = configuration if isinstance(configuration, dict) else {}
        return configs

    def save(self, name: str, configuration: dict[str, Any] | None = None) -> Path:
        """Save a target's configuration.

        Preserves configured_date from an existing record and refreshes
        last_updated.
        """
        now = datetime.now(UTC).isoformat()
        configured_date = now
        existing = self.load(name)
        if existing and existing.get("configured_date"):
            configured_date = str(existing["configured_date"])

        data = {
            "ide": name,
            "configured_date": configured_date,
            "last_updated": now,
            "configuration": configuration or {},
        }

        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise WriteError(path, str(e)) from e
        return path

    def delete(self, name: str) -> bool:
        """Delete a target's config. Returns True if a file was removed.

        Raises:
            DeleteError: the file could not be removed.
        """
        path = self.path_for(name)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise DeleteError(path, str(e)) from e
        return True
