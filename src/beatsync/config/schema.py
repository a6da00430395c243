"""Configuration schema and validation for beatsync."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


def _coerce_names(raw: Any) -> tuple[str, ...] | None:
    """Coerce a list (or comma-separated string) of names to a tuple."""
    if raw is None:
        return None
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = [str(item) for item in raw]
    else:
        return None
    return tuple(item.strip() for item in items if item.strip())


@dataclass
class SyncConfig:
    """beatsync configuration schema.

    Fields correspond to CLI options of `beatsync install`.
    None values indicate "not set" and will use defaults or be inherited.
    """

    content_root: str | None = None
    modules: tuple[str, ...] | None = None
    targets: tuple[str, ...] | None = None
    fail_fast: bool | None = None
    log_level: str | None = None

    def merge(self, other: SyncConfig) -> SyncConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new SyncConfig instance.
        """
        return SyncConfig(
            content_root=(
                other.content_root
                if other.content_root is not None
                else self.content_root
            ),
            modules=other.modules if other.modules is not None else self.modules,
            targets=other.targets if other.targets is not None else self.targets,
            fail_fast=other.fail_fast if other.fail_fast is not None else self.fail_fast,
            log_level=other.log_level if other.log_level is not None else self.log_level,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = list(value) if isinstance(value, tuple) else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyncConfig:
        """Create a SyncConfig from a dictionary.

        Unknown keys are ignored. Type validation is performed.
        """
        content_root_raw = data.get("content_root")
        content_root = str(content_root_raw) if content_root_raw is not None else None
        fail_fast_raw = data.get("fail_fast")
        fail_fast = bool(fail_fast_raw) if fail_fast_raw is not None else None
        log_level_raw = data.get("log_level")
        log_level: str | None = None
        if isinstance(log_level_raw, str) and log_level_raw.upper() in LOG_LEVELS:
            log_level = log_level_raw.upper()

        return cls(
            content_root=content_root,
            modules=_coerce_names(data.get("modules")),
            targets=_coerce_names(data.get("targets")),
            fail_fast=fail_fast,
            log_level=log_level,
        )


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = SyncConfig(
    content_root="beat",
    modules=(),
    targets=(),
    fail_fast=False,
    log_level="WARNING",
)
