"""IDE/CLI target definitions and lookup."""

from collections.abc import Iterable

from beatsync.errors import UnknownTargetError
from beatsync.targets.auggie import AUGGIE
from beatsync.targets.base import (
    CleanupPolicy,
    EnvelopeFormat,
    NamingStrategy,
    RenderTarget,
)
from beatsync.targets.cline import CLINE
from beatsync.targets.codex import CODEX
from beatsync.targets.cursor import CURSOR
from beatsync.targets.iflow import IFLOW
from beatsync.targets.opencode import OPENCODE
from beatsync.targets.qwen import QWEN
from beatsync.targets.trae import TRAE
from beatsync.targets.windsurf import WINDSURF

__all__ = [
    "CleanupPolicy",
    "EnvelopeFormat",
    "NamingStrategy",
    "RenderTarget",
    "TARGETS",
    "AUGGIE",
    "CLINE",
    "CODEX",
    "CURSOR",
    "IFLOW",
    "OPENCODE",
    "QWEN",
    "TRAE",
    "WINDSURF",
    "get_target_by_name",
    "get_target_names",
    "resolve_targets",
]

TARGETS: tuple[RenderTarget, ...] = (
    AUGGIE,
    CLINE,
    CODEX,
    CURSOR,
    IFLOW,
    OPENCODE,
    QWEN,
    TRAE,
    WINDSURF,
)


def get_target_by_name(name: str) -> RenderTarget | None:
    """Find target by name (case-insensitive)."""
    name_lower = name.lower()
    for target in TARGETS:
        if target.name == name_lower:
            return target
    return None


def get_target_names() -> list[str]:
    """Return registry names in registry order."""
    return [target.name for target in TARGETS]


def resolve_targets(names: Iterable[str]) -> list[RenderTarget]:
    """Resolve target names, keeping order and dropping duplicates.

    Raises:
        UnknownTargetError: a name is not in the registry.
    """
    resolved: list[RenderTarget] = []
    for name in names:
        target = get_target_by_name(name)
        if target is None:
            raise UnknownTargetError(name)
        if target not in resolved:
            resolved.append(target)
    return resolved
