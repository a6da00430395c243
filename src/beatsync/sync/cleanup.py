"""Removal of previously installed output before a reinstall."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from beatsync.errors import DeleteError
from beatsync.targets.base import CleanupPolicy, RenderTarget

logger = logging.getLogger(__name__)


def _remove(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise DeleteError(path, str(e)) from e


def is_owned(name: str, marker: str | None, owned_names: Iterable[str]) -> bool:
    """Check whether an entry name belongs to beatsync."""
    if marker and name.startswith(marker):
        return True
    return name in owned_names


def owned_entries(
    destination_root: Path, marker: str | None = None, owned_names: Iterable[str] = ()
) -> list[Path]:
    """List owned entries directly under destination_root, sorted by name."""
    if not destination_root.is_dir():
        return []

    owned = tuple(owned_names)
    if not marker and not owned:
        return []

    return [
        entry
        for entry in sorted(destination_root.iterdir(), key=lambda p: p.name)
        if is_owned(entry.name, marker, owned)
    ]


def cleanup(
    destination_root: Path,
    marker: str | None = None,
    owned_names: Iterable[str] = (),
    dry_run: bool = False,
) -> int:
    """Remove owned entries directly under destination_root.

    An entry is owned if its name starts with `marker` or equals one of
    `owned_names`. Nothing else is touched.

    Args:
        destination_root: Directory to scan (not recursive).
        marker: Ownership name prefix, e.g. "beat-".
        owned_names: Exact names of owned subdirectories.
        dry_run: If True, don't delete, just count what would be deleted.

    Returns:
        Number of removed (or would-be-removed) entries.

    Raises:
        DeleteError: an owned entry could not be removed.
    """
    entries = owned_entries(destination_root, marker, owned_names)
    if not dry_run:
        for entry in entries:
            _remove(entry)
            logger.debug("Removed %s", entry)
    return len(entries)


def _legacy_paths(target: RenderTarget, project_dir: Path) -> list[Path]:
    return [project_dir / rel for rel in target.legacy_paths]


def _policy_args(target: RenderTarget) -> dict[str, Any]:
    if target.cleanup == CleanupPolicy.PREFIX:
        return {"marker": target.marker}
    return {"owned_names": (target.owned_dir,)}


def cleanup_target(target: RenderTarget, project_dir: Path, dry_run: bool = False) -> int:
    """Apply a target's cleanup policy, then remove its legacy paths.

    Returns:
        Number of removed (or would-be-removed) entries.
    """
    install_dir = target.resolve_install_dir(project_dir)
    removed = cleanup(install_dir, dry_run=dry_run, **_policy_args(target))

    for legacy in _legacy_paths(target, project_dir):
        if not legacy.exists():
            continue
        if not dry_run:
            _remove(legacy)
            logger.debug("Removed legacy path %s", legacy)
        removed += 1

    if removed:
        logger.info("Removed %d old entries for %s", removed, target.name)
    return removed


def detect(target: RenderTarget, project_dir: Path) -> bool:
    """Check whether a target has beatsync output installed."""
    install_dir = target.resolve_install_dir(project_dir)
    return bool(owned_entries(install_dir, **_policy_args(target)))
