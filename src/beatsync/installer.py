"""Install orchestration: collect once, then cleanup/render/write per target."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from beatsync.artifacts import (
    ArtifactKind,
    ArtifactRecord,
    collect,
    count_by_kind,
    filter_standalone,
    load_manifest,
)
from beatsync.errors import BeatSyncError, WriteError
from beatsync.render import RenderedFile, render_all, render_index
from beatsync.sync import cleanup_target
from beatsync.targets import NamingStrategy, RenderTarget

logger = logging.getLogger(__name__)


@dataclass
class TargetResult:
    """Outcome of installing into one target."""

    target: str
    destination: Path
    counts: dict[ArtifactKind, int] = field(default_factory=dict)
    written: int = 0
    removed: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def write_files(files: Iterable[RenderedFile]) -> int:
    """Write rendered files, creating parent directories.

    Returns:
        Number of files written.

    Raises:
        WriteError: a file could not be written.
    """
    written = 0
    for rendered in files:
        path = rendered.destination_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(rendered.content, encoding="utf-8")
        except OSError as e:
            raise WriteError(path, str(e)) from e
        written += 1
    return written


def select_artifacts(
    target: RenderTarget, artifacts: list[ArtifactRecord], content_root: Path
) -> list[ArtifactRecord]:
    """Apply a target's standalone-only filters and kind subset."""
    selected = artifacts
    for kind in target.standalone_only:
        selected = filter_standalone(selected, kind, load_manifest(content_root, kind))
    return [a for a in selected if target.accepts(a.kind)]


def install_target(
    target: RenderTarget,
    artifacts: list[ArtifactRecord],
    project_dir: Path,
    content_root: Path,
) -> TargetResult:
    """Install artifacts into one target.

    Cleanup completes before any file is rendered or written.

    Raises:
        ReadError, DeleteError, WriteError: the target's install is aborted.
    """
    selected = select_artifacts(target, artifacts, content_root)

    removed = cleanup_target(target, project_dir)

    files = render_all(selected, target, project_dir)
    if target.write_index and target.naming == NamingStrategy.NESTED and selected:
        files.append(render_index(selected, target, project_dir))

    written = write_files(files)
    logger.info("Wrote %d files for %s", written, target.name)

    return TargetResult(
        target=target.name,
        destination=target.destination_root(project_dir),
        counts=count_by_kind(selected),
        written=written,
        removed=removed,
    )


def install(
    project_dir: Path,
    content_root: Path,
    targets: Iterable[RenderTarget],
    selected_modules: Iterable[str] = (),
    fail_fast: bool = False,
) -> list[TargetResult]:
    """Install into each target in order.

    Artifacts are collected once. A target's failure is recorded in its
    result and does not stop later targets unless `fail_fast` is set.
    Output of earlier targets is never rolled back.

    Raises:
        MissingInstallationError: content_root is not a BEAT installation.
        ReadError: a source file could not be read during collection.
    """
    artifacts = collect(content_root, selected_modules)

    results: list[TargetResult] = []
    for target in targets:
        try:
            result = install_target(target, artifacts, project_dir, content_root)
        except (BeatSyncError, ValueError) as e:
            if fail_fast:
                raise
            logger.warning("Install failed for %s", target.name, exc_info=True)
            result = TargetResult(
                target=target.name,
                destination=target.destination_root(project_dir),
                error=str(e),
            )
        results.append(result)

    return results


def uninstall(
    project_dir: Path, targets: Iterable[RenderTarget], dry_run: bool = False
) -> dict[str, int]:
    """Remove owned output for each target.

    With `dry_run`, nothing is deleted and the counts are what would go.

    Returns dict mapping target name -> number of removed entries.
    """
    return {
        target.name: cleanup_target(target, project_dir, dry_run=dry_run)
        for target in targets
    }
