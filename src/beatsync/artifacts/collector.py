"""Artifact discovery within an installed BEAT content tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from beatsync.artifacts.base import (
    CORE_MODULE,
    STANDALONE_MODULE,
    ArtifactKind,
    ArtifactRecord,
)
from beatsync.errors import MissingInstallationError, ReadError

logger = logging.getLogger(__name__)

# Constants
SOURCE_EXTENSIONS: frozenset[str] = frozenset({".md", ".xml", ".yaml", ".yml"})
CUSTOMIZE_MARKER = ".customize."
LOCAL_SKIP_MARKER = 'localskip="true"'
STANDALONE_AGENTS_DIRNAME = "agents"


def read_source(path: Path) -> str:
    """Read a source file as UTF-8, raising ReadError on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(path, str(e)) from e


def _candidate_files(directory: Path, extensions: Iterable[str]) -> list[Path]:
    """List regular files in a directory with an accepted suffix, sorted by name."""
    if not directory.is_dir():
        return []
    allowed = set(extensions)
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix in allowed),
        key=lambda p: p.name,
    )


def load_artifacts_from_dir(
    directory: Path,
    module: str,
    kind: ArtifactKind,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
) -> list[ArtifactRecord]:
    """Load artifacts of one kind from a directory.

    Skips customization overrides (``*.customize.*``) and files marked
    ``localskip="true"``. A missing directory yields no artifacts.
    """
    records: list[ArtifactRecord] = []
    for path in _candidate_files(directory, extensions):
        if CUSTOMIZE_MARKER in path.name:
            logger.debug("Skipping customization file %s", path)
            continue

        content = read_source(path)
        if LOCAL_SKIP_MARKER in content:
            logger.debug("Skipping local-skip file %s", path)
            continue

        records.append(
            ArtifactRecord(
                module=module,
                kind=kind,
                name=path.stem,
                source_path=path,
                raw_content=content,
            )
        )
    return records


def load_standalone_agents(content_root: Path) -> list[ArtifactRecord]:
    """Load agents from {content_root}/agents/{dir}/*.md."""
    base = content_root / STANDALONE_AGENTS_DIRNAME
    if not base.is_dir():
        return []

    records: list[ArtifactRecord] = []
    for agent_dir in sorted(base.iterdir(), key=lambda p: p.name):
        if agent_dir.is_dir():
            records.extend(
                load_artifacts_from_dir(
                    agent_dir, STANDALONE_MODULE, ArtifactKind.AGENT, (".md",)
                )
            )
    return records


def _normalize_modules(selected_modules: Iterable[str]) -> list[str]:
    """Drop core, the reserved standalone name and duplicates, keeping order."""
    modules: list[str] = []
    for module in selected_modules:
        if module == CORE_MODULE or module in modules:
            continue
        if module == STANDALONE_MODULE:
            logger.warning(
                "Module name '%s' is reserved for standalone agents; ignoring",
                module,
            )
            continue
        modules.append(module)
    return modules


def collect(
    content_root: Path, selected_modules: Iterable[str] = ()
) -> list[ArtifactRecord]:
    """Collect all artifacts from a content tree.

    Order: for each kind, core first, then selected modules in the given
    order; standalone agents last. Within a directory, files are sorted by
    name. Missing module directories are treated as empty.

    Raises:
        MissingInstallationError: content_root or content_root/core is missing.
        ReadError: a candidate file could not be read.
    """
    if not content_root.is_dir():
        raise MissingInstallationError(content_root)
    core_dir = content_root / CORE_MODULE
    if not core_dir.is_dir():
        raise MissingInstallationError(core_dir)

    modules = [CORE_MODULE, *_normalize_modules(selected_modules)]

    candidates: list[ArtifactRecord] = []
    for kind in ArtifactKind:
        for module in modules:
            candidates.extend(
                load_artifacts_from_dir(content_root / module / kind.dirname, module, kind)
            )
    candidates.extend(load_standalone_agents(content_root))

    records: list[ArtifactRecord] = []
    seen: set[tuple[str, ArtifactKind, str]] = set()
    for record in candidates:
        if record.identity in seen:
            logger.warning(
                "Duplicate %s '%s' in module '%s' at %s; keeping the first",
                record.kind.value,
                record.name,
                record.module,
                record.source_path,
            )
            continue
        seen.add(record.identity)
        records.append(record)

    logger.debug("Collected %d artifacts from %s", len(records), content_root)
    return records


def count_by_kind(records: Iterable[ArtifactRecord]) -> dict[ArtifactKind, int]:
    """Count records per kind, including kinds with zero records."""
    counts = {kind: 0 for kind in ArtifactKind}
    for record in records:
        counts[record.kind] += 1
    return counts
