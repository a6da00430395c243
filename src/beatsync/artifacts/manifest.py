"""Manifest reading for standalone task/tool/workflow filtering."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from beatsync.artifacts.base import ArtifactKind, ArtifactRecord
from beatsync.errors import ReadError

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = "_cfg"
TRUTHY = frozenset({"true", "1", "yes"})


@dataclass(frozen=True)
class ManifestEntry:
    """One row of a {kind}-manifest.csv file."""

    module: str
    name: str
    standalone: bool = False

    @classmethod
    def from_row(cls, row: dict[str, str | None]) -> ManifestEntry:
        """Create from a CSV row. Missing columns default to empty/False."""
        standalone_raw = (row.get("standalone") or "").strip().lower()
        return cls(
            module=(row.get("module") or "").strip(),
            name=(row.get("name") or "").strip(),
            standalone=standalone_raw in TRUTHY,
        )


def get_manifest_path(content_root: Path, kind: ArtifactKind) -> Path:
    """Get path to a kind's manifest: {content_root}/_cfg/{kind}-manifest.csv."""
    return content_root / CONFIG_DIRNAME / f"{kind.value}-manifest.csv"


def load_manifest(content_root: Path, kind: ArtifactKind) -> list[ManifestEntry] | None:
    """Load manifest entries for a kind.

    Returns None if the manifest file does not exist.
    """
    path = get_manifest_path(content_root, kind)
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ReadError(path, str(e)) from e

    return [ManifestEntry.from_row(row) for row in rows]


def filter_standalone(
    records: list[ArtifactRecord],
    kind: ArtifactKind,
    entries: list[ManifestEntry] | None,
) -> list[ArtifactRecord]:
    """Keep only records of `kind` flagged standalone in the manifest.

    Records of other kinds pass through. Without a manifest, nothing is
    filtered.
    """
    if entries is None:
        logger.debug("No %s manifest; keeping all %s artifacts", kind.value, kind.value)
        return records

    standalone = {(e.module, e.name) for e in entries if e.standalone}
    return [
        r
        for r in records
        if r.kind != kind or (r.module, r.name) in standalone
    ]
