"""Artifact records, discovery and manifests."""

from beatsync.artifacts.base import (
    CORE_MODULE,
    STANDALONE_MODULE,
    ArtifactKind,
    ArtifactRecord,
)
from beatsync.artifacts.collector import collect, count_by_kind
from beatsync.artifacts.manifest import ManifestEntry, filter_standalone, load_manifest

__all__ = [
    "CORE_MODULE",
    "STANDALONE_MODULE",
    "ArtifactKind",
    "ArtifactRecord",
    "ManifestEntry",
    "collect",
    "count_by_kind",
    "filter_standalone",
    "load_manifest",
]
