"""Windsurf target definition."""

from beatsync.artifacts.base import ArtifactKind
from beatsync.targets.base import (
    CleanupPolicy,
    EnvelopeFormat,
    NamingStrategy,
    RenderTarget,
)

WINDSURF = RenderTarget(
    name="windsurf",
    display_name="Windsurf",
    install_dir=".windsurf/workflows",
    naming=NamingStrategy.NESTED,
    envelope=EnvelopeFormat.FRONTMATTER,
    cleanup=CleanupPolicy.OWNED_DIRECTORY,
    standalone_only=(ArtifactKind.TASK, ArtifactKind.TOOL, ArtifactKind.WORKFLOW),
)
