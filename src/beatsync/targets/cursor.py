"""Cursor target definition."""

from beatsync.artifacts.base import ArtifactKind
from beatsync.targets.base import (
    CleanupPolicy,
    EnvelopeFormat,
    NamingStrategy,
    RenderTarget,
)

CURSOR = RenderTarget(
    name="cursor",
    display_name="Cursor",
    install_dir=".cursor/rules",
    naming=NamingStrategy.NESTED,
    envelope=EnvelopeFormat.MDC,
    extension=".mdc",
    cleanup=CleanupPolicy.OWNED_DIRECTORY,
    standalone_only=(ArtifactKind.TASK, ArtifactKind.TOOL, ArtifactKind.WORKFLOW),
    write_index=True,
)
