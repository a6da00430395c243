"""Auggie CLI target definition."""

from beatsync.artifacts.base import ArtifactKind
from beatsync.targets.base import (
    CleanupPolicy,
    EnvelopeFormat,
    NamingStrategy,
    RenderTarget,
)

AUGGIE = RenderTarget(
    name="auggie",
    display_name="Auggie CLI",
    install_dir=".augment/commands",
    naming=NamingStrategy.NESTED,
    envelope=EnvelopeFormat.MARKDOWN,
    cleanup=CleanupPolicy.OWNED_DIRECTORY,
    standalone_only=(ArtifactKind.TASK, ArtifactKind.TOOL, ArtifactKind.WORKFLOW),
)
