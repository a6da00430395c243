"""iFlow CLI target definition."""

from beatsync.artifacts.base import ArtifactKind
from beatsync.targets.base import (
    CleanupPolicy,
    EnvelopeFormat,
    NamingStrategy,
    RenderTarget,
)

IFLOW = RenderTarget(
    name="iflow",
    display_name="iFlow CLI",
    install_dir=".iflow/commands",
    naming=NamingStrategy.NESTED,
    envelope=EnvelopeFormat.MARKDOWN,
    cleanup=CleanupPolicy.OWNED_DIRECTORY,
    kinds=(ArtifactKind.AGENT, ArtifactKind.TASK),
)
