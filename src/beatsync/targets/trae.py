"""Trae target definition."""

from beatsync.artifacts.base import ArtifactKind
from beatsync.targets.base import EnvelopeFormat, NamingStrategy, RenderTarget

TRAE = RenderTarget(
    name="trae",
    display_name="Trae",
    install_dir=".trae/rules",
    naming=NamingStrategy.FLAT,
    envelope=EnvelopeFormat.MARKDOWN,
    standalone_only=(ArtifactKind.TASK, ArtifactKind.TOOL, ArtifactKind.WORKFLOW),
)
