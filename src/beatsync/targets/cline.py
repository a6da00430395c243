"""Cline target definition."""

from beatsync.targets.base import EnvelopeFormat, NamingStrategy, RenderTarget

CLINE = RenderTarget(
    name="cline",
    display_name="Cline",
    install_dir=".clinerules/workflows",
    naming=NamingStrategy.FLAT,
    envelope=EnvelopeFormat.NONE,
)
