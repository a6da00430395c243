"""OpenCode target definition."""

from beatsync.targets.base import EnvelopeFormat, NamingStrategy, RenderTarget

OPENCODE = RenderTarget(
    name="opencode",
    display_name="OpenCode",
    install_dir=".opencode/command",
    naming=NamingStrategy.FLAT,
    envelope=EnvelopeFormat.FRONTMATTER,
)
