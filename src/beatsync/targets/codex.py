"""Codex CLI target definition.

Prompts are installed to the home directory, not the project.
"""

from beatsync.targets.base import EnvelopeFormat, NamingStrategy, RenderTarget

CODEX = RenderTarget(
    name="codex",
    display_name="Codex",
    install_dir="~/.codex/prompts",
    naming=NamingStrategy.FLAT,
    envelope=EnvelopeFormat.NONE,
)
