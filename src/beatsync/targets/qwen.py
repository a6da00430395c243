"""Qwen Code target definition."""

from beatsync.targets.base import (
    CleanupPolicy,
    EnvelopeFormat,
    NamingStrategy,
    RenderTarget,
)

QWEN = RenderTarget(
    name="qwen",
    display_name="Qwen Code",
    install_dir=".qwen/commands",
    naming=NamingStrategy.NESTED,
    envelope=EnvelopeFormat.TOML,
    extension=".toml",
    cleanup=CleanupPolicy.OWNED_DIRECTORY,
    # Layouts written by earlier installer versions
    legacy_paths=(".qwen/agents", ".qwen/beat-method", ".qwen/Beat"),
)
