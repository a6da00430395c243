"""Exceptions raised while collecting, rendering and installing artifacts."""

from __future__ import annotations

from pathlib import Path


class BeatSyncError(Exception):
    """Base class for beatsync errors."""


class MissingInstallationError(BeatSyncError):
    """Raised when the content root or its core directory is missing."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"BEAT installation not found: {path}")


class _PathError(BeatSyncError):
    """An I/O failure tied to a single path."""

    action = "access"

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Failed to {self.action} {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReadError(_PathError):
    """Raised when a source file cannot be read."""

    action = "read"


class WriteError(_PathError):
    """Raised when a rendered file cannot be written."""

    action = "write"


class DeleteError(_PathError):
    """Raised when an owned file or directory cannot be removed."""

    action = "delete"


class MalformedArtifactError(BeatSyncError):
    """Raised when an artifact's metadata cannot be parsed.

    Never fatal: title extraction falls back to the artifact name.
    """


class UnknownTargetError(BeatSyncError):
    """Raised when a target name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown target: {name}")
