"""Cleanup and detection of installed output."""

from beatsync.sync.cleanup import (
    cleanup,
    cleanup_target,
    detect,
    is_owned,
    owned_entries,
)

__all__ = [
    "cleanup",
    "cleanup_target",
    "detect",
    "is_owned",
    "owned_entries",
]
