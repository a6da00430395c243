"""Artifact records collected from a BEAT content tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# Pseudo-module for agents under {content_root}/agents/{dir}/
STANDALONE_MODULE = "standalone"
CORE_MODULE = "core"


class ArtifactKind(str, Enum):
    """Kinds of artifacts found in a content tree."""

    AGENT = "agent"
    TASK = "task"
    TOOL = "tool"
    WORKFLOW = "workflow"

    @property
    def dirname(self) -> str:
        """Plural directory name, e.g. "agents"."""
        return f"{self.value}s"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class ArtifactRecord:
    """A single agent/task/tool/workflow definition file."""

    module: str
    kind: ArtifactKind
    name: str
    source_path: Path
    raw_content: str

    @property
    def identity(self) -> tuple[str, ArtifactKind, str]:
        return (self.module, self.kind, self.name)
