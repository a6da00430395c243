"""Shared fixtures for beatsync tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from beatsync.artifacts import ArtifactKind, ArtifactRecord

DEV_AGENT = '<agent id="dev" title="Developer">\n  Implement stories.\n</agent>\n'
PM_AGENT = '---\nname: "Product Manager"\n---\n\nYou are the PM.\n'


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    """Write a file, creating parent directories."""
    return _write


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def content_root(project_dir: Path) -> Path:
    """A BEAT content tree with core, one module and a standalone agent."""
    root = project_dir / "beat"
    _write(root / "core" / "agents" / "dev.md", DEV_AGENT)
    _write(root / "core" / "tasks" / "dev-story.md", "# Implement a story\n\nSteps.\n")
    _write(
        root / "core" / "tools" / "shard-doc.xml",
        '<tool id="shard-doc" name="Shard Document">\n  Split it.\n</tool>\n',
    )
    _write(
        root / "core" / "workflows" / "party-mode.yaml",
        "workflow: party-mode\ndescription: Group chat\n",
    )
    _write(root / "bmm" / "agents" / "pm.md", PM_AGENT)
    _write(root / "bmm" / "agents" / "pm.customize.md", "overrides\n")
    _write(
        root / "bmm" / "agents" / "local.md",
        '<agent id="local" localskip="true">\n</agent>\n',
    )
    _write(root / "agents" / "helper" / "helper.md", "# Helper\n")
    return root


@pytest.fixture
def make_artifact() -> Callable[..., ArtifactRecord]:
    """Factory for in-memory artifact records."""

    def _make(
        name: str = "dev",
        module: str = "core",
        kind: ArtifactKind = ArtifactKind.AGENT,
        content: str = DEV_AGENT,
    ) -> ArtifactRecord:
        return ArtifactRecord(
            module=module,
            kind=kind,
            name=name,
            source_path=Path(module) / kind.dirname / f"{name}.md",
            raw_content=content,
        )

    return _make
