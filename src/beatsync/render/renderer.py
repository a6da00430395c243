"""Generic renderer mapping artifacts to target files."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from beatsync.artifacts.base import ArtifactKind, ArtifactRecord
from beatsync.render.envelopes import EnvelopeContext, wrap
from beatsync.render.titles import extract_title, strip_frontmatter
from beatsync.targets.base import EnvelopeFormat, NamingStrategy, RenderTarget

INDEX_BASENAME = "index"
INDEX_TITLE = "Master Index"


@dataclass(frozen=True)
class RenderedFile:
    """Final content and destination of one rendered artifact."""

    destination_path: Path
    content: str


def escape_segment(value: str) -> str:
    """Percent-escape '%' and '-' so a flat name segment never contains '-'."""
    return value.replace("%", "%25").replace("-", "%2D")


def flat_filename(artifact: ArtifactRecord, target: RenderTarget) -> str:
    """Build a flat file name: {marker}{module}-{kind}-{name}{ext}.

    The module segment is escaped and the kind is a fixed hyphen-free
    token, so distinct identities always produce distinct names.
    """
    module = escape_segment(artifact.module)
    return f"{target.marker}{module}-{artifact.kind.value}-{artifact.name}{target.extension}"


def destination_path(
    artifact: ArtifactRecord, target: RenderTarget, project_dir: Path = Path(".")
) -> Path:
    """Compute where an artifact is written for a target."""
    root = target.destination_root(project_dir)
    if target.naming == NamingStrategy.FLAT:
        return root / flat_filename(artifact, target)
    return root / artifact.module / artifact.kind.dirname / f"{artifact.name}{target.extension}"


def render_content(artifact: ArtifactRecord, target: RenderTarget) -> str:
    """Wrap an artifact's content in the target's envelope."""
    body = artifact.raw_content
    if target.strip_frontmatter and target.envelope != EnvelopeFormat.NONE:
        body = strip_frontmatter(body)

    ctx = EnvelopeContext(
        title=extract_title(artifact.raw_content, artifact.name, artifact.kind.label),
        module=artifact.module,
        kind=artifact.kind.label,
        body=body,
    )
    return wrap(target.envelope, ctx)


def render(
    artifact: ArtifactRecord, target: RenderTarget, project_dir: Path = Path(".")
) -> RenderedFile:
    """Render one artifact for a target. No side effects."""
    return RenderedFile(
        destination_path=destination_path(artifact, target, project_dir),
        content=render_content(artifact, target),
    )


def render_all(
    artifacts: Iterable[ArtifactRecord],
    target: RenderTarget,
    project_dir: Path = Path("."),
) -> list[RenderedFile]:
    """Render every artifact whose kind the target accepts.

    Raises:
        ValueError: two artifacts map to the same destination path.
    """
    files: list[RenderedFile] = []
    owners: dict[Path, ArtifactRecord] = {}
    for artifact in artifacts:
        if not target.accepts(artifact.kind):
            continue
        rendered = render(artifact, target, project_dir)
        existing = owners.get(rendered.destination_path)
        if existing is not None:
            raise ValueError(
                f"{target.name}: {existing.source_path} and {artifact.source_path} "
                f"both map to {rendered.destination_path}"
            )
        owners[rendered.destination_path] = artifact
        files.append(rendered)
    return files


def _index_body(artifacts: list[ArtifactRecord], target: RenderTarget) -> str:
    lines = [
        f"# BEAT Method - {INDEX_TITLE}",
        "",
        "All BEAT agents, tasks, tools and workflows installed for this project.",
        f"Reference an item as @{target.owned_dir}/{{module}}/{{kind}}/{{name}}.",
        "",
        "## Available Modules",
        "",
    ]

    modules: list[str] = []
    for artifact in artifacts:
        if artifact.module not in modules:
            modules.append(artifact.module)

    for module in modules:
        lines.append(f"### {module.upper()}")
        lines.append("")
        for kind in ArtifactKind:
            items = [a for a in artifacts if a.module == module and a.kind == kind]
            if not items:
                continue
            lines.append(f"**{kind.label}s:**")
            for item in items:
                ref = f"@{target.owned_dir}/{module}/{kind.dirname}/{item.name}"
                title = extract_title(item.raw_content, item.name, kind.label)
                lines.append(f"- {ref} - {title}")
            lines.append("")

    return "\n".join(lines)


def render_index(
    artifacts: Iterable[ArtifactRecord],
    target: RenderTarget,
    project_dir: Path = Path("."),
) -> RenderedFile:
    """Render the module index listing every accepted artifact."""
    accepted = [a for a in artifacts if target.accepts(a.kind)]
    ctx = EnvelopeContext(
        title=INDEX_TITLE,
        module="beat",
        kind="Index",
        body=_index_body(accepted, target),
        description=f"BEAT Method - {INDEX_TITLE}",
    )
    path = target.destination_root(project_dir) / f"{INDEX_BASENAME}{target.extension}"
    return RenderedFile(destination_path=path, content=wrap(target.envelope, ctx))
