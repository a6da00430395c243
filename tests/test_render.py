"""Tests for title extraction, envelopes and rendering."""

import logging
import tomllib
from collections.abc import Callable
from itertools import combinations
from pathlib import Path

import frontmatter
import pytest

from beatsync.artifacts import ArtifactKind, ArtifactRecord
from beatsync.render import (
    EnvelopeContext,
    destination_path,
    extract_title,
    flat_filename,
    render,
    render_all,
    render_index,
    strip_frontmatter,
    title_case,
    wrap,
)
from beatsync.targets import CLINE, CURSOR, IFLOW, QWEN, TARGETS, TRAE, WINDSURF
from beatsync.targets.base import EnvelopeFormat

PM_AGENT = '---\nname: "Product Manager"\n---\n\nYou are the PM.\n'


class TestExtractTitle:
    """Tests for extract_title()."""

    def test_title_attribute(self) -> None:
        """Test that a title attribute is used first."""
        content = '<agent title="Developer" name="dev">\n</agent>\n'
        assert extract_title(content, "dev") == "Developer"

    def test_name_attribute(self) -> None:
        """Test that a name attribute is used without a title attribute."""
        content = '<tool id="shard-doc" name="Shard Document">\n</tool>\n'
        assert extract_title(content, "shard-doc") == "Shard Document"

    def test_name_element(self) -> None:
        """Test that a <name> element is used."""
        content = "<task>\n  <name>Create Story</name>\n</task>\n"
        assert extract_title(content, "create-story") == "Create Story"

    def test_frontmatter_title_then_name_then_description(self) -> None:
        """Test frontmatter key precedence."""
        assert extract_title("---\ntitle: T\nname: N\n---\n\nbody\n", "x") == "T"
        assert extract_title("---\nname: N\ndescription: D\n---\n\nbody\n", "x") == "N"
        assert extract_title("---\ndescription: D\n---\n\nbody\n", "x") == "D"

    def test_quoted_frontmatter_name(self) -> None:
        """Test a quoted frontmatter value."""
        assert extract_title(PM_AGENT, "pm") == "Product Manager"

    def test_falls_back_to_title_cased_name(self) -> None:
        """Test the name fallback when nothing matches."""
        assert extract_title("# Implement a story\n", "dev-story") == "Dev Story"

    def test_falls_back_to_default(self) -> None:
        """Test the default when the name is empty too."""
        assert extract_title("", "", "Task") == "Task"

    def test_malformed_frontmatter_is_logged_and_ignored(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that bad YAML never raises and is logged at INFO."""
        content = "---\ntitle: [unclosed\n---\n\nbody\n"

        with caplog.at_level(logging.INFO, logger="beatsync.render.titles"):
            title = extract_title(content, "broken-one")

        assert title == "Broken One"
        assert "Ignoring malformed metadata in 'broken-one'" in caplog.text

    def test_block_scalar_title_is_single_line(self) -> None:
        """Test that whitespace runs in an extracted title collapse."""
        content = "---\ndescription: |\n  Line one\n  Line two\n---\n\nBody.\n"
        assert extract_title(content, "t") == "Line one Line two"
        assert extract_title('<agent title="  Lead\n  Dev ">', "x") == "Lead Dev"


class TestTitleHelpers:
    """Tests for title_case() and strip_frontmatter()."""

    def test_title_case(self) -> None:
        """Test hyphen and underscore splitting."""
        assert title_case("dev-story") == "Dev Story"
        assert title_case("party_mode") == "Party Mode"

    def test_strip_frontmatter(self) -> None:
        """Test that only the leading block is removed."""
        assert strip_frontmatter(PM_AGENT) == "You are the PM.\n"
        assert strip_frontmatter("no header\n") == "no header\n"


class TestEnvelopes:
    """Tests for envelope templates."""

    def test_none_returns_body(self) -> None:
        """Test that the none envelope is the identity."""
        ctx = EnvelopeContext(title="T", module="core", kind="Agent", body="raw\n")
        assert wrap(EnvelopeFormat.NONE, ctx) == "raw\n"

    def test_markdown(self) -> None:
        """Test the markdown envelope layout."""
        ctx = EnvelopeContext(title="Developer", module="core", kind="Agent", body="\nbody\n")
        assert wrap(EnvelopeFormat.MARKDOWN, ctx) == (
            "# Developer Agent\n\nbody\n\n## Module\n\nBEAT CORE module\n"
        )

    def test_frontmatter_parses(self) -> None:
        """Test that the frontmatter envelope is valid frontmatter."""
        ctx = EnvelopeContext(title="Dev: Lead", module="bmm", kind="Agent", body="body")
        post = frontmatter.loads(wrap(EnvelopeFormat.FRONTMATTER, ctx))

        assert post.metadata["description"] == "BEAT BMM Agent: Dev: Lead"
        assert post.content.strip() == "body"

    def test_mdc_header(self) -> None:
        """Test the MDC header fields."""
        ctx = EnvelopeContext(title="Developer", module="core", kind="Agent", body="body")
        assert wrap(EnvelopeFormat.MDC, ctx).startswith(
            "---\ndescription: BEAT CORE Agent: Developer\nglobs:\nalwaysApply: false\n---\n"
        )

    def test_toml_escapes_body(self) -> None:
        """Test that quotes and backslashes survive a TOML parse."""
        body = 'Use """triple""" quotes and C:\\path "here"'
        ctx = EnvelopeContext(title='Say "hi"', module="core", kind="Task", body=body)

        parsed = tomllib.loads(wrap(EnvelopeFormat.TOML, ctx))

        assert parsed["description"] == 'BEAT CORE Task: Say "hi"'
        assert parsed["prompt"] == body + "\n"

    def test_description_override(self) -> None:
        """Test that an explicit description replaces the generated one."""
        ctx = EnvelopeContext(
            title="T", module="core", kind="Agent", body="b", description="Custom"
        )
        assert ctx.resolved_description == "Custom"

    def test_toml_escapes_control_characters(self) -> None:
        """Test that control characters in either string survive a TOML parse."""
        ctx = EnvelopeContext(
            title="a\tb\x01c\nd", module="core", kind="Task", body="x\x07y\r\nz\ttab"
        )

        parsed = tomllib.loads(wrap(EnvelopeFormat.TOML, ctx))

        assert parsed["description"] == "BEAT CORE Task: a\tb\x01c\nd"
        assert parsed["prompt"] == "x\x07y\r\nz\ttab\n"

    def test_qwen_block_scalar_description_parses(
        self, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test that a multi-line frontmatter title renders as valid TOML."""
        artifact = make_artifact(
            name="t",
            kind=ArtifactKind.TASK,
            content="---\ndescription: |\n  Line one\n  Line two\n---\n\nBody.\n",
        )

        parsed = tomllib.loads(render(artifact, QWEN).content)

        assert parsed["description"] == "BEAT CORE Task: Line one Line two"
        assert parsed["prompt"] == "Body.\n"


class TestDestinationPath:
    """Tests for destination naming."""

    def test_flat(
        self, project_dir: Path, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test the flat naming scheme."""
        path = destination_path(make_artifact(), CLINE, project_dir)
        assert path == project_dir / ".clinerules" / "workflows" / "beat-core-agent-dev.md"

    def test_nested(
        self, project_dir: Path, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test the nested naming scheme."""
        path = destination_path(make_artifact(kind=ArtifactKind.TASK), QWEN, project_dir)
        assert path == project_dir / ".qwen/commands/beat/core/tasks/dev.toml"

    def test_flat_module_is_escaped(
        self, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test that hyphens in a module name cannot shift segments."""
        a = flat_filename(make_artifact(module="x-agent", name="y"), CLINE)
        b = flat_filename(make_artifact(module="x", name="agent-y"), CLINE)

        assert a == "beat-x%2Dagent-agent-y.md"
        assert b == "beat-x-agent-agent-y.md"

    def test_distinct_identities_never_collide(
        self, project_dir: Path, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test injectivity of naming for every registered target."""
        records = [
            make_artifact(module=module, name=name, kind=kind)
            for module in ("core", "x", "x-agent", "x-", "x%2D", "standalone")
            for name in ("y", "agent-y", "dev", "task-dev")
            for kind in ArtifactKind
        ]
        for target in TARGETS:
            for a, b in combinations(records, 2):
                assert destination_path(a, target, project_dir) != destination_path(
                    b, target, project_dir
                ), f"{target.name}: {a.identity} vs {b.identity}"


class TestRender:
    """Tests for render() and render_all()."""

    def test_cline_passes_content_through(
        self, project_dir: Path, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test a flat target with no envelope."""
        artifact = make_artifact()
        rendered = render(artifact, CLINE, project_dir)

        assert rendered.destination_path.name == "beat-core-agent-dev.md"
        assert rendered.content == artifact.raw_content
        assert "Developer" in rendered.content

    def test_render_is_deterministic(
        self, project_dir: Path, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test that rendering twice gives identical results."""
        artifact = make_artifact()
        for target in TARGETS:
            assert render(artifact, target, project_dir) == render(artifact, target, project_dir)

    def test_markdown_title_uses_kind_label(
        self, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test the markdown heading for a titled artifact."""
        content = render(make_artifact(), TRAE).content
        assert content.startswith("# Developer Agent\n")
        assert content.endswith("BEAT CORE module\n")

    def test_frontmatter_source_is_not_doubled(
        self, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test that source frontmatter is stripped before wrapping."""
        content = render(make_artifact(name="pm", module="bmm", content=PM_AGENT), WINDSURF).content

        assert content.count("---") == 2
        assert "BEAT BMM Agent: Product Manager" in content
        assert "You are the PM." in content

    def test_render_all_skips_unaccepted_kinds(
        self, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test that kinds a target does not accept are not rendered."""
        files = render_all(
            [make_artifact(), make_artifact(name="shard", kind=ArtifactKind.TOOL)], IFLOW
        )
        assert [f.destination_path.name for f in files] == ["dev.md"]

    def test_render_all_rejects_collisions(
        self, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test that two artifacts with one destination raise."""
        with pytest.raises(ValueError, match="both map to"):
            render_all([make_artifact(), make_artifact()], CLINE)


class TestRenderIndex:
    """Tests for render_index()."""

    def test_index_lists_artifacts(
        self, project_dir: Path, make_artifact: Callable[..., ArtifactRecord]
    ) -> None:
        """Test the index path and references."""
        artifacts = [
            make_artifact(),
            make_artifact(name="dev-story", kind=ArtifactKind.TASK, content="# Steps\n"),
        ]

        index = render_index(artifacts, CURSOR, project_dir)

        assert index.destination_path == project_dir / ".cursor/rules/beat/index.mdc"
        assert "description: BEAT Method - Master Index" in index.content
        assert "- @beat/core/agents/dev - Developer" in index.content
        assert "- @beat/core/tasks/dev-story - Dev Story" in index.content
