"""Best-effort title extraction from artifact content."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

import frontmatter
import yaml

from beatsync.errors import MalformedArtifactError

logger = logging.getLogger(__name__)

TITLE_ATTR_RE = re.compile(r'title="([^"]+)"')
NAME_ATTR_RE = re.compile(r'name="([^"]+)"')
NAME_ELEMENT_RE = re.compile(r"<name>([^<]+)</name>")
FRONTMATTER_RE = re.compile(r"^---\s*\n[\s\S]*?\n---\s*\n")

FRONTMATTER_TITLE_KEYS: tuple[str, ...] = ("title", "name", "description")

TitleSource = Callable[[str], str | None]


def _regex_source(pattern: re.Pattern[str]) -> TitleSource:
    def source(content: str) -> str | None:
        match = pattern.search(content)
        return match.group(1) if match else None

    return source


def parse_frontmatter(content: str) -> dict[str, object]:
    """Parse a leading YAML frontmatter block.

    Returns an empty dict when there is no frontmatter.

    Raises:
        MalformedArtifactError: the frontmatter is not valid YAML.
    """
    if not FRONTMATTER_RE.match(content):
        return {}
    try:
        metadata, _body = frontmatter.parse(content)
    except yaml.YAMLError as e:
        raise MalformedArtifactError(f"Invalid frontmatter: {e}") from e
    if not isinstance(metadata, dict):
        return {}
    return metadata


def _frontmatter_source(content: str) -> str | None:
    metadata = parse_frontmatter(content)
    for key in FRONTMATTER_TITLE_KEYS:
        value = metadata.get(key)
        if value is not None and str(value).strip():
            return str(value)
    return None


# Ordered: first non-empty match wins
TITLE_SOURCES: tuple[TitleSource, ...] = (
    _regex_source(TITLE_ATTR_RE),
    _regex_source(NAME_ATTR_RE),
    _regex_source(NAME_ELEMENT_RE),
    _frontmatter_source,
)


def title_case(name: str) -> str:
    """Format an artifact name as a title: "dev-story" -> "Dev Story"."""
    words = re.split(r"[-_]+", name)
    return " ".join(w[:1].upper() + w[1:] for w in words if w)


def extract_title(content: str, name: str, default: str = "Untitled") -> str:
    """Extract a display title from artifact content.

    Runs TITLE_SOURCES in order, then falls back to title_case(name), then to
    `default`. Always returns a non-empty, single-line string: runs of
    whitespace (including newlines) collapse to one space.
    """
    for source in TITLE_SOURCES:
        try:
            value = source(content)
        except MalformedArtifactError as e:
            logger.info("Ignoring malformed metadata in '%s': %s", name, e)
            continue
        if value:
            collapsed = " ".join(value.split())
            if collapsed:
                return collapsed

    return title_case(name) or default


def strip_frontmatter(content: str) -> str:
    """Remove a leading frontmatter block, if any."""
    return FRONTMATTER_RE.sub("", content, count=1)
