"""Envelope templates wrapping an artifact body for a target.

Each envelope is a pure string template over title, module, kind and
body. None of them validates the body.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import yaml

from beatsync.targets.base import EnvelopeFormat


@dataclass(frozen=True)
class EnvelopeContext:
    """Values available to an envelope template."""

    title: str
    module: str
    kind: str  # display label, e.g. "Agent"
    body: str
    description: str | None = None  # overrides the generated description

    @property
    def resolved_description(self) -> str:
        if self.description is not None:
            return self.description
        return f"BEAT {self.module.upper()} {self.kind}: {self.title}"


def _none(ctx: EnvelopeContext) -> str:
    return ctx.body


def _markdown(ctx: EnvelopeContext) -> str:
    return (
        f"# {ctx.title} {ctx.kind}\n"
        "\n"
        f"{ctx.body.strip()}\n"
        "\n"
        "## Module\n"
        "\n"
        f"BEAT {ctx.module.upper()} module\n"
    )


def _frontmatter(ctx: EnvelopeContext) -> str:
    header = yaml.safe_dump(
        {"description": ctx.resolved_description},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=1000,
    ).rstrip()
    return f"---\n{header}\n---\n\n{ctx.body.strip()}\n"


def _mdc(ctx: EnvelopeContext) -> str:
    return (
        "---\n"
        f"description: {ctx.resolved_description}\n"
        "globs:\n"
        "alwaysApply: false\n"
        "---\n"
        "\n"
        f"{ctx.body.strip()}\n"
    )


_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _toml_escape(value: str, keep: str = "") -> str:
    """Escape backslashes, quotes and control characters not in `keep`."""
    out: list[str] = []
    for ch in value:
        if ch in keep:
            out.append(ch)
        elif ch in _TOML_ESCAPES:
            out.append(_TOML_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


def _toml_basic_string(value: str) -> str:
    return _toml_escape(value)


def _toml_multiline_string(value: str) -> str:
    # Raw newlines, tabs and quotes are legal; only a quote run may close the string
    return _toml_escape(value, keep='\n\t"').replace('"""', '""\\"')


def _toml(ctx: EnvelopeContext) -> str:
    return (
        f'description = "{_toml_basic_string(ctx.resolved_description)}"\n'
        'prompt = """\n'
        f"{_toml_multiline_string(ctx.body.strip())}\n"
        '"""\n'
    )


ENVELOPES: dict[EnvelopeFormat, Callable[[EnvelopeContext], str]] = {
    EnvelopeFormat.NONE: _none,
    EnvelopeFormat.MARKDOWN: _markdown,
    EnvelopeFormat.FRONTMATTER: _frontmatter,
    EnvelopeFormat.MDC: _mdc,
    EnvelopeFormat.TOML: _toml,
}


def wrap(envelope: EnvelopeFormat, ctx: EnvelopeContext) -> str:
    """Wrap a body in the given envelope format."""
    return ENVELOPES[envelope](ctx)
