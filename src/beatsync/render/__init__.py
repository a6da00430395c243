"""Rendering of artifacts into target file layouts."""

from beatsync.render.envelopes import EnvelopeContext, wrap
from beatsync.render.renderer import (
    RenderedFile,
    destination_path,
    flat_filename,
    render,
    render_all,
    render_index,
)
from beatsync.render.titles import extract_title, strip_frontmatter, title_case

__all__ = [
    "EnvelopeContext",
    "RenderedFile",
    "destination_path",
    "extract_title",
    "flat_filename",
    "render",
    "render_all",
    "render_index",
    "strip_frontmatter",
    "title_case",
    "wrap",
]
