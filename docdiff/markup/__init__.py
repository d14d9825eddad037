"""Highlight markup: tagged span model with strip and render interpreters."""

from docdiff.markup.service import (
    HIGHLIGHT_COLORS,
    Span,
    MarkupDocument,
    parse_markup,
    strip_highlights,
    render_highlights,
    normalize_markdown,
)

__all__ = [
    "HIGHLIGHT_COLORS",
    "Span",
    "MarkupDocument",
    "parse_markup",
    "strip_highlights",
    "render_highlights",
    "normalize_markdown",
]
