"""
Highlight markup model.

Annotated provision text is markdown with inline highlight spans:

    The **person** <span class="who">conducting a business</span> must ...

The text is parsed once into a flat sequence of spans tagged with their
highlight category. Stripping and styled rendering are two interpreters over
that one structure.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from docdiff.ontology import HIGHLIGHT_CATEGORIES

# Category -> display colour, "default" for the untagged view
HIGHLIGHT_COLORS: dict[str, str] = {
    "default": "#4B5563",
    "who": "blue",
    "when": "orange",
    "where": "fuchsia",
    "how": "green",
    "tone": "darkorange",
    "penalty": "red",
}


@dataclass(frozen=True)
class Span:
    """A run of HTML-safe text, optionally tagged with a highlight category."""

    text: str
    category: str | None = None


@dataclass(frozen=True)
class MarkupDocument:
    """Annotated text as a flat sequence of spans."""

    spans: tuple[Span, ...] = ()

    @property
    def categories(self) -> set[str]:
        return {s.category for s in self.spans if s.category}

    def strip(self) -> str:
        """Plain markdown with every highlight removed."""
        return "".join(s.text for s in self.spans)

    def render(self, colors: dict[str, str] | None = None) -> str:
        """Markdown with highlighted spans as inline-styled HTML."""
        colors = colors or HIGHLIGHT_COLORS
        out = []
        for span in self.spans:
            if span.category is None:
                out.append(span.text)
                continue
            color = colors.get(span.category, colors.get("default", "#4B5563"))
            out.append(
                f'<span class="{span.category}" style="background-color: {color}; '
                f'color: white; font-weight: bold;">{span.text}</span>'
            )
        return "".join(out)


def _span_category(tag: Tag) -> str | None:
    classes = tag.get("class") or []
    for name in classes:
        if name in HIGHLIGHT_CATEGORIES:
            return name
    return classes[0] if classes else None


def parse_markup(text: str | None) -> MarkupDocument:
    """Parse annotated markdown into spans.

    Span tags carry their category in the class attribute; nested spans take
    the innermost category. Other inline tags are kept verbatim as text.
    Text runs are re-escaped, so entities such as ``&lt;`` survive both
    interpreters instead of turning into live markup.
    """
    soup = BeautifulSoup(text or "", "html.parser")
    spans: list[Span] = []

    def walk(node, category: str | None) -> None:
        for child in node.children:
            if isinstance(child, NavigableString):
                if str(child):
                    spans.append(Span(html.escape(str(child), quote=False), category))
            elif isinstance(child, Tag) and child.name == "span":
                walk(child, _span_category(child) or category)
            elif isinstance(child, Tag):
                spans.append(Span(str(child), category))

    walk(soup, None)
    return MarkupDocument(spans=_merge(spans))


def _merge(spans: list[Span]) -> tuple[Span, ...]:
    """Join neighbouring spans of the same category."""
    merged: list[Span] = []
    for span in spans:
        if merged and merged[-1].category == span.category:
            merged[-1] = Span(merged[-1].text + span.text, span.category)
        else:
            merged.append(span)
    return tuple(merged)


def strip_highlights(text: str | None) -> str:
    return parse_markup(text).strip()


def render_highlights(text: str | None) -> str:
    return parse_markup(text).render()


def normalize_markdown(text: str | None) -> str:
    """Close a dangling ``**`` so one unbalanced bold does not swallow the rest."""
    if not text:
        return ""
    if text.count("**") % 2 != 0:
        text += "**"
    return text
