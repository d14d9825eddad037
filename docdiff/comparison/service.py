"""
Provision comparison view.

For one selected provision: its counterparts at a chosen tier, its annotated
text, and the comparison notes for a selected counterpart, one tab per
highlight category.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from docdiff.alignment.service import TierIndex
from docdiff.markup import normalize_markdown, render_highlights, strip_highlights
from docdiff.ontology import (
    ColoringRecord,
    ComparisonNote,
    HIGHLIGHT_CATEGORIES,
    Outline,
    Provision,
    Side,
    Tier,
    parse_records,
)
from docdiff.outline.service import all_provision_ids, find_provision

DEFAULT_TAB = "default"
HIGHLIGHT_TABS: tuple[str, ...] = (DEFAULT_TAB,) + HIGHLIGHT_CATEGORIES

# Fallback order for the clean full text of a provision
CLEAN_TEXT_ORDER: tuple[str, ...] = ("how", "who", "when", "where", "tone", "penalty")

NO_TEXT = "No text found"
NO_COMPARISON = "No comparison text available"


def side_for_jurisdiction(token: str, settings=None) -> Side | None:
    """Map a route jurisdiction token (e.g. "nsw") to its side."""
    if settings is None:
        from docdiff.config import get_settings
        settings = get_settings()
    token = (token or "").lower()
    if token == settings.jurisdiction_a.lower():
        return Side.A
    if token == settings.jurisdiction_b.lower():
        return Side.B
    return None


@dataclass
class CounterpartEntry:
    """A counterpart provision as listed beside the selected one."""

    id: str
    title: str | None = None

    @property
    def known(self) -> bool:
        """False when the id is not in the opposite outline."""
        return self.title is not None


class ProvisionComparison:
    """View model behind the provision comparison page.

    Malformed coloring and comparison records are skipped individually.
    """

    def __init__(
        self,
        outlines: Mapping[Side, Outline],
        index: TierIndex,
        coloring: Iterable[ColoringRecord | Mapping[str, Any]] | None = None,
        comparisons: Iterable[ComparisonNote | Mapping[str, Any]] | None = None,
    ):
        self.outlines = dict(outlines)
        self.index = index
        self.coloring: dict[str, ColoringRecord] = {
            record.id: record for record in parse_records(ColoringRecord, coloring)
        }
        self.comparisons: list[ComparisonNote] = parse_records(ComparisonNote, comparisons)
        self._display_order = {
            side: {pid: i for i, pid in enumerate(all_provision_ids(outline))}
            for side, outline in self.outlines.items()
        }

    # -------------------------------------------------------------------------
    # Counterparts
    # -------------------------------------------------------------------------

    def provision(self, side: Side, provision_id: str) -> Provision | None:
        return find_provision(self.outlines.get(side), provision_id)

    def default_tier(self, side: Side, provision_id: str) -> Tier:
        """Highest tier with any counterpart; HIGH when there are none."""
        return self.index.best_tier(side, provision_id) or Tier.HIGH

    def counterparts(self, side: Side, provision_id: str, tier: Tier) -> list[CounterpartEntry]:
        """Counterparts at one tier, in the opposite outline's display order.

        Ids missing from the opposite outline are listed last with no title.
        """
        opposite = side.other
        order = self._display_order.get(opposite, {})
        ids = sorted(
            self.index.counterparts(tier, side, provision_id),
            key=lambda pid: (pid not in order, order.get(pid, 0), pid),
        )
        entries = []
        for pid in ids:
            provision = self.provision(opposite, pid)
            entries.append(CounterpartEntry(id=pid, title=provision.title if provision else None))
        return entries

    # -------------------------------------------------------------------------
    # Annotated text
    # -------------------------------------------------------------------------

    def clean_text(self, provision_id: str) -> str:
        """Full provision text with highlights stripped."""
        record = self.coloring.get(provision_id)
        if record is None:
            return NO_TEXT
        for category in CLEAN_TEXT_ORDER:
            text = record.category_text(category)
            if text:
                return strip_highlights(text)
        return ""

    def tab_text(self, provision_id: str | None, tab: str) -> str:
        """Markdown for one provision under a highlight tab."""
        if tab == DEFAULT_TAB:
            return self.clean_text(provision_id or "")
        record = self.coloring.get(provision_id or "")
        if record is None:
            return NO_TEXT
        return render_highlights(record.category_text(tab))

    # -------------------------------------------------------------------------
    # Comparison notes
    # -------------------------------------------------------------------------

    def comparison_note(self, first: str, second: str) -> ComparisonNote | None:
        """Note for an unordered provision pair."""
        for note in self.comparisons:
            if note.involves(first, second):
                return note
        return None

    def comparison_text(self, first: str, second: str, tab: str) -> str:
        note = self.comparison_note(first, second)
        text = note.category_text(tab) if note else None
        return normalize_markdown(text or NO_COMPARISON)
