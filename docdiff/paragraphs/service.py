"""
Paragraph pair resolver for the climate report comparison.

Selecting a paragraph (the anchor) triggers an on-demand lookup of its
counterpart paragraphs in the other report. The resolved pairs replace the
previous match list wholesale.

Each lookup carries a ticket with a monotonically increasing sequence number.
A response is applied only if its ticket is the latest one issued, so an
earlier lookup that completes after a newer selection cannot overwrite it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Literal, Mapping

from docdiff.errors import ProviderError
from docdiff.ontology import Paragraph, ParagraphPair, Side, coerce_count, parse_records

logger = logging.getLogger(__name__)

PairLookup = Callable[[str, str], Iterable[ParagraphPair | Mapping[str, Any]]]


def missing_placeholder(para_id: str) -> str:
    """Display text for a counterpart id absent from the paragraph list."""
    return f"(missing #{para_id})"


def paragraph_anchor(side: Side, index: int) -> str:
    """In-page anchor id of a paragraph, the scroll target of its minimap tick."""
    return f"para-{side.value}-{index}"


# =============================================================================
# Paragraph Documents
# =============================================================================


@dataclass
class MinimapCell:
    """One tick on a document's minimap."""

    index: int
    para_id: str
    position: float  # percent from the top
    state: Literal["selected", "matched", "has_pairs", "none"]


class ParagraphDocuments:
    """Both reports' paragraphs, text lookups and aligned pair counts.

    Built once at load time; the id -> text tables are what the resolver uses
    to show the opposite side's text for each resolved pair.
    """

    def __init__(
        self,
        paragraphs: Mapping[Side, list[Paragraph]],
        pair_counts: Mapping[Side, Mapping[str, int]] | None = None,
    ):
        self.paragraphs: dict[Side, list[Paragraph]] = {
            side: list(paragraphs.get(side, [])) for side in Side
        }
        self.text_by_id: dict[Side, dict[str, str]] = {
            side: {p.para_id: p.text for p in paras}
            for side, paras in self.paragraphs.items()
        }
        counts = pair_counts or {}
        self.counts: dict[Side, list[int]] = {
            side: [coerce_count(counts.get(side, {}).get(p.para_id)) for p in paras]
            for side, paras in self.paragraphs.items()
        }

    @classmethod
    def from_raw(
        cls,
        raw_a: list[dict] | None,
        raw_b: list[dict] | None,
        counts_a: Mapping[str, int] | None = None,
        counts_b: Mapping[str, int] | None = None,
    ) -> "ParagraphDocuments":
        """Build from provider JSON, skipping malformed paragraphs."""
        return cls(
            paragraphs={
                Side.A: parse_records(Paragraph, raw_a),
                Side.B: parse_records(Paragraph, raw_b),
            },
            pair_counts={
                Side.A: counts_a if isinstance(counts_a, Mapping) else {},
                Side.B: counts_b if isinstance(counts_b, Mapping) else {},
            },
        )

    def text_for(self, side: Side, para_id: str) -> str | None:
        return self.text_by_id[side].get(para_id)

    def display_text(self, side: Side, para_id: str) -> str:
        """Paragraph text, or a placeholder naming the missing id."""
        text = self.text_for(side, para_id)
        return text if text is not None else missing_placeholder(para_id)

    def pair_count(self, side: Side, index: int) -> int:
        counts = self.counts[side]
        return counts[index] if 0 <= index < len(counts) else 0

    def filter(self, side: Side, search_term: str) -> list[tuple[int, Paragraph]]:
        """(index, paragraph) for paragraphs containing the term, case-insensitive.

        The index is the paragraph's position in the full list, which drives
        counts and scroll targets even when the list is filtered.
        """
        needle = (search_term or "").lower()
        return [
            (i, p) for i, p in enumerate(self.paragraphs[side])
            if needle in (p.text or "").lower()
        ]


# =============================================================================
# Match State
# =============================================================================


@dataclass(frozen=True)
class LookupTicket:
    """Identifies one outgoing pair lookup."""

    seq: int
    side: Side
    para_id: str


@dataclass
class PairDetail:
    """Side-by-side detail for one resolved pair."""

    text_a: str
    text_b: str
    similarity: float | None = None
    d_4: Any = None

    @property
    def similarity_label(self) -> str:
        if isinstance(self.similarity, (int, float)):
            return f"Similarity: {self.similarity:.3f}"
        return "No comparison available."


@dataclass
class ParagraphMatchState:
    """Anchor selection, resolved pairs and highlight state.

    Only one anchor is active at a time. Selecting a new anchor clears the
    previous match list immediately, before its own lookup resolves.
    """

    documents: ParagraphDocuments
    document_tokens: dict[Side, str] = field(
        default_factory=lambda: {Side.A: "ncr", Side.B: "singapore"}
    )
    selected_side: Side | None = None
    selected_para_id: str | None = None
    matches: list[ParagraphPair] = field(default_factory=list)
    matched_texts: list[str] = field(default_factory=list)
    error: str | None = None
    _latest_seq: int = 0

    @classmethod
    def from_settings(cls, documents: ParagraphDocuments, settings=None) -> "ParagraphMatchState":
        if settings is None:
            from docdiff.config import get_settings
            settings = get_settings()
        return cls(
            documents=documents,
            document_tokens={
                Side.A: settings.climate_document_a,
                Side.B: settings.climate_document_b,
            },
        )

    def document_for(self, side: Side) -> str:
        """Document token the provider keys the lookup by."""
        return self.document_tokens[side]

    # -------------------------------------------------------------------------
    # Lookup protocol
    # -------------------------------------------------------------------------

    def select(self, side: Side, para_id: str) -> LookupTicket:
        """Make a paragraph the anchor and issue a ticket for its lookup."""
        self._latest_seq += 1
        self.selected_side = side
        self.selected_para_id = para_id
        self.matches = []
        self.matched_texts = []
        self.error = None
        return LookupTicket(seq=self._latest_seq, side=side, para_id=para_id)

    def is_current(self, ticket: LookupTicket) -> bool:
        return ticket.seq == self._latest_seq

    def apply(
        self,
        ticket: LookupTicket,
        pairs: Iterable[ParagraphPair | Mapping[str, Any]],
    ) -> bool:
        """Apply a lookup result; stale tickets are ignored.

        Malformed pair records are skipped; the rest still resolve.

        Returns:
            True if the result was applied
        """
        if not self.is_current(ticket):
            logger.debug("Discarding stale pair lookup #%d for %s", ticket.seq, ticket.para_id)
            return False
        resolved = parse_records(ParagraphPair, pairs)
        opposite = ticket.side.other
        self.matches = resolved
        self.matched_texts = [
            self.documents.display_text(opposite, pair.para_id_for(opposite))
            for pair in resolved
        ]
        return True

    def fail(self, ticket: LookupTicket, exc: Exception) -> bool:
        """Record a failed lookup: clear matches, keep the page interactive."""
        if not self.is_current(ticket):
            logger.debug("Ignoring failure of stale pair lookup #%d", ticket.seq)
            return False
        logger.warning("Pair lookup for %s failed: %s", ticket.para_id, exc)
        self.matches = []
        self.matched_texts = []
        self.error = str(exc)
        return True

    def resolve(self, side: Side, para_id: str, lookup: PairLookup) -> bool:
        """Select an anchor, run its lookup and apply the outcome.

        Args:
            side: Side the paragraph was selected on
            para_id: Anchor paragraph id
            lookup: Callable (document token, para_id) -> pair records

        Returns:
            True if this lookup's outcome (result or failure) was applied
        """
        ticket = self.select(side, para_id)
        try:
            pairs = list(lookup(self.document_for(side), para_id) or [])
            return self.apply(ticket, pairs)
        except ProviderError as e:
            return self.fail(ticket, e)

    def clear(self) -> None:
        """Drop the anchor; any in-flight lookup becomes stale."""
        self._latest_seq += 1
        self.selected_side = None
        self.selected_para_id = None
        self.matches = []
        self.matched_texts = []
        self.error = None

    # -------------------------------------------------------------------------
    # Highlight & detail
    # -------------------------------------------------------------------------

    def counterpart_ids(self, side: Side) -> set[str]:
        """Ids on ``side`` matched to the current anchor on the other side."""
        if self.selected_side is not side.other:
            return set()
        return {pair.para_id_for(side) for pair in self.matches}

    def is_highlighted(self, side: Side, para_id: str) -> bool:
        if self.selected_side is side and self.selected_para_id == para_id:
            return True
        return para_id in self.counterpart_ids(side)

    def find_pair(self, display_text: str) -> PairDetail | None:
        """Re-find the pair behind a displayed counterpart text."""
        if self.selected_side is None:
            return None
        opposite = self.selected_side.other
        for pair in self.matches:
            if self.documents.display_text(opposite, pair.para_id_for(opposite)) == display_text:
                return PairDetail(
                    text_a=self.documents.display_text(Side.A, pair.text_a),
                    text_b=self.documents.display_text(Side.B, pair.text_b),
                    similarity=pair.similarity,
                    d_4=pair.d_4,
                )
        return None

    def minimap(self, side: Side) -> list[MinimapCell]:
        """Minimap ticks for one side, in reading order."""
        paragraphs = self.documents.paragraphs[side]
        last = len(paragraphs) - 1
        cells = []
        for i, p in enumerate(paragraphs):
            if self.is_highlighted(side, p.para_id):
                state = "selected" if self.selected_side is side else "matched"
            elif self.documents.pair_count(side, i) > 0:
                state = "has_pairs"
            else:
                state = "none"
            cells.append(MinimapCell(
                index=i,
                para_id=p.para_id,
                position=(i / last) * 100 if last > 0 else 0.0,
                state=state,
            ))
        return cells
