"""
Hierarchy aggregator for document outlines.

Walks the nested chapter -> part -> provision structure to answer:
- does a node, or anything under it, belong to the current search result?
- how many counterparts does a provision have at each tier?
- which nodes are expanded, and which rows are visible?

Membership is recomputed on every render rather than cached; outlines are
document-sized and immutable for the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Collection, Iterator, Literal

from docdiff.ontology import Outline, OutlineNode, Provision, Side, Tier

if TYPE_CHECKING:
    from docdiff.alignment.service import TierIndex


# =============================================================================
# Outline Traversal
# =============================================================================


def parse_outline(raw: list[dict[str, Any]] | None) -> Outline:
    """Parse the provider's table of contents into OutlineNodes."""
    return [OutlineNode.model_validate(chapter) for chapter in raw or []]


def iter_nodes(outline: Outline) -> Iterator[tuple[OutlineNode, str | None, int]]:
    """Yield (node, parent_id, depth) for every chapter and part, depth-first."""

    def walk(node: OutlineNode, parent_id: str | None, depth: int):
        yield node, parent_id, depth
        for part in (node.parts or {}).values():
            yield from walk(part, node.id, depth + 1)

    for chapter in outline:
        yield from walk(chapter, None, 0)


def all_provision_ids(outline: Outline) -> list[str]:
    """Every provision id of an outline, in display order."""
    return [p.id for chapter in outline for p in chapter.iter_provisions()]


def find_provision(outline: Outline | None, provision_id: str) -> Provision | None:
    """Find provision metadata by id, or None."""
    for chapter in outline or []:
        for provision in chapter.iter_provisions():
            if provision.id == provision_id:
                return provision
    return None


# =============================================================================
# Membership & Counts
# =============================================================================


def matches_or_descends(node: OutlineNode, result_set: Collection[str] | None) -> bool:
    """True when the node or any descendant is in the search result set.

    A result set of None means there is no active search, so everything
    matches.
    """
    if result_set is None:
        return True
    if node.id in result_set:
        return True
    if node.parts:
        return any(matches_or_descends(part, result_set) for part in node.parts.values())
    if node.provisions:
        return any(p.id in result_set for p in node.provisions)
    return False


def is_node_visible(
    node: OutlineNode,
    search_term: str,
    result_set: Collection[str] | None,
) -> bool:
    """Nodes outside the result set are hidden while a search term is active."""
    if not search_term:
        return True
    return matches_or_descends(node, result_set)


def counterpart_count(
    provision_id: str,
    index: TierIndex | None,
    tier: Tier,
    side: Side,
) -> int:
    """Size of the provision's counterpart set at one tier."""
    if index is None:
        return 0
    return len(index.counterparts(tier, side, provision_id))


def tier_counts(provision_id: str, index: TierIndex | None, side: Side) -> tuple[int, int, int]:
    """Counterpart counts as (low, medium, high), the badge beside each provision."""
    return (
        counterpart_count(provision_id, index, Tier.LOW, side),
        counterpart_count(provision_id, index, Tier.MEDIUM, side),
        counterpart_count(provision_id, index, Tier.HIGH, side),
    )


# =============================================================================
# Expansion State
# =============================================================================


@dataclass
class ExpansionState:
    """Expanded/collapsed state for the nodes of one outline.

    Nodes start collapsed. While a search term is active, every node that
    matches (or has a matching descendant) is forced open and the rest are
    closed; clearing the term collapses everything. Manual toggles work
    independently of search until the next term change.
    """

    open_ids: set[str] = field(default_factory=set)
    search_term: str = ""

    def is_open(self, node_id: str) -> bool:
        return node_id in self.open_ids

    def toggle(self, node_id: str) -> bool:
        """Flip one node; returns the new state."""
        if node_id in self.open_ids:
            self.open_ids.discard(node_id)
            return False
        self.open_ids.add(node_id)
        return True

    def sync(
        self,
        outline: Outline,
        search_term: str,
        result_set: Collection[str] | None,
    ) -> None:
        """Apply the search-driven policy when the term changes."""
        if search_term == self.search_term:
            return
        self.search_term = search_term
        if not search_term:
            self.open_ids.clear()
            return
        self.open_ids = {
            node.id
            for node, _, _ in iter_nodes(outline)
            if matches_or_descends(node, result_set)
        }


# =============================================================================
# Visible Rows
# =============================================================================


@dataclass
class OutlineRow:
    """One rendered line of the outline tree."""

    id: str
    title: str
    row_type: Literal["node", "provision"]
    depth: int
    has_children: bool = False
    is_open: bool = False
    counts: tuple[int, int, int] | None = None  # (low, medium, high), provisions only

    @property
    def label(self) -> str:
        return f"{self.id} - {self.title}"

    @property
    def counts_label(self) -> str:
        if self.counts is None:
            return ""
        return " | ".join(str(c) for c in self.counts)


def visible_rows(
    outline: Outline,
    expansion: ExpansionState,
    search_term: str,
    result_set: Collection[str] | None,
    index: TierIndex | None,
    side: Side,
) -> list[OutlineRow]:
    """Flatten the outline into the rows currently on screen.

    Hidden nodes and everything under collapsed nodes are skipped. Provisions
    under an open node are all listed, as the tree shows them.
    """
    rows: list[OutlineRow] = []

    def walk(node: OutlineNode, depth: int) -> None:
        if not is_node_visible(node, search_term, result_set):
            return
        is_open = expansion.is_open(node.id)
        rows.append(OutlineRow(
            id=node.id,
            title=node.title,
            row_type="node",
            depth=depth,
            has_children=node.has_children,
            is_open=is_open,
        ))
        if not is_open:
            return
        for part in (node.parts or {}).values():
            walk(part, depth + 1)
        for provision in node.provisions or []:
            rows.append(OutlineRow(
                id=provision.id,
                title=provision.title,
                row_type="provision",
                depth=depth + 1,
                counts=tier_counts(provision.id, index, side),
            ))

    for chapter in outline:
        walk(chapter, 0)
    return rows
