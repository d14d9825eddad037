"""
Fuzzy match overlay for outline search.

The outline is flattened once per session into ``SearchItem``s. A search term
is scored against each item's id and title by ``FuzzyMatcher``; the ids of
matching items form the result set the hierarchy aggregator filters with.

An empty term means "no active filter" and yields None, which is not the same
as an empty result set (nothing matched).
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Iterable, Literal

from docdiff.ontology import Outline, OutlineNode


# =============================================================================
# Flattened Index
# =============================================================================


@dataclass(frozen=True)
class SearchItem:
    """One searchable outline entry."""

    id: str
    title: str
    type: Literal["chapter", "part", "provision"]
    parent_id: str | None = None


def flatten_outline(outline: Outline) -> list[SearchItem]:
    """Flatten an outline depth-first: chapter, its parts, their provisions."""
    items: list[SearchItem] = []

    def walk(node: OutlineNode, parent_id: str | None) -> None:
        node_type = "chapter" if parent_id is None else "part"
        items.append(SearchItem(node.id, node.title, node_type, parent_id))
        for part in (node.parts or {}).values():
            walk(part, node.id)
        for provision in node.provisions or []:
            items.append(SearchItem(provision.id, provision.title, "provision", node.id))

    for chapter in outline:
        walk(chapter, None)
    return items


# =============================================================================
# Fuzzy Matcher
# =============================================================================


@dataclass(frozen=True)
class SearchHit:
    """A matched item and its score (0.0 is a perfect match)."""

    item: SearchItem
    score: float


class FuzzyMatcher:
    """Approximate substring matcher over item fields.

    A field matches when some window of the field, the same length as the
    term, is similar enough to the term (``difflib`` ratio of at least
    ``1 - threshold``). With ``ignore_location`` the window may start anywhere
    in the field; otherwise only within ``distance`` characters of the start.
    """

    def __init__(
        self,
        keys: tuple[str, ...] = ("id", "title"),
        threshold: float = 0.2,
        ignore_location: bool = True,
        distance: int = 100,
    ):
        self.keys = keys
        self.threshold = threshold
        self.ignore_location = ignore_location
        self.distance = distance

    def score(self, term: str, text: str) -> float:
        """Best (lowest) score of the term against any window of text."""
        term = term.lower()
        text = (text or "").lower()
        if not term or not text:
            return 1.0
        if term in text:
            start = text.index(term)
            if self.ignore_location or start <= self.distance:
                return 0.0

        width = len(term)
        last_start = max(len(text) - width, 0)
        if not self.ignore_location:
            last_start = min(last_start, self.distance)

        matcher = difflib.SequenceMatcher(None, autojunk=False)
        matcher.set_seq2(term)
        best = 0.0
        for start in range(last_start + 1):
            matcher.set_seq1(text[start:start + width])
            if matcher.real_quick_ratio() <= best or matcher.quick_ratio() <= best:
                continue
            best = max(best, matcher.ratio())
        return 1.0 - best

    def search(self, term: str, items: Iterable[SearchItem]) -> list[SearchHit]:
        """Items whose best field score is within the threshold, best first."""
        hits = []
        for item in items:
            best = min(self.score(term, getattr(item, key, "") or "") for key in self.keys)
            if best <= self.threshold:
                hits.append(SearchHit(item=item, score=best))
        hits.sort(key=lambda hit: hit.score)
        return hits

    @classmethod
    def from_settings(cls, settings=None) -> "FuzzyMatcher":
        if settings is None:
            from docdiff.config import get_settings
            settings = get_settings()
        return cls(threshold=settings.search_threshold)


# =============================================================================
# Overlay
# =============================================================================


def search(
    term: str | None,
    items: list[SearchItem],
    matcher: FuzzyMatcher | None = None,
) -> frozenset[str] | None:
    """Ids of the items matching a search term.

    Returns:
        None when the term is empty (no active filter), otherwise the set of
        matched ids, possibly empty
    """
    if not term or not term.strip():
        return None
    matcher = matcher or FuzzyMatcher()
    return frozenset(hit.item.id for hit in matcher.search(term.strip(), items))
