"""
Record types served by the data provider.

Outlines, pair lists and paragraph lists are parsed once per page visit and
treated as immutable snapshots for the rest of the session.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docdiff.ontology.side import Side

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


# =============================================================================
# Outline
# =============================================================================


class Provision(BaseModel):
    """Leaf unit of an outline."""
    id: str
    title: str = ""


class OutlineNode(BaseModel):
    """Chapter or part of a document outline.

    A node is either a container (has ``parts``) or a leaf holder (has
    ``provisions``). ``parts`` keeps the provider's insertion order, which is
    also display order.
    """
    id: str
    title: str = ""
    parts: dict[str, OutlineNode] | None = None
    provisions: list[Provision] | None = None

    @property
    def has_parts(self) -> bool:
        return bool(self.parts)

    @property
    def has_provisions(self) -> bool:
        return bool(self.provisions)

    @property
    def has_children(self) -> bool:
        return self.has_parts or self.has_provisions

    def iter_provisions(self) -> Iterator[Provision]:
        """Yield every provision under this node, in display order."""
        for part in (self.parts or {}).values():
            yield from part.iter_provisions()
        for provision in self.provisions or []:
            yield provision


Outline = list[OutlineNode]


# =============================================================================
# Similarity records
# =============================================================================


class SimilarityPair(BaseModel):
    """Undirected similarity edge between provisions of the two documents."""
    id_1: str
    id_2: str
    similarity: float


class Paragraph(BaseModel):
    """One paragraph of a climate report, in reading order."""
    doc_id: str = ""
    para_id: str
    text: str = ""


class ParagraphPair(BaseModel):
    """Pair record returned by the on-demand lookup.

    ``text_a`` is always the Document A paragraph id and ``text_b`` the
    Document B one, whichever side the lookup was anchored on.
    """
    text_a: str
    text_b: str
    similarity: float | None = None
    d_4: Any = None

    def para_id_for(self, side: Side) -> str:
        return self.text_a if side is Side.A else self.text_b


# =============================================================================
# Annotations
# =============================================================================


HIGHLIGHT_CATEGORIES: tuple[str, ...] = ("who", "when", "where", "how", "tone", "penalty")


class ColoringRecord(BaseModel):
    """Per-provision annotated text, one markdown string per category."""
    id: str
    who: str | None = None
    when: str | None = None
    where: str | None = None
    how: str | None = None
    tone: str | None = None
    penalty: str | None = None

    def category_text(self, category: str) -> str:
        return getattr(self, category, None) or ""


class ComparisonNote(BaseModel):
    """Free-text comparison notes for an unordered pair of provisions."""
    model_config = ConfigDict(populate_by_name=True)

    side_a_id: str = Field(alias="NSW")
    side_b_id: str = Field(alias="Victoria")
    who: str | None = None
    when: str | None = None
    where: str | None = None
    how: str | None = None
    tone: str | None = None
    penalty: str | None = None

    def involves(self, first: str, second: str) -> bool:
        """True when the note is about ``first`` and ``second``, in either order."""
        return (self.side_a_id, self.side_b_id) in ((first, second), (second, first))

    def category_text(self, category: str) -> str | None:
        return getattr(self, category, None) if category in HIGHLIGHT_CATEGORIES else None


# =============================================================================
# Record parsing
# =============================================================================


def parse_records(
    model: type[RecordT],
    rows: Iterable[RecordT | Mapping[str, Any]] | None,
) -> list[RecordT]:
    """Validate provider rows one at a time, skipping the malformed ones.

    Args:
        model: Record type to validate against
        rows: Model instances or raw dicts, in provider order

    Returns:
        Valid records in input order
    """
    records: list[RecordT] = []
    skipped = 0
    for row in rows or []:
        if isinstance(row, model):
            records.append(row)
            continue
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            skipped += 1
            logger.debug("Skipping malformed %s record: %s", model.__name__, e)
    if skipped:
        logger.debug("Skipped %d malformed %s records", skipped, model.__name__)
    return records


def coerce_count(value: Any) -> int:
    """Pair count as an int; missing or non-numeric values count as 0."""
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric pair count %r", value)
        return 0
