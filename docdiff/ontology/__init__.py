"""Core types shared by the alignment, outline and paragraph modules."""

from docdiff.ontology.side import (
    Side,
    Tier,
    SideConvention,
    TIER_ANCHORS,
    TIERS_BY_PREFERENCE,
)
from docdiff.ontology.types import (
    Provision,
    OutlineNode,
    Outline,
    SimilarityPair,
    Paragraph,
    ParagraphPair,
    ColoringRecord,
    ComparisonNote,
    HIGHLIGHT_CATEGORIES,
    parse_records,
    coerce_count,
)

__all__ = [
    # Sides and tiers
    "Side",
    "Tier",
    "SideConvention",
    "TIER_ANCHORS",
    "TIERS_BY_PREFERENCE",
    # Records
    "Provision",
    "OutlineNode",
    "Outline",
    "SimilarityPair",
    "Paragraph",
    "ParagraphPair",
    "ColoringRecord",
    "ComparisonNote",
    "HIGHLIGHT_CATEGORIES",
    # Parsing
    "parse_records",
    "coerce_count",
]
