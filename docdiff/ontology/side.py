"""
Side and tier types for two-document comparison.

A comparison always involves exactly two documents. Every provision or
paragraph belongs to one of them, identified by an id-suffix convention
(regulations) or a document token (climate reports).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Side(str, Enum):
    """One of the two documents being compared."""
    A = "a"
    B = "b"

    @property
    def other(self) -> "Side":
        """The opposite side."""
        return Side.B if self is Side.A else Side.A


class Tier(str, Enum):
    """Similarity confidence bands, anchored at fixed similarity values."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def anchor(self) -> float:
        return TIER_ANCHORS[self]

    @classmethod
    def from_similarity(cls, similarity: object) -> "Tier | None":
        """Bucket a raw similarity score, or None when it is not a tier anchor."""
        try:
            key = f"{float(similarity):.1f}"
        except (TypeError, ValueError):
            return None
        return _TIERS_BY_KEY.get(key)


TIER_ANCHORS: dict[Tier, float] = {
    Tier.LOW: 0.7,
    Tier.MEDIUM: 0.8,
    Tier.HIGH: 0.9,
}

_TIERS_BY_KEY: dict[str, Tier] = {f"{v:.1f}": t for t, v in TIER_ANCHORS.items()}

# Highest first: the order used when picking a default tier to display
TIERS_BY_PREFERENCE: tuple[Tier, ...] = (Tier.HIGH, Tier.MEDIUM, Tier.LOW)


class SideConvention(BaseModel):
    """Id-suffix convention that tells which document a provision belongs to."""
    suffix_a: str = "_NSW"
    suffix_b: str = "_Victoria"

    def classify(self, provision_id: str) -> Side | None:
        """Return the side of a provision id, or None when neither suffix matches."""
        if not isinstance(provision_id, str):
            return None
        if provision_id.endswith(self.suffix_a):
            return Side.A
        if provision_id.endswith(self.suffix_b):
            return Side.B
        return None

    @classmethod
    def from_settings(cls, settings=None) -> "SideConvention":
        """Build the convention from application settings."""
        if settings is None:
            from docdiff.config import get_settings
            settings = get_settings()
        return cls(suffix_a=settings.suffix_a, suffix_b=settings.suffix_b)
