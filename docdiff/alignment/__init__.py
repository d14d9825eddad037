"""Alignment index: pair normalization and tier bucketing."""

from docdiff.alignment.normalizer import (
    DropReason,
    NormalizedPair,
    classify_pair,
    normalize_pairs,
)
from docdiff.alignment.service import (
    TierIndex,
    build_index,
    tier_summary,
)

__all__ = [
    # Normalizer
    "DropReason",
    "NormalizedPair",
    "classify_pair",
    "normalize_pairs",
    # Bucketing
    "TierIndex",
    "build_index",
    "tier_summary",
]
