"""
Pair record normalizer.

Classifies raw similarity records by tier and by the side of each member.
Upstream pair lists are occasionally inconsistent, so anything that cannot be
classified is dropped with a reason instead of raising.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from docdiff.ontology import Side, SideConvention, SimilarityPair, Tier


class DropReason(str, Enum):
    """Why a raw record was left out of the index."""
    INVALID_RECORD = "invalid_record"
    UNKNOWN_TIER = "unknown_tier"
    UNKNOWN_SIDE = "unknown_side"
    SAME_SIDE = "same_side"


@dataclass(frozen=True)
class NormalizedPair:
    """A cross-side pair at a known tier, oriented as (side A id, side B id)."""

    tier: Tier
    a_id: str
    b_id: str

    def id_for(self, side: Side) -> str:
        return self.a_id if side is Side.A else self.b_id


def classify_pair(
    record: SimilarityPair | Mapping[str, Any],
    convention: SideConvention,
) -> NormalizedPair | DropReason:
    """Classify one raw record.

    Args:
        record: SimilarityPair or the raw dict served by the provider
        convention: Suffix convention used to find each member's side

    Returns:
        NormalizedPair for a valid cross-side pair, otherwise the DropReason
    """
    if not isinstance(record, SimilarityPair):
        try:
            record = SimilarityPair.model_validate(record)
        except ValidationError:
            return DropReason.INVALID_RECORD

    tier = Tier.from_similarity(record.similarity)
    if tier is None:
        return DropReason.UNKNOWN_TIER

    side_1 = convention.classify(record.id_1)
    side_2 = convention.classify(record.id_2)
    if side_1 is None or side_2 is None:
        return DropReason.UNKNOWN_SIDE
    if side_1 is side_2:
        return DropReason.SAME_SIDE

    if side_1 is Side.A:
        return NormalizedPair(tier=tier, a_id=record.id_1, b_id=record.id_2)
    return NormalizedPair(tier=tier, a_id=record.id_2, b_id=record.id_1)


def normalize_pairs(
    records: Iterable[SimilarityPair | Mapping[str, Any]] | None,
    convention: SideConvention,
) -> tuple[list[NormalizedPair], Counter]:
    """Classify a whole pair list.

    Returns:
        (valid pairs in input order, Counter of DropReason for the rest)
    """
    valid: list[NormalizedPair] = []
    dropped: Counter = Counter()
    for record in records or []:
        result = classify_pair(record, convention)
        if isinstance(result, DropReason):
            dropped[result] += 1
        else:
            valid.append(result)
    return valid, dropped
