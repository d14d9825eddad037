"""
Tier bucketing engine.

Builds the bidirectional alignment index from the flat pair list:

    tier -> side -> provision id -> set of counterpart ids

The index is derived once per page load and never updated incrementally.
Every provision in a side's outline has an entry in every tier, so counting
never has to special-case a missing key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from docdiff.alignment.normalizer import normalize_pairs
from docdiff.ontology import (
    Outline,
    Side,
    SideConvention,
    SimilarityPair,
    Tier,
    TIERS_BY_PREFERENCE,
)
from docdiff.outline.service import all_provision_ids

logger = logging.getLogger(__name__)

SideMap = dict[str, frozenset[str]]


@dataclass(frozen=True)
class TierIndex:
    """Per-tier, per-side adjacency maps. Treat as read-only."""

    maps: dict[Tier, dict[Side, SideMap]] = field(default_factory=dict)

    def side_map(self, tier: Tier, side: Side) -> SideMap:
        return self.maps.get(tier, {}).get(side, {})

    def counterparts(self, tier: Tier, side: Side, provision_id: str) -> frozenset[str]:
        """Counterpart ids on the other side, empty when there are none."""
        return self.side_map(tier, side).get(provision_id, frozenset())

    def contains(self, tier: Tier, side: Side, provision_id: str) -> bool:
        return provision_id in self.side_map(tier, side)

    def best_tier(self, side: Side, provision_id: str) -> Tier | None:
        """Highest tier at which the provision has at least one counterpart."""
        for tier in TIERS_BY_PREFERENCE:
            if self.counterparts(tier, side, provision_id):
                return tier
        return None


def build_index(
    pairs: Iterable[SimilarityPair | Mapping[str, Any]] | None,
    outline_a: Outline,
    outline_b: Outline,
    convention: SideConvention | None = None,
) -> TierIndex:
    """Build the alignment index from raw pair records and both outlines.

    Records whose similarity does not round to a tier anchor, whose members
    cannot be assigned a side, or whose members sit on the same side are
    dropped silently.

    Args:
        pairs: Raw pair list as served by the provider (all tiers, unfiltered)
        outline_a: Outline of the side A document
        outline_b: Outline of the side B document
        convention: Suffix convention, defaults to the configured one

    Returns:
        TierIndex covering every provision of both outlines in every tier
    """
    convention = convention or SideConvention.from_settings()
    normalized, dropped = normalize_pairs(pairs, convention)
    if dropped:
        logger.debug(
            "Dropped %d pair records: %s",
            sum(dropped.values()),
            {reason.value: count for reason, count in dropped.items()},
        )

    building: dict[Tier, dict[Side, dict[str, set[str]]]] = {
        tier: {Side.A: {}, Side.B: {}} for tier in Tier
    }
    for pair in normalized:
        by_side = building[pair.tier]
        by_side[Side.A].setdefault(pair.a_id, set()).add(pair.b_id)
        by_side[Side.B].setdefault(pair.b_id, set()).add(pair.a_id)

    # Closure: every outline provision gets an entry, possibly empty
    ids_by_side = {
        Side.A: all_provision_ids(outline_a),
        Side.B: all_provision_ids(outline_b),
    }
    for by_side in building.values():
        for side, ids in ids_by_side.items():
            for provision_id in ids:
                by_side[side].setdefault(provision_id, set())

    maps = {
        tier: {
            side: {pid: frozenset(ids) for pid, ids in side_map.items()}
            for side, side_map in by_side.items()
        }
        for tier, by_side in building.items()
    }
    logger.info(
        "Built alignment index from %d pairs (%d dropped)",
        len(normalized),
        sum(dropped.values()),
    )
    return TierIndex(maps=maps)


def tier_summary(index: TierIndex) -> list[dict]:
    """Number of provisions with at least one counterpart, per side and tier.

    Returns:
        List of dicts with side, tier, matched, total
    """
    rows = []
    for side in Side:
        for tier in Tier:
            side_map = index.side_map(tier, side)
            rows.append({
                "side": side.value,
                "tier": tier.value,
                "matched": sum(1 for ids in side_map.values() if ids),
                "total": len(side_map),
            })
    return rows
