"""Outline traversal, membership and expansion state."""

from docdiff.outline.service import (
    parse_outline,
    iter_nodes,
    all_provision_ids,
    find_provision,
    matches_or_descends,
    is_node_visible,
    counterpart_count,
    tier_counts,
    ExpansionState,
    OutlineRow,
    visible_rows,
)

__all__ = [
    "parse_outline",
    "iter_nodes",
    "all_provision_ids",
    "find_provision",
    "matches_or_descends",
    "is_node_visible",
    "counterpart_count",
    "tier_counts",
    "ExpansionState",
    "OutlineRow",
    "visible_rows",
]
