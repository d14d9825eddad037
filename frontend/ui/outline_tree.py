"""
Outline tree components for Streamlit.

Provides reusable UI components for:
- Search input shared by both outlines
- Collapsible outline tree with per-provision tier counts
- Tier summary table
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from docdiff.outline import OutlineRow


# =============================================================================
# Search
# =============================================================================


def render_search_input(key: str = "outline_search") -> str:
    """Render the search box.

    Args:
        key: Streamlit widget key

    Returns:
        Current search term, stripped
    """
    term = st.text_input(
        "Search",
        key=key,
        placeholder="Search by ID or title...",
        label_visibility="collapsed",
    )
    return (term or "").strip()


# =============================================================================
# Tree
# =============================================================================


def _node_icon(row: OutlineRow) -> str:
    if not row.has_children:
        return "•"
    return "▼" if row.is_open else "▶"


def render_outline_tree(
    rows: list[OutlineRow],
    key_prefix: str,
) -> tuple[str | None, str | None]:
    """Render visible outline rows.

    Node rows are buttons that toggle expansion; provision rows are buttons
    that select the provision, with a "low | medium | high" count badge.

    Args:
        rows: Rows from ``visible_rows``
        key_prefix: Prefix for widget keys (one per outline)

    Returns:
        (toggled node id, selected provision id); at most one is set
    """
    toggled = None
    selected = None

    if not rows:
        st.caption("No matching provisions.")
        return None, None

    for row in rows:
        indent = " " * row.depth
        if row.row_type == "node":
            label = f"{indent}{_node_icon(row)} {row.label}"
            if st.button(label, key=f"{key_prefix}_node_{row.id}", use_container_width=True):
                toggled = row.id
        else:
            col1, col2 = st.columns([5, 1])
            with col1:
                if st.button(
                    f"{indent}{row.label}",
                    key=f"{key_prefix}_prov_{row.id}",
                    use_container_width=True,
                ):
                    selected = row.id
            with col2:
                st.caption(f"`{row.counts_label}`")

    return toggled, selected


# =============================================================================
# Tier Summary
# =============================================================================


def render_tier_summary(summary: list[dict], side_labels: dict[str, str]) -> None:
    """Render the matched-provision counts per side and tier.

    Args:
        summary: Rows from ``tier_summary``
        side_labels: Side value -> display label
    """
    if not summary:
        return
    df = pd.DataFrame(summary)
    df["side"] = df["side"].map(side_labels).fillna(df["side"])
    table = df.pivot(index="side", columns="tier", values="matched")
    table = table.reindex(columns=["low", "medium", "high"])
    with st.expander("Matched provisions per tier", expanded=False):
        st.dataframe(table, use_container_width=True)
