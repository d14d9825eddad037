"""
Provision comparison components for Streamlit.

Provides reusable UI components for:
- Tier selection
- Counterpart list
- Highlight tabs with comparison notes
"""

from __future__ import annotations

import streamlit as st

from docdiff.comparison import (
    DEFAULT_TAB,
    HIGHLIGHT_TABS,
    CounterpartEntry,
    ProvisionComparison,
)
from docdiff.markup import HIGHLIGHT_COLORS, normalize_markdown
from docdiff.ontology import Tier


def render_tier_selector(current: Tier, key: str = "tier") -> Tier:
    """Render the low/medium/high toggle.

    Returns:
        Selected tier
    """
    if key not in st.session_state:
        st.session_state[key] = current
    return st.radio(
        "Similarity",
        options=[Tier.LOW, Tier.MEDIUM, Tier.HIGH],
        format_func=lambda t: t.value.title(),
        key=key,
        horizontal=True,
    )


def render_counterparts(entries: list[CounterpartEntry], tier: Tier) -> str | None:
    """Render the paired provisions at a tier.

    Returns:
        Id of the clicked counterpart, if any
    """
    st.subheader(f"Paired Provisions ({tier.value})")
    if not entries:
        st.caption("No pairs found")
        return None

    clicked = None
    for entry in entries:
        label = f"**{entry.id}** - {entry.title}" if entry.known else f"_{entry.id}_"
        st.markdown(label)
        if st.button("Compare", key=f"counterpart_{entry.id}"):
            clicked = entry.id
    return clicked


def render_highlight_tabs(
    comparison: ProvisionComparison,
    left_id: str,
    right_id: str,
) -> None:
    """Render both provisions under each highlight tab.

    The default tab shows clean text side by side; the category tabs add a
    third column with the comparison note for that category.
    """
    tabs = st.tabs([tab.upper() for tab in HIGHLIGHT_TABS])
    for tab_name, tab in zip(HIGHLIGHT_TABS, tabs):
        with tab:
            color = HIGHLIGHT_COLORS.get(tab_name, HIGHLIGHT_COLORS["default"])
            verb = "Viewing" if tab_name == DEFAULT_TAB else "Comparison"
            st.markdown(
                f'<h4 style="color:{color}">{verb}: {left_id} vs {right_id}</h4>',
                unsafe_allow_html=True,
            )
            columns = st.columns(2 if tab_name == DEFAULT_TAB else 3)
            with columns[0]:
                st.markdown(
                    normalize_markdown(comparison.tab_text(left_id, tab_name)),
                    unsafe_allow_html=True,
                )
            with columns[1]:
                st.markdown(
                    normalize_markdown(comparison.tab_text(right_id, tab_name)),
                    unsafe_allow_html=True,
                )
            if tab_name != DEFAULT_TAB:
                with columns[2]:
                    st.markdown(comparison.comparison_text(left_id, right_id, tab_name))
