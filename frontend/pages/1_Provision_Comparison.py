"""
Provision Comparison - One provision and its counterparts.

This page provides:
- The selected provision's clean text
- Counterparts at the chosen similarity tier (defaults to the highest tier
  that has any)
- Highlight tabs comparing the provision with a selected counterpart

Select a provision from the Home page, or link directly with
``?jurisdiction=nsw&id=4_NSW``.
"""

import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st
from pydantic import ValidationError

from docdiff.alignment import build_index
from docdiff.comparison import ProvisionComparison, side_for_jurisdiction
from docdiff.config import configure_logging, get_settings
from docdiff.ontology import Side, SideConvention
from docdiff.outline import parse_outline
from frontend.helpers import PageSession, get_docdiff_client
from frontend.ui import render_counterparts, render_highlight_tabs, render_tier_selector


# Page config
st.set_page_config(
    page_title="Provision Comparison",
    page_icon="⚖️",
    layout="wide",
)


def _target() -> tuple[str, str] | None:
    """Jurisdiction token and provision id from the query string or Home page."""
    params = st.query_params
    if params.get("jurisdiction") and params.get("id"):
        return params["jurisdiction"], params["id"]
    return st.session_state.get("compare_target")


def main():
    """Main page content."""
    configure_logging()
    settings = get_settings()
    client = get_docdiff_client()

    target = _target()
    if target is None:
        st.info("Select a provision on the Home page to compare it.")
        st.page_link("Home.py", label="Back to regulations")
        return

    jurisdiction, provision_id = target
    side = side_for_jurisdiction(jurisdiction, settings)
    if side is None:
        st.error(f"Unknown jurisdiction '{jurisdiction}'")
        return

    page = PageSession(st.session_state, "provision_comparison")
    page.begin()
    with st.spinner("Loading data…"):
        result = page.load({
            "outline_a": lambda: client.get_outline(settings.jurisdiction_a),
            "outline_b": lambda: client.get_outline(settings.jurisdiction_b),
            "pairs": client.get_regulation_pairs,
            "coloring": client.get_coloring,
            "comparisons": client.get_comparisons,
        })
    if result.aborted:
        st.info("Preparing…")
        return
    if result.error:
        st.error(f"Failed to load: {result.error}")
        return

    store = page.store
    if "comparison" not in store:
        try:
            outlines = {
                Side.A: parse_outline(result.data["outline_a"]),
                Side.B: parse_outline(result.data["outline_b"]),
            }
        except ValidationError as e:
            st.error(f"Failed to load: malformed table of contents ({e.error_count()} errors)")
            return
        index = build_index(
            result.data["pairs"],
            outlines[Side.A],
            outlines[Side.B],
            SideConvention.from_settings(settings),
        )
        store["comparison"] = ProvisionComparison(
            outlines,
            index,
            coloring=result.data["coloring"],
            comparisons=result.data["comparisons"],
        )
    comparison: ProvisionComparison = store["comparison"]

    # Tier defaults to the best tier for this provision; reset per provision
    if store.get("provision_id") != provision_id:
        store["provision_id"] = provision_id
        store["selected_counterpart"] = None
        st.session_state["tier"] = comparison.default_tier(side, provision_id)

    provision = comparison.provision(side, provision_id)
    st.title(provision_id)
    if provision:
        st.caption(provision.title)

    tier = render_tier_selector(st.session_state["tier"], key="tier")

    col1, col2 = st.columns(2)
    with col1:
        with st.container(height=650, border=True):
            st.markdown(comparison.clean_text(provision_id), unsafe_allow_html=True)
    with col2:
        with st.container(height=650, border=True):
            clicked = render_counterparts(comparison.counterparts(side, provision_id, tier), tier)
            if clicked:
                store["selected_counterpart"] = clicked

    counterpart = store.get("selected_counterpart")
    if counterpart:
        st.divider()
        if st.button("Close comparison", key="close_comparison"):
            store["selected_counterpart"] = None
            st.rerun()
        render_highlight_tabs(comparison, provision_id, counterpart)


if __name__ == "__main__":
    main()
