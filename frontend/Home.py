"""
Home - Regulations explorer.

Lists both regulation outlines side by side with a shared fuzzy search and
per-provision counterpart counts at each similarity tier.

Run from repo root:
    streamlit run frontend/Home.py
"""

import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from pydantic import ValidationError

from docdiff.alignment import build_index, tier_summary
from docdiff.config import configure_logging, get_settings
from docdiff.ontology import Side, SideConvention
from docdiff.outline import ExpansionState, parse_outline, visible_rows
from docdiff.search import FuzzyMatcher, flatten_outline, search
from frontend.helpers import PageSession, get_docdiff_client
from frontend.ui import render_outline_tree, render_search_input, render_tier_summary

# -----------------------------------------------------------------------------
# Page Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Regulations",
    page_icon="⚖️",
    layout="wide",
)

configure_logging()
settings = get_settings()
client = get_docdiff_client()

LABELS = {Side.A: settings.label_a, Side.B: settings.label_b}
JURISDICTIONS = {Side.A: settings.jurisdiction_a, Side.B: settings.jurisdiction_b}

st.title("Document Comparison Explorer")

# -----------------------------------------------------------------------------
# Bootstrap
# -----------------------------------------------------------------------------

page = PageSession(st.session_state, "regulations")
page.begin()

with st.spinner("Loading data…"):
    result = page.load({
        "outline_a": lambda: client.get_outline(settings.jurisdiction_a),
        "outline_b": lambda: client.get_outline(settings.jurisdiction_b),
        "pairs": client.get_regulation_pairs,
    })

if result.aborted:
    st.info("Preparing…")
    st.stop()
if result.error:
    st.error(f"Failed to load: {result.error}")
    st.stop()

store = page.store
if "index" not in store:
    try:
        outlines = {
            Side.A: parse_outline(result.data["outline_a"]),
            Side.B: parse_outline(result.data["outline_b"]),
        }
    except ValidationError as e:
        st.error(f"Failed to load: malformed table of contents ({e.error_count()} errors)")
        st.stop()
    store["outlines"] = outlines
    store["index"] = build_index(
        result.data["pairs"],
        outlines[Side.A],
        outlines[Side.B],
        SideConvention.from_settings(settings),
    )
    store["search_items"] = {side: flatten_outline(o) for side, o in outlines.items()}
    store["expansion"] = {side: ExpansionState() for side in Side}

outlines = store["outlines"]
index = store["index"]

# -----------------------------------------------------------------------------
# Search & Outlines
# -----------------------------------------------------------------------------

search_term = render_search_input(key="regulation_search")
matcher = FuzzyMatcher.from_settings(settings)

render_tier_summary(
    tier_summary(index),
    side_labels={side.value: LABELS[side] for side in Side},
)

columns = st.columns(2)
for side, column in zip(Side, columns):
    with column:
        st.header(LABELS[side])
        results = search(search_term, store["search_items"][side], matcher)
        expansion = store["expansion"][side]
        expansion.sync(outlines[side], search_term, results)

        rows = visible_rows(outlines[side], expansion, search_term, results, index, side)
        toggled, selected = render_outline_tree(rows, key_prefix=side.value)

        if toggled:
            expansion.toggle(toggled)
            st.rerun()
        if selected:
            st.session_state["compare_target"] = (JURISDICTIONS[side], selected)
            st.switch_page("pages/1_Provision_Comparison.py")
