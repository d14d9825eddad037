"""
Climate Reports Comparison - Paragraph-level matching between two reports.

This page provides:
- Both reports' paragraphs with precomputed pair counts
- Minimaps showing where matched paragraphs sit in each report
- On-demand lookup of a selected paragraph's counterparts
- Side-by-side detail for one matched pair
"""

import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st

from docdiff.config import configure_logging, get_settings
from docdiff.ontology import Side
from docdiff.paragraphs import ParagraphDocuments, ParagraphMatchState
from frontend.helpers import PageSession, get_docdiff_client
from frontend.ui import (
    render_matched_column,
    render_minimap,
    render_pair_detail,
    render_paragraph_column,
)


# Page config
st.set_page_config(
    page_title="Climate Reports",
    page_icon="🌍",
    layout="wide",
)


def main():
    """Main page content."""
    configure_logging()
    settings = get_settings()
    client = get_docdiff_client()
    labels = {Side.A: settings.climate_label_a, Side.B: settings.climate_label_b}
    documents = {Side.A: settings.climate_document_a, Side.B: settings.climate_document_b}

    st.title("Climate Reports Comparison")

    page = PageSession(st.session_state, "climate")
    page.begin()
    with st.spinner("Loading climate reports…"):
        result = page.load({
            "paragraphs_a": lambda: client.get_paragraphs(documents[Side.A]),
            "paragraphs_b": lambda: client.get_paragraphs(documents[Side.B]),
            "counts_a": lambda: client.get_pair_counts(documents[Side.A]),
            "counts_b": lambda: client.get_pair_counts(documents[Side.B]),
        })
    if result.aborted:
        st.info("Preparing…")
        return
    if result.error:
        st.error(f"Error: {result.error}")
        return

    store = page.store
    if "state" not in store:
        paragraphs = ParagraphDocuments.from_raw(
            result.data["paragraphs_a"],
            result.data["paragraphs_b"],
            result.data["counts_a"],
            result.data["counts_b"],
        )
        store["state"] = ParagraphMatchState.from_settings(paragraphs, settings)
        store["detail"] = None
    state: ParagraphMatchState = store["state"]

    search_term = st.text_input(
        "Search paragraphs",
        key="paragraph_search",
        placeholder="Search paragraphs...",
        label_visibility="collapsed",
    )

    def lookup(document: str, para_id: str):
        return client.get_paragraph_pairs(document, para_id, settings.pair_lookup_size)

    # Layout: minimap | report A | report B | minimap | matches
    show_minimap = not search_term
    widths = [0.3, 4, 4, 0.3, 4] if state.selected_side else [0.3, 5, 5, 0.3, 0.01]
    cols = st.columns(widths)

    if show_minimap:
        with cols[0]:
            render_minimap(state.minimap(Side.A), Side.A)
        with cols[3]:
            render_minimap(state.minimap(Side.B), Side.B)

    clicked: tuple[Side, str] | None = None
    for side, column in ((Side.A, cols[1]), (Side.B, cols[2])):
        with column:
            para_id = render_paragraph_column(state, side, labels[side], search_term)
            if para_id:
                clicked = (side, para_id)

    if clicked:
        with st.spinner("Finding pairs…"):
            state.resolve(clicked[0], clicked[1], lookup)
        store["detail"] = None
        st.rerun()

    if state.selected_side:
        with cols[4]:
            text = render_matched_column(state)
            if text:
                store["detail"] = state.find_pair(text)

    if store.get("detail"):
        if render_pair_detail(store["detail"], labels[Side.A], labels[Side.B]):
            store["detail"] = None
            st.rerun()


if __name__ == "__main__":
    main()
