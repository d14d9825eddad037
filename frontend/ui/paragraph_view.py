"""
Paragraph comparison components for Streamlit.

Provides reusable UI components for:
- Report paragraph columns with pair count badges
- Minimap of matched positions
- Matched paragraph column and pair detail
"""

from __future__ import annotations

import html

import streamlit as st

from docdiff.ontology import Side
from docdiff.paragraphs import MinimapCell, PairDetail, ParagraphMatchState, paragraph_anchor

# Side -> (highlight, has pairs, background) colours
SIDE_COLORS: dict[Side, tuple[str, str, str]] = {
    Side.A: ("#2563eb", "#93c5fd", "#dbeafe"),
    Side.B: ("#16a34a", "#86efac", "#dcfce7"),
}


def _cell_color(cell: MinimapCell, side: Side) -> str:
    strong, light, _ = SIDE_COLORS[side]
    if cell.state in ("selected", "matched"):
        return strong
    if cell.state == "has_pairs":
        return light
    return "#d1d5db"


def minimap_html(cells: list[MinimapCell], side: Side, height_vh: int = 70) -> str:
    """Vertical strip with one tick per paragraph; each tick links to its paragraph."""
    ticks = "".join(
        f'<a href="#{paragraph_anchor(side, c.index)}" target="_self" '
        f'title="{html.escape(c.para_id)}" style="position:absolute; top:{c.position:.2f}%; '
        f'left:0; width:100%; height:6px; background:{_cell_color(c, side)};"></a>'
        for c in cells
    )
    return f'<div style="position:relative; width:12px; height:{height_vh}vh;">{ticks}</div>'


def render_minimap(cells: list[MinimapCell], side: Side, height_vh: int = 70) -> None:
    """Render the minimap strip for one side."""
    st.markdown(minimap_html(cells, side, height_vh), unsafe_allow_html=True)


def render_paragraph_column(
    state: ParagraphMatchState,
    side: Side,
    title: str,
    search_term: str,
) -> str | None:
    """Render one report's (filtered) paragraphs.

    Returns:
        para_id of the clicked paragraph, if any
    """
    st.subheader(title)
    clicked = None
    _, _, background = SIDE_COLORS[side]

    with st.container(height=600):
        for i, paragraph in state.documents.filter(side, search_term):
            count = state.documents.pair_count(side, i)
            highlighted = state.is_highlighted(side, paragraph.para_id)
            st.markdown(f'<div id="{paragraph_anchor(side, i)}"></div>', unsafe_allow_html=True)
            if highlighted:
                st.markdown(
                    f'<div style="background:{background}; padding:4px; border-radius:4px;">'
                    f"{html.escape(paragraph.text)}</div>",
                    unsafe_allow_html=True,
                )
            else:
                st.write(paragraph.text)
            if st.button(
                f"{count} pairs",
                key=f"para_{side.value}_{paragraph.para_id}",
                type="primary" if count > 0 else "secondary",
            ):
                clicked = paragraph.para_id
    return clicked


def render_matched_column(state: ParagraphMatchState) -> str | None:
    """Render the counterparts of the current anchor.

    Returns:
        Display text of the clicked counterpart, if any
    """
    st.subheader("Matched Paragraphs")
    if state.error:
        st.warning(f"Could not load pairs: {state.error}")
    if not state.matched_texts:
        st.caption("No paired paragraphs.")
        return None

    clicked = None
    with st.container(height=600):
        for idx, text in enumerate(state.matched_texts):
            st.write(text)
            if st.button("Compare", key=f"matched_{idx}"):
                clicked = text
    return clicked


def render_pair_detail(detail: PairDetail, label_a: str, label_b: str) -> bool:
    """Render a side-by-side pair detail.

    Returns:
        True if the close button was clicked
    """
    with st.container(border=True):
        st.markdown("### Paragraph Comparison")
        col1, col2, col3 = st.columns(3)
        with col1:
            st.markdown(f"**{label_a}**")
            st.write(detail.text_a)
        with col2:
            st.markdown(f"**{label_b}**")
            st.write(detail.text_b)
        with col3:
            st.markdown("**Comparison**")
            st.write(detail.similarity_label)
        return st.button("Close", key="close_pair_detail")
