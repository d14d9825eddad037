"""
UI shared modules for the comparison explorer.

This package contains reusable UI components used across the pages.
"""

from frontend.ui.outline_tree import (
    render_search_input,
    render_outline_tree,
    render_tier_summary,
)
from frontend.ui.paragraph_view import (
    minimap_html,
    render_minimap,
    render_paragraph_column,
    render_matched_column,
    render_pair_detail,
)
from frontend.ui.comparison_view import (
    render_tier_selector,
    render_counterparts,
    render_highlight_tabs,
)

__all__ = [
    # Outline tree
    "render_search_input",
    "render_outline_tree",
    "render_tier_summary",
    # Paragraph comparison
    "minimap_html",
    "render_minimap",
    "render_paragraph_column",
    "render_matched_column",
    "render_pair_detail",
    # Provision comparison
    "render_tier_selector",
    "render_counterparts",
    "render_highlight_tabs",
]
