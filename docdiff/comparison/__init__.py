"""Provision comparison view model."""

from docdiff.comparison.service import (
    DEFAULT_TAB,
    HIGHLIGHT_TABS,
    NO_TEXT,
    NO_COMPARISON,
    CounterpartEntry,
    ProvisionComparison,
    side_for_jurisdiction,
)

__all__ = [
    "DEFAULT_TAB",
    "HIGHLIGHT_TABS",
    "NO_TEXT",
    "NO_COMPARISON",
    "CounterpartEntry",
    "ProvisionComparison",
    "side_for_jurisdiction",
]
