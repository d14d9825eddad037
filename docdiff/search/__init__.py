"""Fuzzy outline search."""

from docdiff.search.service import (
    SearchItem,
    SearchHit,
    FuzzyMatcher,
    flatten_outline,
    search,
)

__all__ = [
    "SearchItem",
    "SearchHit",
    "FuzzyMatcher",
    "flatten_outline",
    "search",
]
