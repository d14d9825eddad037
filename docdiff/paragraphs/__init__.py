"""Paragraph pair resolution for the climate report comparison."""

from docdiff.paragraphs.service import (
    LookupTicket,
    MinimapCell,
    PairDetail,
    PairLookup,
    ParagraphDocuments,
    ParagraphMatchState,
    missing_placeholder,
    paragraph_anchor,
)

__all__ = [
    "LookupTicket",
    "MinimapCell",
    "PairDetail",
    "PairLookup",
    "ParagraphDocuments",
    "ParagraphMatchState",
    "missing_placeholder",
    "paragraph_anchor",
]
