"""Data provider endpoints, served from fixtures."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from .service import FixtureNotFoundError, FixtureStore

router = APIRouter(tags=["provider"])

_store: FixtureStore | None = None


def get_store() -> FixtureStore:
    """Get or create the fixture store."""
    global _store
    if _store is None:
        from docdiff.config import get_settings
        _store = FixtureStore(get_settings().data_dir)
    return _store


def _not_found(e: FixtureNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=f"No data for '{e}'")


# =============================================================================
# Regulations
# =============================================================================


@router.get("/toc/{jurisdiction}")
def get_outline(jurisdiction: str) -> list[dict]:
    """Full nested table of contents for one jurisdiction."""
    try:
        return get_store().outline(jurisdiction)
    except FixtureNotFoundError as e:
        raise _not_found(e)


@router.get("/whs_pairs")
def get_regulation_pairs() -> list[dict]:
    """Complete cross-document pair list, all tiers."""
    try:
        return get_store().regulation_pairs()
    except FixtureNotFoundError as e:
        raise _not_found(e)


@router.get("/whs_color")
def get_coloring() -> list[dict]:
    """Per-provision annotated text."""
    try:
        return get_store().coloring()
    except FixtureNotFoundError as e:
        raise _not_found(e)


@router.get("/comparisons")
def get_comparisons() -> list[dict]:
    """Comparison notes keyed by provision id pairs."""
    try:
        return get_store().comparisons()
    except FixtureNotFoundError as e:
        raise _not_found(e)


# =============================================================================
# Climate reports
# =============================================================================


@router.get("/api/paragraphs/{document}")
def get_paragraphs(document: str) -> list[dict]:
    """Ordered paragraph list for one report."""
    try:
        return get_store().paragraphs(document)
    except FixtureNotFoundError as e:
        raise _not_found(e)


@router.get("/api/pair_counts/{document}")
def get_pair_counts(document: str) -> dict[str, int]:
    """Precomputed pair count per paragraph id."""
    try:
        return get_store().pair_counts(document)
    except FixtureNotFoundError as e:
        raise _not_found(e)


@router.get("/api/pairs")
def get_paragraph_pairs(
    doc: str = Query(..., description="Document token of the anchor paragraph"),
    para_id: str = Query(..., description="Anchor paragraph id"),
    size: int = Query(default=1000, ge=1),
) -> list[dict]:
    """Counterpart pairs for one paragraph."""
    try:
        return get_store().paragraph_pairs(doc, para_id, size)
    except FixtureNotFoundError as e:
        raise _not_found(e)
