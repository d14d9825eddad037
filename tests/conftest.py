"""Pytest fixtures for test suite."""

import pytest
from typing import Any

from docdiff.alignment import TierIndex, build_index
from docdiff.ontology import Outline, Side, SideConvention
from docdiff.outline import parse_outline
from docdiff.paragraphs import ParagraphDocuments


# =============================================================================
# Regulation Fixtures
# =============================================================================


@pytest.fixture
def convention() -> SideConvention:
    """NSW / Victoria suffix convention."""
    return SideConvention(suffix_a="_NSW", suffix_b="_Victoria")


@pytest.fixture
def raw_outline_nsw() -> list[dict[str, Any]]:
    """NSW table of contents as served by the provider."""
    return [
        {
            "id": "C1",
            "title": "Preliminary",
            "parts": {
                "P1": {
                    "id": "P1",
                    "title": "Introduction",
                    "provisions": [
                        {"id": "1_NSW", "title": "Citation"},
                        {"id": "2_NSW", "title": "Commencement"},
                    ],
                },
                "P2": {
                    "id": "P2",
                    "title": "Definitions",
                    "provisions": [
                        {"id": "4_NSW", "title": "Meaning of hazardous work"},
                    ],
                },
            },
        },
        {
            "id": "C2",
            "title": "Representation and participation",
            "parts": {
                "P3": {
                    "id": "P3",
                    "title": "Health and safety representatives",
                    "provisions": [
                        {"id": "16_NSW", "title": "Negotiations for work groups"},
                    ],
                },
            },
        },
    ]


@pytest.fixture
def raw_outline_vic() -> list[dict[str, Any]]:
    """Victoria table of contents as served by the provider."""
    return [
        {
            "id": "VC1",
            "title": "Preliminary",
            "parts": {
                "VP1": {
                    "id": "VP1",
                    "title": "Introduction",
                    "provisions": [
                        {"id": "1_Victoria", "title": "Objectives"},
                        {"id": "4_Victoria", "title": "Definitions"},
                    ],
                },
            },
        },
        {
            "id": "VC2",
            "title": "Hazardous manual handling",
            "parts": {
                "VP2": {
                    "id": "VP2",
                    "title": "Duties of employers",
                    "provisions": [
                        {"id": "28_Victoria", "title": "Identification of hazards"},
                    ],
                },
            },
        },
    ]


@pytest.fixture
def outline_nsw(raw_outline_nsw) -> Outline:
    return parse_outline(raw_outline_nsw)


@pytest.fixture
def outline_vic(raw_outline_vic) -> Outline:
    return parse_outline(raw_outline_vic)


@pytest.fixture
def raw_pairs() -> list[dict[str, Any]]:
    """Pair list mixing all tiers with some malformed records."""
    return [
        {"id_1": "4_NSW", "id_2": "4_Victoria", "similarity": 0.9},
        {"id_1": "1_Victoria", "id_2": "1_NSW", "similarity": 0.8},
        {"id_1": "1_NSW", "id_2": "4_Victoria", "similarity": 0.7},
        {"id_1": "2_NSW", "id_2": "4_Victoria", "similarity": 0.71},
        # Not a tier anchor
        {"id_1": "16_NSW", "id_2": "28_Victoria", "similarity": 0.5},
        # Same side
        {"id_1": "1_NSW", "id_2": "2_NSW", "similarity": 0.9},
        # Unknown side
        {"id_1": "1_NSW", "id_2": "9_Queensland", "similarity": 0.9},
        # Missing field
        {"id_1": "1_NSW", "similarity": 0.9},
    ]


@pytest.fixture
def tier_index(raw_pairs, outline_nsw, outline_vic, convention) -> TierIndex:
    """Alignment index built from the sample data."""
    return build_index(raw_pairs, outline_nsw, outline_vic, convention)


# =============================================================================
# Climate Fixtures
# =============================================================================


@pytest.fixture
def raw_paragraphs_ncr() -> list[dict[str, Any]]:
    return [
        {"doc_id": "ncr", "para_id": "p1", "text": "The UAE aims for net zero by 2050."},
        {"doc_id": "ncr", "para_id": "p2", "text": "Solar capacity doubled since 2015."},
        {"doc_id": "ncr", "para_id": "p9", "text": "Mangrove restoration sequesters carbon."},
    ]


@pytest.fixture
def raw_paragraphs_singapore() -> list[dict[str, Any]]:
    return [
        {"doc_id": "singapore", "para_id": "s1", "text": "Singapore targets net zero by 2050."},
        {"doc_id": "singapore", "para_id": "s2", "text": "A carbon tax applies to large emitters."},
        {"doc_id": "singapore", "para_id": "s3", "text": "Coastal protection plans are underway."},
    ]


@pytest.fixture
def paragraph_documents(raw_paragraphs_ncr, raw_paragraphs_singapore) -> ParagraphDocuments:
    """Both reports with pair counts for some paragraphs."""
    return ParagraphDocuments.from_raw(
        raw_paragraphs_ncr,
        raw_paragraphs_singapore,
        {"p1": 1, "p9": 2},
        {"s1": 1, "s3": 1},
    )


@pytest.fixture
def pair_responses() -> dict[tuple[str, str], list[dict[str, Any]]]:
    """Lookup responses keyed by (document, para_id)."""
    return {
        ("ncr", "p1"): [
            {"text_a": "p1", "text_b": "s1", "similarity": 0.91, "d_4": None},
        ],
        ("ncr", "p9"): [
            {"text_a": "p9", "text_b": "s3", "similarity": 0.82, "d_4": "coast"},
            {"text_a": "p9", "text_b": "s404", "similarity": 0.75, "d_4": None},
        ],
        ("singapore", "s1"): [
            {"text_a": "p1", "text_b": "s1", "similarity": 0.91, "d_4": None},
        ],
    }


@pytest.fixture
def fake_lookup(pair_responses):
    """Pair lookup callable backed by ``pair_responses``."""
    calls: list[tuple[str, str]] = []

    def lookup(document: str, para_id: str):
        calls.append((document, para_id))
        return pair_responses.get((document, para_id), [])

    lookup.calls = calls
    return lookup
