"""Tests for pair normalization and tier bucketing."""

from __future__ import annotations

import pytest

from docdiff.alignment import (
    DropReason,
    NormalizedPair,
    TierIndex,
    build_index,
    classify_pair,
    normalize_pairs,
    tier_summary,
)
from docdiff.ontology import Side, SimilarityPair, Tier
from docdiff.outline import all_provision_ids, parse_outline


# =============================================================================
# Normalizer Tests
# =============================================================================


class TestClassifyPair:
    """Tests for single-record classification."""

    def test_orients_pair_by_side(self, convention):
        """Members are reordered so a_id is always the side A provision."""
        result = classify_pair(
            {"id_1": "4_Victoria", "id_2": "4_NSW", "similarity": 0.9}, convention
        )
        assert result == NormalizedPair(tier=Tier.HIGH, a_id="4_NSW", b_id="4_Victoria")

    def test_accepts_model_instances(self, convention):
        pair = SimilarityPair(id_1="1_NSW", id_2="1_Victoria", similarity=0.8)
        result = classify_pair(pair, convention)
        assert isinstance(result, NormalizedPair)
        assert result.tier == Tier.MEDIUM

    @pytest.mark.parametrize("similarity,tier", [
        (0.7, Tier.LOW),
        (0.66, Tier.LOW),
        (0.8, Tier.MEDIUM),
        (0.9, Tier.HIGH),
        (0.86, Tier.HIGH),
        ("0.9", Tier.HIGH),
    ])
    def test_rounds_to_tier_anchor(self, convention, similarity, tier):
        result = classify_pair(
            {"id_1": "1_NSW", "id_2": "1_Victoria", "similarity": similarity}, convention
        )
        assert result.tier == tier

    @pytest.mark.parametrize("similarity", [0.5, 0.64, 1.0, 0.0])
    def test_non_anchor_similarity_dropped(self, convention, similarity):
        result = classify_pair(
            {"id_1": "1_NSW", "id_2": "1_Victoria", "similarity": similarity}, convention
        )
        assert result == DropReason.UNKNOWN_TIER

    def test_same_side_dropped(self, convention):
        result = classify_pair({"id_1": "1_NSW", "id_2": "2_NSW", "similarity": 0.9}, convention)
        assert result == DropReason.SAME_SIDE

    def test_unknown_side_dropped(self, convention):
        result = classify_pair(
            {"id_1": "1_NSW", "id_2": "1_Queensland", "similarity": 0.9}, convention
        )
        assert result == DropReason.UNKNOWN_SIDE

    @pytest.mark.parametrize("record", [
        {"id_1": "1_NSW", "similarity": 0.9},
        {"id_1": "1_NSW", "id_2": "1_Victoria", "similarity": "high"},
        {"id_1": None, "id_2": "1_Victoria", "similarity": 0.9},
        {},
    ])
    def test_invalid_record_dropped(self, convention, record):
        assert classify_pair(record, convention) == DropReason.INVALID_RECORD


class TestNormalizePairs:
    """Tests for whole-list normalization."""

    def test_counts_drop_reasons(self, raw_pairs, convention):
        valid, dropped = normalize_pairs(raw_pairs, convention)

        assert len(valid) == 4
        assert dropped[DropReason.UNKNOWN_TIER] == 1
        assert dropped[DropReason.SAME_SIDE] == 1
        assert dropped[DropReason.UNKNOWN_SIDE] == 1
        assert dropped[DropReason.INVALID_RECORD] == 1

    def test_none_is_empty(self, convention):
        valid, dropped = normalize_pairs(None, convention)
        assert valid == []
        assert not dropped


# =============================================================================
# Bucketing Tests
# =============================================================================


class TestBuildIndex:
    """Tests for the tier bucketing engine."""

    def test_high_tier_pair_from_single_record(self, convention):
        """One high pair lands in the high tier only, with empty low/medium entries."""
        outline = parse_outline([
            {"id": "C1", "parts": {"P1": {"id": "P1", "provisions": [{"id": "4_NSW", "title": "x"}]}}}
        ])
        pairs = [{"id_1": "4_NSW", "id_2": "4_Victoria", "similarity": 0.9}]

        index = build_index(pairs, outline, [], convention)

        assert index.side_map(Tier.HIGH, Side.A)["4_NSW"] == frozenset({"4_Victoria"})
        assert index.side_map(Tier.LOW, Side.A)["4_NSW"] == frozenset()
        assert index.side_map(Tier.MEDIUM, Side.A)["4_NSW"] == frozenset()

    def test_pairs_are_symmetric(self, tier_index):
        """Every counterpart link exists in both directions at the same tier."""
        for tier in Tier:
            for a_id, b_ids in tier_index.side_map(tier, Side.A).items():
                for b_id in b_ids:
                    assert a_id in tier_index.counterparts(tier, Side.B, b_id)
            for b_id, a_ids in tier_index.side_map(tier, Side.B).items():
                for a_id in a_ids:
                    assert b_id in tier_index.counterparts(tier, Side.A, a_id)

    def test_each_pair_in_exactly_one_tier(self, tier_index):
        tiers = [t for t in Tier if "4_Victoria" in tier_index.counterparts(t, Side.A, "4_NSW")]
        assert tiers == [Tier.HIGH]

    def test_expected_adjacency(self, tier_index):
        assert tier_index.counterparts(Tier.MEDIUM, Side.A, "1_NSW") == {"1_Victoria"}
        assert tier_index.counterparts(Tier.LOW, Side.A, "1_NSW") == {"4_Victoria"}
        assert tier_index.counterparts(Tier.LOW, Side.B, "4_Victoria") == {"1_NSW", "2_NSW"}

    def test_closure_covers_every_outline_provision(
        self, tier_index, outline_nsw, outline_vic
    ):
        """Every outline provision has an entry in every tier, even with no pairs."""
        for tier in Tier:
            for pid in all_provision_ids(outline_nsw):
                assert tier_index.contains(tier, Side.A, pid)
            for pid in all_provision_ids(outline_vic):
                assert tier_index.contains(tier, Side.B, pid)

        assert tier_index.counterparts(Tier.HIGH, Side.A, "16_NSW") == frozenset()
        assert tier_index.counterparts(Tier.LOW, Side.B, "28_Victoria") == frozenset()

    def test_dropped_records_leave_no_trace(self, tier_index):
        for tier in Tier:
            assert "9_Queensland" not in tier_index.side_map(tier, Side.B)
            assert "2_NSW" not in tier_index.counterparts(tier, Side.A, "1_NSW")

    def test_duplicate_pairs_deduplicated(self, outline_nsw, outline_vic, convention):
        pairs = [
            {"id_1": "4_NSW", "id_2": "4_Victoria", "similarity": 0.9},
            {"id_1": "4_Victoria", "id_2": "4_NSW", "similarity": 0.9},
        ]
        index = build_index(pairs, outline_nsw, outline_vic, convention)
        assert len(index.counterparts(Tier.HIGH, Side.A, "4_NSW")) == 1

    def test_rebuild_is_idempotent(self, raw_pairs, outline_nsw, outline_vic, convention):
        first = build_index(raw_pairs, outline_nsw, outline_vic, convention)
        second = build_index(raw_pairs, outline_nsw, outline_vic, convention)
        reversed_order = build_index(list(reversed(raw_pairs)), outline_nsw, outline_vic, convention)

        assert first == second
        assert first == reversed_order

    def test_no_pairs_still_builds(self, outline_nsw, outline_vic, convention):
        index = build_index(None, outline_nsw, outline_vic, convention)
        assert isinstance(index, TierIndex)
        assert index.counterparts(Tier.HIGH, Side.A, "4_NSW") == frozenset()


class TestTierIndexQueries:
    """Tests for index lookups."""

    def test_missing_id_has_no_counterparts(self, tier_index):
        assert tier_index.counterparts(Tier.HIGH, Side.A, "999_NSW") == frozenset()
        assert not tier_index.contains(Tier.HIGH, Side.A, "999_NSW")

    def test_best_tier(self, tier_index):
        assert tier_index.best_tier(Side.A, "4_NSW") == Tier.HIGH
        assert tier_index.best_tier(Side.A, "1_NSW") == Tier.MEDIUM
        assert tier_index.best_tier(Side.A, "2_NSW") == Tier.LOW
        assert tier_index.best_tier(Side.A, "16_NSW") is None

    def test_tier_summary(self, tier_index):
        rows = {(r["side"], r["tier"]): r for r in tier_summary(tier_index)}

        assert len(rows) == 6
        assert rows[("a", "low")]["matched"] == 2
        assert rows[("a", "high")]["matched"] == 1
        assert rows[("a", "high")]["total"] == 4
        assert rows[("b", "low")]["matched"] == 1
