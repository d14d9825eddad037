"""Tests for the hierarchy aggregator."""

from __future__ import annotations

import pytest

from docdiff.ontology import OutlineNode, Side, Tier
from docdiff.outline import (
    ExpansionState,
    all_provision_ids,
    counterpart_count,
    find_provision,
    is_node_visible,
    iter_nodes,
    matches_or_descends,
    tier_counts,
    visible_rows,
)


# =============================================================================
# Traversal Tests
# =============================================================================


class TestTraversal:
    """Tests for outline parsing and traversal."""

    def test_parts_keep_insertion_order(self, outline_nsw):
        assert list(outline_nsw[0].parts) == ["P1", "P2"]

    def test_all_provision_ids_in_display_order(self, outline_nsw):
        assert all_provision_ids(outline_nsw) == ["1_NSW", "2_NSW", "4_NSW", "16_NSW"]

    def test_iter_nodes_reports_parent_and_depth(self, outline_nsw):
        nodes = {node.id: (parent, depth) for node, parent, depth in iter_nodes(outline_nsw)}
        assert nodes["C1"] == (None, 0)
        assert nodes["P2"] == ("C1", 1)

    def test_find_provision(self, outline_vic):
        provision = find_provision(outline_vic, "28_Victoria")
        assert provision is not None
        assert provision.title == "Identification of hazards"
        assert find_provision(outline_vic, "28_NSW") is None
        assert find_provision(None, "28_Victoria") is None

    def test_node_kinds(self, outline_nsw):
        chapter = outline_nsw[0]
        part = chapter.parts["P1"]
        assert chapter.has_parts and not chapter.has_provisions
        assert part.has_provisions and not part.has_parts
        assert OutlineNode(id="empty").has_children is False


# =============================================================================
# Membership Tests
# =============================================================================


class TestMatchesOrDescends:
    """Tests for the recursive membership predicate."""

    def test_no_result_set_matches_every_node(self, outline_nsw):
        for node, _, _ in iter_nodes(outline_nsw):
            assert matches_or_descends(node, None)

    def test_direct_id_match(self, outline_nsw):
        assert matches_or_descends(outline_nsw[1], {"C2"})

    def test_leaf_match_propagates_to_every_ancestor(self, outline_nsw):
        results = {"4_NSW"}
        chapter = outline_nsw[0]
        assert matches_or_descends(chapter, results)
        assert matches_or_descends(chapter.parts["P2"], results)
        assert not matches_or_descends(chapter.parts["P1"], results)
        assert not matches_or_descends(outline_nsw[1], results)

    def test_empty_result_set_matches_nothing(self, outline_nsw):
        for node, _, _ in iter_nodes(outline_nsw):
            assert not matches_or_descends(node, frozenset())

    def test_node_without_children(self):
        assert not matches_or_descends(OutlineNode(id="X"), {"Y"})

    def test_parts_take_precedence_over_provisions(self):
        """A container node is judged by its parts alone."""
        node = OutlineNode.model_validate({
            "id": "C9",
            "parts": {"P9": {"id": "P9", "provisions": [{"id": "90_NSW"}]}},
            "provisions": [{"id": "91_NSW"}],
        })
        assert not matches_or_descends(node, {"91_NSW"})
        assert matches_or_descends(node, {"90_NSW"})

    def test_visibility_ignores_results_without_term(self, outline_nsw):
        assert is_node_visible(outline_nsw[1], "", frozenset())
        assert not is_node_visible(outline_nsw[1], "hazard", {"4_NSW"})


# =============================================================================
# Count Tests
# =============================================================================


class TestCounterpartCount:
    """Tests for per-provision counts."""

    def test_counts_per_tier(self, tier_index):
        assert counterpart_count("4_NSW", tier_index, Tier.HIGH, Side.A) == 1
        assert counterpart_count("4_Victoria", tier_index, Tier.LOW, Side.B) == 2

    def test_every_outline_provision_defaults_to_zero(self, tier_index, outline_nsw):
        for pid in all_provision_ids(outline_nsw):
            for tier in Tier:
                assert counterpart_count(pid, tier_index, tier, Side.A) >= 0
        assert tier_counts("16_NSW", tier_index, Side.A) == (0, 0, 0)

    def test_unknown_id_is_zero(self, tier_index):
        assert counterpart_count("missing", tier_index, Tier.HIGH, Side.A) == 0

    def test_no_index_is_zero(self):
        assert tier_counts("4_NSW", None, Side.A) == (0, 0, 0)

    def test_tier_counts_order(self, tier_index):
        assert tier_counts("1_NSW", tier_index, Side.A) == (1, 1, 0)


# =============================================================================
# Expansion Tests
# =============================================================================


class TestExpansionState:
    """Tests for search-driven expansion."""

    def test_collapsed_by_default(self):
        assert not ExpansionState().is_open("C1")

    def test_search_opens_matching_path(self, outline_nsw):
        state = ExpansionState()
        state.sync(outline_nsw, "hazard", {"4_NSW"})

        assert state.is_open("C1")
        assert state.is_open("P2")
        assert not state.is_open("P1")
        assert not state.is_open("C2")

    def test_clearing_term_collapses(self, outline_nsw):
        state = ExpansionState()
        state.sync(outline_nsw, "hazard", {"4_NSW"})
        state.sync(outline_nsw, "", None)
        assert state.open_ids == set()

    def test_manual_toggle_independent_of_search(self, outline_nsw):
        state = ExpansionState()
        state.sync(outline_nsw, "hazard", {"4_NSW"})

        assert state.toggle("C1") is False
        assert state.toggle("C2") is True
        # Same term again does not reapply the policy
        state.sync(outline_nsw, "hazard", {"4_NSW"})
        assert not state.is_open("C1")
        assert state.is_open("C2")


# =============================================================================
# Visible Rows Tests
# =============================================================================


class TestVisibleRows:
    """Tests for the flattened tree view."""

    def test_collapsed_outline_shows_chapters(self, outline_nsw, tier_index):
        rows = visible_rows(outline_nsw, ExpansionState(), "", None, tier_index, Side.A)
        assert [r.id for r in rows] == ["C1", "C2"]
        assert rows[0].has_children

    def test_open_nodes_list_provisions_with_counts(self, outline_nsw, tier_index):
        state = ExpansionState(open_ids={"C1", "P2"})
        rows = visible_rows(outline_nsw, state, "", None, tier_index, Side.A)

        assert [r.id for r in rows] == ["C1", "P1", "P2", "4_NSW", "C2"]
        provision = rows[3]
        assert provision.row_type == "provision"
        assert provision.depth == 2
        assert provision.counts == (0, 0, 1)
        assert provision.counts_label == "0 | 0 | 1"

    def test_search_hides_non_matching_nodes(self, outline_nsw, tier_index):
        state = ExpansionState()
        results = frozenset({"4_NSW"})
        state.sync(outline_nsw, "hazard", results)
        rows = visible_rows(outline_nsw, state, "hazard", results, tier_index, Side.A)

        ids = [r.id for r in rows]
        assert "C2" not in ids
        assert "P1" not in ids
        assert ids == ["C1", "P2", "4_NSW"]

    @pytest.mark.parametrize("term", ["", "anything"])
    def test_labels(self, outline_nsw, tier_index, term):
        rows = visible_rows(outline_nsw, ExpansionState(), term, None, tier_index, Side.A)
        assert rows[0].label == "C1 - Preliminary"
