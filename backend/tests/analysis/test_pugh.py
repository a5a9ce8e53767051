"""Tests for Pugh matrix scoring, dominance and ranking."""

import itertools

import pytest

from proact.analysis.consequences_table import ConsequencesTable
from proact.analysis.pugh import (
    compute_scores,
    dominates,
    find_dominated,
    find_irrelevant_objectives,
    find_top_alternative,
    rank_alternatives,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def abc_table():
    """A dominates B dominates C on two objectives."""
    return ConsequencesTable.from_ratings(
        {"A": {"o1": 2, "o2": 1}, "B": {"o1": 0, "o2": 0}, "C": {"o1": -1, "o2": -2}}
    )


class TestComputeScores:
    """Test summing ratings per alternative."""

    def test_scores(self, abc_table):
        assert compute_scores(abc_table) == {"A": 3, "B": 0, "C": -3}

    def test_missing_cells_count_as_zero(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 2}, "B": {"o2": -1}})
        assert compute_scores(table) == {"A": 2, "B": -1}

    def test_empty_table(self):
        assert compute_scores(ConsequencesTable()) == {}


class TestDominance:
    """Test strict dominance and find_dominated."""

    def test_dominated_alternatives(self, abc_table):
        dominated = find_dominated(abc_table)
        assert [(d.alternative_id, d.dominated_by_id) for d in dominated] == [("B", "A"), ("C", "A")]

    def test_explanation_names_objectives(self, abc_table):
        dominated = find_dominated(abc_table)
        assert "o1" in dominated[0].explanation
        assert "o2" in dominated[0].explanation

    def test_equal_alternatives_do_not_dominate(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {"o1": 1}})
        assert not dominates(table, "A", "B")
        assert find_dominated(table) == []

    def test_tradeoff_prevents_dominance(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 2, "o2": -1}, "B": {"o1": -1, "o2": 2}})
        assert find_dominated(table) == []

    def test_single_alternative_has_no_dominance(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 2}})
        assert find_dominated(table) == []

    def test_missing_cell_counts_as_zero_in_dominance(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {"o2": 0}}, objective_ids=["o1", "o2"])
        dominated = find_dominated(table)
        assert [(d.alternative_id, d.dominated_by_id) for d in dominated] == [("B", "A")]
        assert dominated[0].explanation.endswith("strictly better on: o1")

    def test_missing_cell_beats_negative_rating(self):
        """A has no o2 cell, which reads as 0 and beats B's -1."""
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {"o1": 1, "o2": -1}})
        assert dominates(table, "A", "B")
        assert not dominates(table, "B", "A")

    def test_relation_is_irreflexive(self, abc_table):
        for alt in abc_table.alternative_ids:
            assert not dominates(abc_table, alt, alt)

    def test_antisymmetric_and_transitive_exhaustively(self):
        """Every 3x2 table with ratings in {-1, 0, 1}."""
        alternatives = ["A", "B", "C"]
        for values in itertools.product([-1, 0, 1], repeat=6):
            ratings = {
                alt: {"o1": values[2 * i], "o2": values[2 * i + 1]} for i, alt in enumerate(alternatives)
            }
            table = ConsequencesTable.from_ratings(ratings)
            for a, b in itertools.permutations(alternatives, 2):
                assert not (dominates(table, a, b) and dominates(table, b, a))
            for a, b, c in itertools.permutations(alternatives, 3):
                if dominates(table, a, b) and dominates(table, b, c):
                    assert dominates(table, a, c)


class TestIrrelevantObjectives:
    """Test objectives with uniform ratings."""

    def test_uniform_objective_is_irrelevant(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1, "o2": 2}, "B": {"o1": 1, "o2": -1}})
        irrelevant = find_irrelevant_objectives(table)
        assert [i.objective_id for i in irrelevant] == ["o1"]
        assert irrelevant[0].uniform_rating == 1

    def test_only_present_cells_are_compared(self):
        table = ConsequencesTable.from_ratings(
            {"A": {"o1": 1}, "B": {"o1": 1}, "C": {"o2": 0}},
            objective_ids=["o1", "o2"],
        )
        assert [i.objective_id for i in find_irrelevant_objectives(table)] == ["o1"]

    def test_single_rated_alternative_is_not_judged(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {}}, objective_ids=["o1"])
        assert find_irrelevant_objectives(table) == []

    def test_varied_objectives_are_relevant(self, abc_table):
        assert find_irrelevant_objectives(abc_table) == []


class TestRanking:
    """Test ranking and the top alternative."""

    def test_rank_order(self, abc_table):
        ranked = rank_alternatives(abc_table)
        assert [(r.alternative_id, r.score, r.rank) for r in ranked] == [("A", 3, 1), ("B", 0, 2), ("C", -3, 3)]

    def test_ties_share_rank_and_keep_table_order(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {"o1": 1}, "C": {"o1": -1}})
        ranked = rank_alternatives(table)
        assert [(r.alternative_id, r.rank) for r in ranked] == [("A", 1), ("B", 1), ("C", 3)]

    def test_top_alternative_on_strict_lead(self, abc_table):
        assert find_top_alternative(abc_table) == "A"

    def test_no_top_alternative_on_tie(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 2, "o2": -1}, "B": {"o1": -1, "o2": 2}})
        assert find_top_alternative(table) is None

    def test_no_top_alternative_for_empty_table(self):
        assert find_top_alternative(ConsequencesTable()) is None

    def test_single_alternative_is_top(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": -2}})
        assert find_top_alternative(table) == "A"
