"""Tests for tradeoff tension analysis."""

import pytest

from proact.analysis.consequences_table import ConsequencesTable
from proact.analysis.pugh import find_dominated
from proact.analysis.tradeoffs import (
    Tension,
    analyze_tensions,
    find_clear_winners,
    summarize_tradeoffs,
    tradeoff_intensity,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def split_table():
    """A and B trade off against each other; C is dominated by both."""
    return ConsequencesTable.from_ratings(
        {"A": {"o1": 2, "o2": -1}, "B": {"o1": -1, "o2": 2}, "C": {"o1": -2, "o2": -2}}
    )


class TestAnalyzeTensions:
    """Test gains and losses among viable alternatives."""

    def test_dominated_alternative_is_excluded(self, split_table):
        dominated = find_dominated(split_table)
        assert [d.alternative_id for d in dominated] == ["C"]

        tensions = analyze_tensions(split_table, dominated)
        assert [t.alternative_id for t in tensions] == ["A", "B"]

    def test_gains_and_losses(self, split_table):
        tensions = analyze_tensions(split_table, find_dominated(split_table))
        a, b = tensions
        assert a.gains == ["o1"]
        assert a.losses == ["o2"]
        assert b.gains == ["o2"]
        assert b.losses == ["o1"]
        assert a.has_tradeoffs()
        assert not a.is_clear_winner()

    def test_dominated_alternatives_are_not_peers(self, split_table):
        """Without C as a peer, neither A nor B gains anything from beating C."""
        tensions = analyze_tensions(split_table, find_dominated(split_table))
        assert all(len(t.gains) == 1 for t in tensions)

    def test_without_dominance_filter_all_are_analyzed(self, split_table):
        tensions = analyze_tensions(split_table, [])
        c = tensions[2]
        assert c.alternative_id == "C"
        assert c.gains == []
        assert c.losses == ["o1", "o2"]

    def test_missing_cells_count_as_zero(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {"o2": 1}}, objective_ids=["o1", "o2"])
        dominated = find_dominated(table)
        assert dominated == []

        a, b = analyze_tensions(table, dominated)
        assert (a.gains, a.losses) == (["o1"], ["o2"])
        assert (b.gains, b.losses) == (["o2"], ["o1"])

    def test_sparse_dominated_alternative_is_excluded(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {"o2": 0}, "C": {"o2": 2}})
        tensions = analyze_tensions(table, find_dominated(table))
        assert [t.alternative_id for t in tensions] == ["A", "C"]

    def test_single_viable_alternative_has_no_tensions(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 2}, "B": {"o1": 0}})
        tensions = analyze_tensions(table, find_dominated(table))
        assert len(tensions) == 1
        assert tensions[0].gains == []
        assert tensions[0].losses == []


class TestSummary:
    """Test summary helpers."""

    def test_clear_winner(self):
        tensions = [Tension("A", gains=["o1"]), Tension("B", gains=["o2"], losses=["o1"])]
        assert [t.alternative_id for t in find_clear_winners(tensions)] == ["A"]

    def test_intensity(self):
        assert tradeoff_intensity(Tension("A", gains=["o1", "o2"], losses=["o3"])) == 3

    def test_summarize(self, split_table):
        summary = summarize_tradeoffs(analyze_tensions(split_table, find_dominated(split_table)))
        assert summary.total_alternatives == 2
        assert not summary.has_clear_winner
        assert summary.most_balanced == "A"
        assert summary.most_polarizing == "A"

    def test_ties_go_to_first_in_table_order(self):
        tensions = [
            Tension("A", gains=["o1"], losses=["o2"]),
            Tension("B", gains=["o2"], losses=["o1"]),
            Tension("C", gains=["o3"], losses=["o4"]),
        ]
        summary = summarize_tradeoffs(tensions)
        assert summary.most_polarizing == "A"
        assert summary.most_balanced == "A"

    def test_most_polarizing_prefers_higher_intensity(self):
        tensions = [Tension("A", gains=["o1"]), Tension("B", gains=["o1"], losses=["o2", "o3"])]
        assert summarize_tradeoffs(tensions).most_polarizing == "B"

    def test_summarize_empty(self):
        summary = summarize_tradeoffs([])
        assert summary.total_alternatives == 0
        assert summary.most_balanced is None
