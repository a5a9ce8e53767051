"""Tests for the ConsequencesTable value type."""

import pytest
from pydantic import ValidationError

from proact.analysis.consequences_table import ConsequencesTable, Rating
from proact.domain.component_type import ComponentType

pytestmark = pytest.mark.unit


class TestRating:
    """Test rating labels and display."""

    def test_str_has_sign_for_positive(self):
        assert str(Rating.MUCH_BETTER) == "+2"
        assert str(Rating.SAME) == "0"
        assert str(Rating.WORSE) == "-1"

    def test_label(self):
        assert Rating.MUCH_WORSE.label == "Much Worse"

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Rating(3)


class TestFromRatings:
    """Test building a table from nested ratings."""

    def test_objective_order_from_first_appearance(self):
        table = ConsequencesTable.from_ratings({"A": {"o2": 1}, "B": {"o1": 0, "o2": -1}})
        assert table.alternative_ids == ("A", "B")
        assert table.objective_ids == ("o2", "o1")

    def test_explicit_objective_order(self):
        table = ConsequencesTable.from_ratings({"A": {"o2": 1, "o1": 0}}, objective_ids=["o1", "o2"])
        assert table.objective_ids == ("o1", "o2")

    def test_missing_cell(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1}, "B": {}}, objective_ids=["o1"])
        assert table.get_cell("B", "o1") is None
        assert table.rating("B", "o1") == 0
        assert table.get_cell("A", "o1") == Rating.BETTER

    def test_counts(self):
        table = ConsequencesTable.from_ratings({"A": {"o1": 1, "o2": 0}, "B": {"o1": 0}})
        assert table.alternative_count == 2
        assert table.objective_count == 2
        assert not table.is_empty()
        assert ConsequencesTable().is_empty()


class TestFromOutput:
    """Test building a table from a Consequences stage output."""

    def test_from_component_output(self, valid_outputs):
        table = ConsequencesTable.from_output(valid_outputs[ComponentType.CONSEQUENCES])
        assert table.alternative_ids == ("move", "stay", "rent")
        assert table.objective_ids == ("cost", "commute")
        assert table.rating("rent", "commute") == -2

    def test_malformed_output_raises(self):
        with pytest.raises(ValidationError):
            ConsequencesTable.from_output({"table": {"cells": {"a": {"o": {"rating": "high"}}}}})
