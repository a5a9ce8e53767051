"""Tests for stage output schemas and the pydantic-backed validator."""

import pytest
from pydantic import ValidationError

from proact.domain.component_type import ComponentType
from proact.ports.validator import ComponentSchemaValidator
from proact.schemas.components import (
    COMPONENT_OUTPUT_MODELS,
    ConsequencesOutput,
    DecisionQualityOutput,
    parse_output,
)
from proact.schemas.validator import PydanticSchemaValidator

pytestmark = pytest.mark.unit


class TestOutputModels:
    """Test the stage to schema dispatch table."""

    def test_every_stage_has_a_schema(self):
        assert set(COMPONENT_OUTPUT_MODELS) == set(ComponentType)

    def test_every_valid_output_parses(self, valid_outputs):
        for ct, output in valid_outputs.items():
            parse_output(ct, output)

    def test_empty_output_is_valid_shape(self):
        for ct in ComponentType.all():
            parse_output(ct, {})

    def test_consequence_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            ConsequencesOutput.model_validate({"table": {"cells": {"a": {"o": {"rating": 3}}}}})

    def test_dq_score_out_of_range(self):
        with pytest.raises(ValidationError):
            DecisionQualityOutput.model_validate({"elements": [{"name": "Helpful Problem Frame", "score": 101}]})


class TestPydanticSchemaValidator:
    """Test conversion of pydantic errors into validation results."""

    def test_satisfies_port(self):
        assert isinstance(PydanticSchemaValidator(), ComponentSchemaValidator)

    def test_valid_output(self, valid_outputs):
        result = PydanticSchemaValidator().validate(
            ComponentType.CONSEQUENCES, valid_outputs[ComponentType.CONSEQUENCES]
        )
        assert result.valid
        assert result.errors == []

    def test_invalid_output_lists_errors(self):
        result = PydanticSchemaValidator().validate(
            ComponentType.ALTERNATIVES, {"alternatives": [{"id": "a"}]}
        )
        assert not result.valid
        assert result.errors
        assert all({"loc", "msg", "type"} <= set(error) for error in result.errors)

    def test_non_dict_output_is_invalid(self):
        result = PydanticSchemaValidator().validate(ComponentType.ISSUE_RAISING, ["not", "a", "dict"])
        assert not result.valid
