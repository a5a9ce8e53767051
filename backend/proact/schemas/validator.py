"""Default schema validator backed by the pydantic stage models."""

from typing import Any

from pydantic import ValidationError

from proact.domain.component_type import ComponentType
from proact.ports.validator import SchemaValidationResult
from proact.schemas.components import output_model_for


class PydanticSchemaValidator:
    """Satisfies the ComponentSchemaValidator protocol."""

    def validate(self, component_type: ComponentType, output: dict[str, Any]) -> SchemaValidationResult:
        if not isinstance(output, dict):
            return SchemaValidationResult(
                valid=False,
                errors=[{"loc": [], "msg": "Output must be an object", "type": "dict_type"}],
            )
        try:
            output_model_for(component_type).model_validate(output)
        except ValidationError as exc:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ]
            return SchemaValidationResult(valid=False, errors=errors)
        return SchemaValidationResult(valid=True)
