"""Schema validator port for component outputs."""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from proact.domain.component_type import ComponentType


@dataclass
class SchemaValidationResult:
    """Result of validating one output against its stage schema."""

    valid: bool
    errors: list[dict] = field(default_factory=list)


@runtime_checkable
class ComponentSchemaValidator(Protocol):
    """Checks the generic shape of a component output.

    Stage completion rules are not part of this contract; the Cycle
    evaluates those itself.
    """

    def validate(self, component_type: ComponentType, output: dict[str, Any]) -> SchemaValidationResult:
        ...
