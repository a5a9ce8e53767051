"""Consequences table: the ratings input to every analysis function."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from proact.schemas.components import ConsequencesOutput


class Rating(IntEnum):
    """Pugh rating of an alternative on one objective, relative to the baseline."""

    MUCH_WORSE = -2
    WORSE = -1
    SAME = 0
    BETTER = 1
    MUCH_BETTER = 2

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    def __str__(self) -> str:
        return f"+{self.value}" if self.value > 0 else str(self.value)


@dataclass(frozen=True)
class ConsequencesTable:
    """Alternatives x objectives grid of ratings.

    The table need not be dense. A missing cell reads as ``Rating.SAME`` (0)
    through ``rating()``; ``get_cell()`` exposes whether it is really there.
    """

    alternative_ids: tuple[str, ...] = ()
    objective_ids: tuple[str, ...] = ()
    cells: dict[tuple[str, str], Rating] = field(default_factory=dict)

    @classmethod
    def from_ratings(
        cls,
        ratings: dict[str, dict[str, int]],
        objective_ids: list[str] | None = None,
    ) -> "ConsequencesTable":
        """Build from ``{alternative_id: {objective_id: rating}}``.

        Objective order follows ``objective_ids`` when given, otherwise first
        appearance across the rows.
        """
        if objective_ids is None:
            objective_ids = []
            for row in ratings.values():
                for obj_id in row:
                    if obj_id not in objective_ids:
                        objective_ids.append(obj_id)

        cells = {
            (alt_id, obj_id): Rating(value)
            for alt_id, row in ratings.items()
            for obj_id, value in row.items()
        }
        return cls(tuple(ratings), tuple(objective_ids), cells)

    @classmethod
    def from_output(cls, output: dict[str, Any] | ConsequencesOutput) -> "ConsequencesTable":
        """Build from a Consequences component output.

        Raises:
            pydantic.ValidationError: if the output is malformed
        """
        if not isinstance(output, ConsequencesOutput):
            output = ConsequencesOutput.model_validate(output)
        table = output.table
        cells = {
            (alt_id, obj_id): Rating(cell.rating)
            for alt_id, row in table.cells.items()
            for obj_id, cell in row.items()
        }
        return cls(tuple(table.alternative_ids), tuple(table.objective_ids), cells)

    def get_cell(self, alternative_id: str, objective_id: str) -> Rating | None:
        return self.cells.get((alternative_id, objective_id))

    def rating(self, alternative_id: str, objective_id: str) -> int:
        """Rating value with missing cells treated as 0."""
        return int(self.cells.get((alternative_id, objective_id), Rating.SAME))

    def is_empty(self) -> bool:
        return not self.alternative_ids

    @property
    def alternative_count(self) -> int:
        return len(self.alternative_ids)

    @property
    def objective_count(self) -> int:
        return len(self.objective_ids)
