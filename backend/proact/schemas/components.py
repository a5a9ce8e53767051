"""Pydantic schemas for the structured output of each PrOACT stage.

``COMPONENT_OUTPUT_MODELS`` is the single dispatch table from stage to schema.
Shape only: completion rules (minimum counts, status quo, dense tables) are
enforced by the Cycle aggregate.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from proact.domain.component_type import ComponentType


class IssueRaisingOutput(BaseModel):
    potential_decisions: list[str] = []
    objectives: list[str] = []
    uncertainties: list[str] = []
    considerations: list[str] = []
    user_confirmed: bool = False


class LinkedDecision(BaseModel):
    description: str
    relationship: str


class Constraint(BaseModel):
    constraint_type: str
    description: str


class Party(BaseModel):
    id: str
    name: str
    role: str
    objectives: list[str] = []


class DecisionHierarchy(BaseModel):
    already_made: list[str] = []
    focal_decisions: list[str] = []
    deferred: list[str] = []


class ProblemFrameOutput(BaseModel):
    decision_maker: str | None = None
    focal_decision: str | None = None
    ultimate_aim: str | None = None
    temporal_constraint: datetime | None = None
    spatial_scope: str | None = None
    linked_decisions: list[LinkedDecision] = []
    constraints: list[Constraint] = []
    affected_parties: list[Party] = []
    expert_sources: list[str] = []
    decision_hierarchy: DecisionHierarchy | None = None
    decision_statement: str | None = None


class PerformanceMeasure(BaseModel):
    description: str
    is_quantitative: bool = False
    unit: str | None = None
    direction: str = "higher_is_better"


class FundamentalObjective(BaseModel):
    id: str
    description: str
    performance_measure: PerformanceMeasure | None = None
    affected_party_id: str | None = None


class MeansObjective(BaseModel):
    id: str
    description: str
    contributes_to_objective_id: str


class ObjectivesOutput(BaseModel):
    fundamental_objectives: list[FundamentalObjective] = []
    means_objectives: list[MeansObjective] = []


class Alternative(BaseModel):
    id: str
    name: str
    description: str = ""
    assumptions: list[str] = []


class AlternativesOutput(BaseModel):
    alternatives: list[Alternative] = []
    status_quo_id: str | None = None


class ConsequenceCell(BaseModel):
    rating: int = Field(ge=-2, le=2)
    explanation: str = ""
    quant_value: float | None = None
    quant_unit: str | None = None
    source: str | None = None
    uncertainty: str | None = None


class ConsequenceTableData(BaseModel):
    alternative_ids: list[str] = []
    objective_ids: list[str] = []
    # cells[alternative_id][objective_id]
    cells: dict[str, dict[str, ConsequenceCell]] = {}


class Uncertainty(BaseModel):
    id: str
    description: str
    driver: str = ""
    worth_resolving: bool = False
    resolvable: bool = False


class ConsequencesOutput(BaseModel):
    table: ConsequenceTableData = Field(default_factory=ConsequenceTableData)
    uncertainties: list[Uncertainty] = []


class DominatedAlternativeOutput(BaseModel):
    alternative_id: str
    dominated_by_id: str
    explanation: str = ""


class IrrelevantObjectiveOutput(BaseModel):
    objective_id: str
    reason: str = ""


class TensionOutput(BaseModel):
    alternative_id: str
    gains: list[str] = []
    losses: list[str] = []
    uncertainty_impact: str | None = None


class TradeoffsOutput(BaseModel):
    dominated_alternatives: list[DominatedAlternativeOutput] = []
    irrelevant_objectives: list[IrrelevantObjectiveOutput] = []
    tensions: list[TensionOutput] = []


class RecommendationOutput(BaseModel):
    standout_option: str | None = None
    synthesis: str = ""
    caveats: list[str] = []
    additional_info: list[str] = []


class DQElementOutput(BaseModel):
    name: str
    score: int = Field(ge=0, le=100)
    rationale: str | None = None
    improvement_path: str | None = None


class DecisionQualityOutput(BaseModel):
    elements: list[DQElementOutput] = []


class PlannedAction(BaseModel):
    description: str
    due_date: datetime | None = None
    owner: str | None = None


class NotesNextStepsOutput(BaseModel):
    remaining_uncertainties: list[str] = []
    open_questions: list[str] = []
    planned_actions: list[PlannedAction] = []
    affirmation: str | None = None
    further_analysis_paths: list[str] = []


COMPONENT_OUTPUT_MODELS: dict[ComponentType, type[BaseModel]] = {
    ComponentType.ISSUE_RAISING: IssueRaisingOutput,
    ComponentType.PROBLEM_FRAME: ProblemFrameOutput,
    ComponentType.OBJECTIVES: ObjectivesOutput,
    ComponentType.ALTERNATIVES: AlternativesOutput,
    ComponentType.CONSEQUENCES: ConsequencesOutput,
    ComponentType.TRADEOFFS: TradeoffsOutput,
    ComponentType.RECOMMENDATION: RecommendationOutput,
    ComponentType.DECISION_QUALITY: DecisionQualityOutput,
    ComponentType.NOTES_NEXT_STEPS: NotesNextStepsOutput,
}


def output_model_for(component_type: ComponentType) -> type[BaseModel]:
    return COMPONENT_OUTPUT_MODELS[component_type]


def parse_output(component_type: ComponentType, output: dict[str, Any]) -> BaseModel:
    """Validate a raw output dict into the stage's typed model.

    Raises:
        pydantic.ValidationError: if the output does not match the schema
    """
    return output_model_for(component_type).model_validate(output)
