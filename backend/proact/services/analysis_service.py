"""AnalysisService -- runs the pure analysis functions over a cycle's outputs.

Triggered after Consequences, Tradeoffs or DecisionQuality is completed.
Results are published as pydantic payloads through the EventPublisher.
"""

import structlog
from pydantic import BaseModel

from proact.analysis import dq, pugh, tradeoffs
from proact.analysis.consequences_table import ConsequencesTable
from proact.core.config import Settings, get_settings
from proact.core.exceptions import ComponentNotFound
from proact.domain.component_type import ComponentType
from proact.domain.cycle import Cycle
from proact.ports.events import EventPublisher
from proact.schemas.analysis import (
    DQElementScore,
    DQScoresComputed,
    PughScoresComputed,
    TensionSummary,
    TradeoffsAnalyzed,
)
from proact.schemas.components import DecisionQualityOutput

logger = structlog.get_logger(__name__)


def _started_output(cycle: Cycle, component_type: ComponentType) -> dict:
    component = cycle.get_component(component_type)
    if not component.status.is_started():
        raise ComponentNotFound(
            f"{component_type.value} output not found",
            cycle_id=cycle.id,
            component_type=component_type.value,
        )
    return component.output


def consequences_table_for(cycle: Cycle) -> ConsequencesTable:
    return ConsequencesTable.from_output(_started_output(cycle, ComponentType.CONSEQUENCES))


def dq_elements_for(cycle: Cycle) -> list[dq.DQElement]:
    output = DecisionQualityOutput.model_validate(_started_output(cycle, ComponentType.DECISION_QUALITY))
    return [
        dq.DQElement(
            name=e.name,
            score=e.score,
            rationale=e.rationale,
            improvement_path=e.improvement_path,
        )
        for e in output.elements
    ]


class AnalysisService:
    """Computes derived analysis results and publishes them."""

    def __init__(self, publisher: EventPublisher, settings: Settings | None = None):
        self.publisher = publisher
        self.settings = settings or get_settings()

    def compute_pugh(self, cycle: Cycle) -> PughScoresComputed:
        table = consequences_table_for(cycle)
        return PughScoresComputed(
            cycle_id=cycle.id,
            session_id=cycle.session_id,
            alternative_scores=pugh.compute_scores(table),
            ranking=[r.alternative_id for r in pugh.rank_alternatives(table)],
            dominated_alternatives=[d.alternative_id for d in pugh.find_dominated(table)],
            irrelevant_objectives=[i.objective_id for i in pugh.find_irrelevant_objectives(table)],
            best_alternative_id=pugh.find_top_alternative(table),
        )

    def compute_tradeoffs(self, cycle: Cycle) -> TradeoffsAnalyzed:
        table = consequences_table_for(cycle)
        dominated = pugh.find_dominated(table)
        irrelevant = pugh.find_irrelevant_objectives(table)
        tensions = tradeoffs.analyze_tensions(table, dominated)
        return TradeoffsAnalyzed(
            cycle_id=cycle.id,
            session_id=cycle.session_id,
            dominated_count=len(dominated),
            irrelevant_count=len(irrelevant),
            tension_summaries=[
                TensionSummary(alternative_id=t.alternative_id, strengths=t.gains, weaknesses=t.losses)
                for t in tensions
            ],
            has_clear_winner=tradeoffs.summarize_tradeoffs(tensions).has_clear_winner,
        )

    def compute_dq(self, cycle: Cycle) -> DQScoresComputed:
        elements = dq_elements_for(cycle)
        weakest = dq.identify_weakest(elements)
        suggestions = dq.suggest_improvements(elements, threshold=self.settings.dq_improvement_threshold)
        return DQScoresComputed(
            cycle_id=cycle.id,
            session_id=cycle.session_id,
            element_scores=[
                DQElementScore(element_name=e.name, score=e.score, rationale=e.rationale or "")
                for e in elements
            ],
            overall_score=dq.compute_overall(elements),
            weakest_element=weakest.name if weakest else None,
            improvement_suggestions=[s.suggestion for s in suggestions],
            is_acceptable=dq.is_acceptable(elements, threshold=self.settings.dq_acceptable_threshold),
        )

    async def handle_component_completed(self, cycle: Cycle, component_type: ComponentType) -> BaseModel | None:
        """Publish the analysis a completed stage unlocks, if any.

        Returns:
            The published payload, or None for stages without analysis
        """
        if component_type is ComponentType.CONSEQUENCES:
            result = self.compute_pugh(cycle)
        elif component_type is ComponentType.TRADEOFFS:
            result = self.compute_tradeoffs(cycle)
        elif component_type is ComponentType.DECISION_QUALITY:
            result = self.compute_dq(cycle)
        else:
            return None

        await self.publisher.publish(result.model_dump(mode="json"))
        logger.debug("analysis_published", analysis_type=result.type, component_type=component_type.value)
        return result
