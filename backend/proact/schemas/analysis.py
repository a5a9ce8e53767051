"""Pydantic payloads for analysis results published downstream."""

import uuid
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(UTC)


class AnalysisEvent(BaseModel):
    event_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    cycle_id: uuid.UUID
    session_id: uuid.UUID
    computed_at: datetime = Field(default_factory=_now)


class PughScoresComputed(AnalysisEvent):
    type: Literal["analysis.pugh_scores_computed"] = "analysis.pugh_scores_computed"
    alternative_scores: dict[str, int]
    ranking: list[str]
    dominated_alternatives: list[str]
    irrelevant_objectives: list[str]
    best_alternative_id: str | None = None


class DQElementScore(BaseModel):
    element_name: str
    score: int
    rationale: str = ""


class DQScoresComputed(AnalysisEvent):
    type: Literal["analysis.dq_scores_computed"] = "analysis.dq_scores_computed"
    element_scores: list[DQElementScore]
    overall_score: int
    weakest_element: str | None = None
    improvement_suggestions: list[str]
    is_acceptable: bool


class TensionSummary(BaseModel):
    alternative_id: str
    strengths: list[str]
    weaknesses: list[str]


class TradeoffsAnalyzed(AnalysisEvent):
    type: Literal["analysis.tradeoffs_analyzed"] = "analysis.tradeoffs_analyzed"
    dominated_count: int
    irrelevant_count: int
    tension_summaries: list[TensionSummary]
    has_clear_winner: bool
