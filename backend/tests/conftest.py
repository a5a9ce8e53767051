"""Shared test fixtures for all test groups."""

import uuid

import pytest

from proact.adapters.memory import InMemoryCycleRepository, InMemoryEventPublisher
from proact.analysis.dq import DQ_ELEMENT_NAMES
from proact.domain.component_type import ComponentType
from proact.domain.cycle import Cycle

DQ_SCORES = [80, 60, 90, 70, 55, 85, 95]


def _valid_outputs() -> dict[ComponentType, dict]:
    return {
        ComponentType.ISSUE_RAISING: {
            "potential_decisions": ["Whether to relocate for the new role"],
            "uncertainties": ["Housing market"],
            "user_confirmed": True,
        },
        ComponentType.PROBLEM_FRAME: {
            "decision_maker": "Household",
            "focal_decision": "Where to live next year",
            "constraints": [{"constraint_type": "budget", "description": "Max 2k/month"}],
        },
        ComponentType.OBJECTIVES: {
            "fundamental_objectives": [
                {"id": "cost", "description": "Keep living costs low"},
                {"id": "commute", "description": "Short commute"},
            ],
        },
        ComponentType.ALTERNATIVES: {
            "alternatives": [
                {"id": "stay", "name": "Stay put"},
                {"id": "move", "name": "Move closer"},
                {"id": "rent", "name": "Rent downtown"},
            ],
            "status_quo_id": "stay",
        },
        ComponentType.CONSEQUENCES: {
            "table": {
                "alternative_ids": ["move", "stay", "rent"],
                "objective_ids": ["cost", "commute"],
                "cells": {
                    "move": {"cost": {"rating": 2}, "commute": {"rating": 1}},
                    "stay": {"cost": {"rating": 0}, "commute": {"rating": 0}},
                    "rent": {"cost": {"rating": -1}, "commute": {"rating": -2}},
                },
            },
        },
        ComponentType.TRADEOFFS: {
            "dominated_alternatives": [
                {"alternative_id": "stay", "dominated_by_id": "move"},
            ],
        },
        ComponentType.RECOMMENDATION: {
            "standout_option": "move",
            "synthesis": "Moving wins on both objectives.",
        },
        ComponentType.DECISION_QUALITY: {
            "elements": [
                {"name": name, "score": score, "rationale": f"Scored {score}"}
                for name, score in zip(DQ_ELEMENT_NAMES, DQ_SCORES)
            ],
        },
        ComponentType.NOTES_NEXT_STEPS: {
            "planned_actions": [{"description": "Call the landlord"}],
        },
    }


@pytest.fixture
def valid_outputs():
    """A valid output for every stage of one relocation decision."""
    return _valid_outputs()


@pytest.fixture
def session_id():
    return uuid.uuid4()


@pytest.fixture
def cycle(session_id):
    """Fresh cycle with its creation event already drained."""
    new_cycle = Cycle.new(session_id)
    new_cycle.take_events()
    return new_cycle


@pytest.fixture
def complete_through(valid_outputs):
    """Start and complete every stage up to and including ``last``."""

    def _complete_through(target: Cycle, last: ComponentType) -> Cycle:
        for ct in ComponentType.all():
            target.start_component(ct)
            target.complete_component(ct, valid_outputs[ct])
            if ct is last:
                break
        return target

    return _complete_through


@pytest.fixture
def repository():
    return InMemoryCycleRepository()


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()
