"""Pugh matrix analysis over a consequences table.

Pure domain functions -- no side effects, safe to call from any thread.
Missing cells count as rating 0 in scoring and dominance.
"""

from dataclasses import dataclass

from proact.analysis.consequences_table import ConsequencesTable


@dataclass(frozen=True)
class DominatedAlternative:
    alternative_id: str
    dominated_by_id: str
    explanation: str = ""


@dataclass(frozen=True)
class IrrelevantObjective:
    objective_id: str
    uniform_rating: int
    reason: str = "All alternatives have the same rating"


@dataclass(frozen=True)
class RankedAlternative:
    alternative_id: str
    score: int
    rank: int


def compute_scores(table: ConsequencesTable) -> dict[str, int]:
    """Sum each alternative's ratings across all objectives.

    Returns:
        {alternative_id: total}, in table order
    """
    return {
        alt_id: sum(table.rating(alt_id, obj_id) for obj_id in table.objective_ids)
        for alt_id in table.alternative_ids
    }


def dominates(table: ConsequencesTable, a: str, b: str) -> bool:
    """True if ``a`` is at least as good as ``b`` everywhere and strictly better once.

    Pointwise comparison of full rating vectors, so the relation is
    irreflexive, antisymmetric and transitive.
    """
    strictly_better_on_one = False
    for obj_id in table.objective_ids:
        a_rating = table.rating(a, obj_id)
        b_rating = table.rating(b, obj_id)
        if a_rating < b_rating:
            return False
        if a_rating > b_rating:
            strictly_better_on_one = True
    return strictly_better_on_one


def explain_dominance(table: ConsequencesTable, a: str, b: str) -> str:
    better_on = [
        obj_id for obj_id in table.objective_ids if table.rating(a, obj_id) > table.rating(b, obj_id)
    ]
    return f"{a} is at least as good on all objectives and strictly better on: {', '.join(better_on)}"


def find_dominated(table: ConsequencesTable) -> list[DominatedAlternative]:
    """Find every alternative that some other alternative dominates.

    Each dominated alternative is reported once, against the first dominator
    in table order.
    """
    dominated: list[DominatedAlternative] = []
    if table.alternative_count < 2:
        return dominated

    for candidate in table.alternative_ids:
        for dominator in table.alternative_ids:
            if dominator == candidate:
                continue
            if dominates(table, dominator, candidate):
                dominated.append(
                    DominatedAlternative(
                        alternative_id=candidate,
                        dominated_by_id=dominator,
                        explanation=explain_dominance(table, dominator, candidate),
                    )
                )
                break

    return dominated


def find_irrelevant_objectives(table: ConsequencesTable) -> list[IrrelevantObjective]:
    """Objectives on which every rated alternative scores the same.

    Only cells that are present are compared. An objective with fewer than
    two rated alternatives cannot be judged and is skipped.
    """
    irrelevant: list[IrrelevantObjective] = []
    for obj_id in table.objective_ids:
        ratings = [
            int(rating)
            for alt_id in table.alternative_ids
            if (rating := table.get_cell(alt_id, obj_id)) is not None
        ]
        if len(ratings) < 2:
            continue
        if all(r == ratings[0] for r in ratings):
            irrelevant.append(IrrelevantObjective(objective_id=obj_id, uniform_rating=ratings[0]))
    return irrelevant


def rank_alternatives(table: ConsequencesTable) -> list[RankedAlternative]:
    """Order alternatives by total score, highest first.

    Equal scores share a rank (1, 1, 3) and keep table order.
    """
    scores = compute_scores(table)
    ordered = sorted(scores.items(), key=lambda item: item[1], reverse=True)

    ranked: list[RankedAlternative] = []
    for position, (alt_id, score) in enumerate(ordered, start=1):
        if ranked and ranked[-1].score == score:
            rank = ranked[-1].rank
        else:
            rank = position
        ranked.append(RankedAlternative(alternative_id=alt_id, score=score, rank=rank))
    return ranked


def find_top_alternative(table: ConsequencesTable) -> str | None:
    """The single highest-scoring alternative, or None when there is no clear winner."""
    ranked = rank_alternatives(table)
    if not ranked:
        return None
    if len(ranked) > 1 and ranked[1].score == ranked[0].score:
        return None
    return ranked[0].alternative_id
