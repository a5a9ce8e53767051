"""Tradeoff analysis between the alternatives that survive dominance."""

from dataclasses import dataclass, field

from proact.analysis.consequences_table import ConsequencesTable
from proact.analysis.pugh import DominatedAlternative


@dataclass
class Tension:
    """What an alternative gains and gives up relative to its viable peers."""

    alternative_id: str
    gains: list[str] = field(default_factory=list)
    losses: list[str] = field(default_factory=list)
    uncertainty_impact: str | None = None

    def is_clear_winner(self) -> bool:
        return bool(self.gains) and not self.losses

    def has_tradeoffs(self) -> bool:
        return bool(self.gains) and bool(self.losses)


@dataclass(frozen=True)
class TradeoffSummary:
    total_alternatives: int
    has_clear_winner: bool
    most_balanced: str | None
    most_polarizing: str | None


def analyze_tensions(
    table: ConsequencesTable,
    dominated: list[DominatedAlternative],
) -> list[Tension]:
    """Compare each non-dominated alternative against every other one.

    An objective is a gain if the alternative beats at least one peer on it
    and a loss if at least one peer beats it. Dominated alternatives are
    neither analyzed nor used as peers.

    Returns:
        One Tension per viable alternative, in table order. Gains and losses
        are deduplicated and listed in objective order.
    """
    dominated_ids = {d.alternative_id for d in dominated}
    viable = [alt_id for alt_id in table.alternative_ids if alt_id not in dominated_ids]

    tensions: list[Tension] = []
    for alt_id in viable:
        gains: list[str] = []
        losses: list[str] = []
        for obj_id in table.objective_ids:
            mine = table.rating(alt_id, obj_id)
            peers = [table.rating(other, obj_id) for other in viable if other != alt_id]
            if any(mine > theirs for theirs in peers):
                gains.append(obj_id)
            if any(mine < theirs for theirs in peers):
                losses.append(obj_id)
        tensions.append(Tension(alternative_id=alt_id, gains=gains, losses=losses))

    return tensions


def tradeoff_intensity(tension: Tension) -> int:
    return len(tension.gains) + len(tension.losses)


def find_clear_winners(tensions: list[Tension]) -> list[Tension]:
    return [t for t in tensions if t.is_clear_winner()]


def summarize_tradeoffs(tensions: list[Tension]) -> TradeoffSummary:
    """Headline view: any clear winner, the most balanced and the most polarizing option.

    Ties for most balanced or most polarizing go to the first tension in
    table order.
    """
    if not tensions:
        return TradeoffSummary(
            total_alternatives=0,
            has_clear_winner=False,
            most_balanced=None,
            most_polarizing=None,
        )

    most_balanced = min(tensions, key=lambda t: abs(len(t.gains) - len(t.losses)))
    most_polarizing = max(tensions, key=tradeoff_intensity)

    return TradeoffSummary(
        total_alternatives=len(tensions),
        has_clear_winner=any(t.is_clear_winner() for t in tensions),
        most_balanced=most_balanced.alternative_id,
        most_polarizing=most_polarizing.alternative_id,
    )
