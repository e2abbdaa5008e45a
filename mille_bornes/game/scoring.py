"""Round scoring."""

from pydantic import BaseModel

from mille_bornes.config import RulesConfig, ScoringConfig
from mille_bornes.models.card import SAFETY_NAMES
from mille_bornes.models.player import PlayerState


class ScoreBreakdown(BaseModel):
    """Itemised round score for one player."""

    distance: int = 0
    safeties: int = 0
    coup_fourres: int = 0
    all_safeties: int = 0
    trip_complete: int = 0
    delayed_action: int = 0
    safe_trip: int = 0
    shutout: int = 0

    @property
    def total(self) -> int:
        return (
            self.distance
            + self.safeties
            + self.coup_fourres
            + self.all_safeties
            + self.trip_complete
            + self.delayed_action
            + self.safe_trip
            + self.shutout
        )


def score_breakdown(
    player: PlayerState,
    opponent: PlayerState,
    deck_empty: bool,
    scoring: ScoringConfig | None = None,
    rules: RulesConfig | None = None,
) -> ScoreBreakdown:
    """Compute the round score of ``player`` from final state.

    All bonuses are independent; the trip bonuses only apply when the
    player landed exactly on the target distance.

    Args:
        player: Player being scored.
        opponent: The other player (for the shutout bonus).
        deck_empty: Whether the draw deck ran out (delayed action bonus).
        scoring: Point values (defaults if not provided).
        rules: Rules configuration (defaults if not provided).

    Returns:
        ScoreBreakdown
    """
    scoring = scoring or ScoringConfig()
    rules = rules or RulesConfig()

    result = ScoreBreakdown(
        distance=player.total_distance,
        safeties=scoring.safety * len(player.safety_area),
        coup_fourres=scoring.coup_fourre * player.coup_fourre_count,
    )

    if len(player.safety_area) == len(SAFETY_NAMES):
        result.all_safeties = scoring.all_safeties

    if player.total_distance == rules.target_distance:
        result.trip_complete = scoring.trip_complete
        if deck_empty:
            result.delayed_action = scoring.delayed_action
        if player.count_distance(rules.long_distance_value) == 0:
            result.safe_trip = scoring.safe_trip
        if opponent.total_distance == 0:
            result.shutout = scoring.shutout

    return result
