"""Move validation (the rule book)."""

from dataclasses import dataclass

from mille_bornes.config import RulesConfig
from mille_bornes.models.card import ROLL, SPEED_LIMIT, STOP, Card, CardType
from mille_bornes.models.player import PlayerState


@dataclass(frozen=True)
class MoveResult:
    """Result of move validation."""

    legal: bool
    reason: str = ""

    @classmethod
    def ok(cls) -> "MoveResult":
        return cls(legal=True)

    @classmethod
    def illegal(cls, reason: str) -> "MoveResult":
        return cls(legal=False, reason=reason)

    def __bool__(self) -> bool:
        return self.legal


class RuleBook:
    """Decides whether a card may be played.

    Validation is pure: it only reads the two player states and never
    mutates them, so repeated calls on unchanged state agree.
    """

    def __init__(self, rules: RulesConfig | None = None):
        """Initialize rule book.

        Args:
            rules: Rules configuration (uses defaults if not provided)
        """
        self.rules = rules or RulesConfig()

    def validate(
        self,
        card: Card,
        actor: PlayerState,
        target: PlayerState,
    ) -> MoveResult:
        """Validate playing ``card`` by ``actor`` onto ``target``.

        Args:
            card: Card being played
            actor: Player playing the card
            target: Opponent for hazards and speed limits, else the actor

        Returns:
            MoveResult
        """
        if card.type == CardType.DISTANCE:
            return self._validate_distance(card, actor)

        if card.type == CardType.HAZARD:
            return self._validate_hazard(card, target)

        if card.type == CardType.SPEED_LIMIT:
            return self._validate_speed_limit(target)

        if card.type == CardType.END_LIMIT:
            return self._validate_end_limit(actor)

        if card.type == CardType.REMEDY:
            return self._validate_remedy(card, actor)

        # Safeties can always be played
        return MoveResult.ok()

    def _validate_distance(self, card: Card, actor: PlayerState) -> MoveResult:
        rules = self.rules

        if not actor.can_move:
            return MoveResult.illegal("You must play a 'Roll' card first!")

        if actor.is_speed_limited and card.value > rules.speed_limit_max:
            return MoveResult.illegal(
                f"Speed Limit: Cannot play over {rules.speed_limit_max}km."
            )

        if actor.total_distance + card.value > rules.target_distance:
            return MoveResult.illegal(
                f"Cannot exceed {rules.target_distance}km exactly."
            )

        if (
            card.value == rules.long_distance_value
            and actor.count_distance(rules.long_distance_value)
            >= rules.max_long_distance_cards
        ):
            return MoveResult.illegal(
                f"Limit: Only {rules.max_long_distance_cards} "
                f"{rules.long_distance_value}km cards allowed per round."
            )

        return MoveResult.ok()

    def _validate_hazard(self, card: Card, target: PlayerState) -> MoveResult:
        if target.is_protected_against(card.name):
            return MoveResult.illegal("Opponent is immune!")

        if not target.can_move:
            return MoveResult.illegal(
                "Opponent is already stopped or hasn't started rolling."
            )

        return MoveResult.ok()

    def _validate_speed_limit(self, target: PlayerState) -> MoveResult:
        if target.has_right_of_way:
            return MoveResult.illegal("Opponent has Right of Way.")
        if target.is_speed_limited:
            return MoveResult.illegal("Already speed limited.")
        return MoveResult.ok()

    def _validate_end_limit(self, actor: PlayerState) -> MoveResult:
        top = actor.speed_pile.top()
        if top is not None and top.name == SPEED_LIMIT:
            return MoveResult.ok()
        return MoveResult.illegal("Not limited.")

    def _validate_remedy(self, card: Card, actor: PlayerState) -> MoveResult:
        top = actor.battle_pile.top()

        if card.name == ROLL:
            if actor.can_move:
                return MoveResult.illegal("Already moving.")
            if top is None or top.name == STOP or top.type == CardType.REMEDY:
                return MoveResult.ok()
            return MoveResult.illegal("Invalid Roll.")

        if top is None:
            return MoveResult.illegal("Nothing to fix.")

        if top.type == CardType.HAZARD and card.fixes(top.name):
            return MoveResult.ok()
        return MoveResult.illegal("Doesn't fix top hazard.")


_default_rule_book = RuleBook()


def validate_move(card: Card, actor: PlayerState, target: PlayerState) -> MoveResult:
    """Validate a move with the default rules."""
    return _default_rule_book.validate(card, actor, target)
