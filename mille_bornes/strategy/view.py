"""Read-only game surface handed to strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mille_bornes.models.card import Card
from mille_bornes.models.game_state import TurnPhase
from mille_bornes.models.player import PlayerState, Seat

if TYPE_CHECKING:
    from mille_bornes.game.manager import GameManager
    from mille_bornes.game.rules import MoveResult, RuleBook


def target_seat(card: Card, actor: Seat) -> Seat:
    """Hazards and speed limits go to the opponent, everything else to the actor."""
    return actor.opponent if card.is_attack else actor


@dataclass(frozen=True)
class GameView:
    """Snapshot of what one seat may see and ask.

    Player states are deep copies, so a strategy cannot mutate the game
    through them. The only write path is the manager's public methods.
    """

    seat: Seat
    me: PlayerState
    opponent: PlayerState
    deck_count: int
    phase: TurnPhase
    pending_hazard: Card | None
    rule_book: RuleBook

    @classmethod
    def snapshot(cls, manager: GameManager, seat: Seat) -> GameView:
        return cls(
            seat=seat,
            me=manager.players[seat].model_copy(deep=True),
            opponent=manager.players[seat.opponent].model_copy(deep=True),
            deck_count=manager.deck_count,
            phase=manager.current_phase,
            pending_hazard=manager.pending_hazard,
            rule_book=manager.rule_book,
        )

    @property
    def hand(self) -> list[Card]:
        return list(self.me.hand)

    def target_for(self, card: Card) -> PlayerState:
        return self.opponent if card.is_attack else self.me

    def validate(self, card: Card) -> MoveResult:
        """Validate ``card`` against its logical target."""
        return self.rule_book.validate(card, self.me, self.target_for(card))

    def legal_plays(self) -> list[Card]:
        """Cards in hand that could be played right now."""
        return [c for c in self.me.hand if self.validate(c)]
