"""Turn and round state models."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import Card
from .player import Seat


class TurnPhase(str, Enum):
    """Phase within a turn."""

    DRAW = "draw"
    PLAY = "play"


class Idle(BaseModel, frozen=True):
    """No Coup Fourré window is open."""

    @property
    def is_pending(self) -> bool:
        return False


class AwaitingCoupFourre(BaseModel, frozen=True):
    """A hazard was played on a target who holds the matching safety.

    The hazard has left the attacker's hand but is not applied yet.
    """

    hazard: Card
    target: Seat

    @property
    def attacker(self) -> Seat:
        return self.target.opponent

    @property
    def is_pending(self) -> bool:
        return True


Interrupt = Idle | AwaitingCoupFourre

IDLE = Idle()


class GameState(BaseModel):
    """Turn/phase state machine fields for one match."""

    round_number: int = 0
    turn_number: int = 0

    current_turn: Seat = Seat.PLAYER
    current_phase: TurnPhase = TurnPhase.DRAW
    interrupt: Interrupt = Field(default=IDLE)

    last_round_starter: Seat | None = None

    round_started: bool = False
    game_ended: bool = False  # Round over
    match_ended: bool = False
    round_tallied: bool = False

    @property
    def awaiting_coup_fourre(self) -> bool:
        return self.interrupt.is_pending

    def reset_for_new_round(self, starter: Seat) -> None:
        """Reset turn state when a new round is dealt."""
        self.round_number += 1
        self.turn_number = 0
        self.current_turn = starter
        self.current_phase = TurnPhase.DRAW
        self.interrupt = IDLE
        self.last_round_starter = starter
        self.round_started = True
        self.game_ended = False
        self.match_ended = False
        self.round_tallied = False

    def reset_for_new_match(self) -> None:
        """Forget the round starter so the next match starts at random."""
        self.round_number = 0
        self.last_round_starter = None
        self.match_ended = False

    def __str__(self) -> str:
        parts = [f"Round {self.round_number}, Turn {self.turn_number}"]
        parts.append(f"{self.current_turn.value} to {self.current_phase.value}")
        if isinstance(self.interrupt, AwaitingCoupFourre):
            parts.append(f"[COUP FOURRE? {self.interrupt.hazard}]")
        if self.game_ended:
            parts.append("[ROUND OVER]")
        return " ".join(parts)
