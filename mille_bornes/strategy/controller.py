"""Drives one seat with a strategy through the manager's public API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mille_bornes.config import AIConfig
from mille_bornes.errors import ProtocolViolation, StrategyFault
from mille_bornes.models.game_state import AwaitingCoupFourre, TurnPhase
from mille_bornes.models.player import Seat
from mille_bornes.scheduling import RoundToken

from .base import Decision, Strategy
from .simple import card_weight

if TYPE_CHECKING:
    from mille_bornes.game.manager import GameManager

logger = logging.getLogger(__name__)


class AIController:
    """Runs the automated opponent's think steps.

    Every step re-checks the round token and the turn state before it
    touches the game, so a step scheduled for a round that has since ended
    does nothing.
    """

    def __init__(
        self,
        manager: GameManager,
        seat: Seat,
        strategy: Strategy,
        config: AIConfig | None = None,
    ):
        """Initialize controller.

        Args:
            manager: Game being played
            seat: Seat this controller plays
            strategy: Decision strategy
            config: AI configuration
        """
        self.manager = manager
        self.seat = seat
        self.strategy = strategy
        self.config = config or AIConfig()

    def _may_act(self, token: RoundToken | None) -> bool:
        state = self.manager.state
        if token is not None and token.cancelled:
            return False
        return (
            state.round_started
            and not state.game_ended
            and not state.awaiting_coup_fourre
            and state.current_turn == self.seat
        )

    def take_turn(self, token: RoundToken | None = None) -> bool:
        """Draw if needed, then play or discard one card.

        Args:
            token: Round token the step was scheduled with

        Returns:
            True if the seat played or discarded a card
        """
        manager = self.manager
        if not self._may_act(token):
            logger.debug(f"{self.seat.value} think step skipped")
            return False

        if manager.current_phase == TurnPhase.DRAW:
            manager.draw(self.seat)
            if not self._may_act(token):
                return False

        if manager.current_phase != TurnPhase.PLAY:
            return False

        try:
            decision = self._decide()
        except StrategyFault as e:
            logger.error(f"{self.seat.value} strategy failed: {e}", exc_info=e.__cause__)
            manager.add_log(f"AI Error: {e}", self.seat)
            return self._forced_discard()

        problem = self._apply(decision)
        if problem is None:
            return True

        logger.error(f"{self.seat.value} strategy chose {decision.card}: {problem}")
        manager.add_log(f"AI Error: {problem}", self.seat)
        return self._forced_discard()

    def _apply(self, decision: Decision) -> str | None:
        """Carry out a decision.

        Returns:
            None on success, otherwise the reason it was refused
        """
        manager = self.manager
        try:
            if decision.discard:
                if manager.discard(decision.card, self.seat):
                    return None
                return f"cannot discard {decision.card}"

            result = manager.submit_move(decision.card, self.seat, decision.target)
        except ProtocolViolation as e:
            return str(e)
        return None if result else result.reason

    def _decide(self) -> Decision:
        view = self.manager.view(self.seat)
        try:
            return self.strategy.decide(view)
        except Exception as e:
            raise StrategyFault(str(e) or type(e).__name__) from e

    def _forced_discard(self) -> bool:
        """End the turn by discarding the lowest-weighted card, if any."""
        if not self._may_act(None) or self.manager.current_phase != TurnPhase.PLAY:
            return False
        hand = self.manager.players[self.seat].hand
        if not hand:
            return False
        return self.manager.discard(min(hand, key=card_weight), self.seat)

    def respond_to_hazard(self, token: RoundToken | None = None) -> bool:
        """Answer a pending hazard aimed at this seat.

        Returns:
            True if a Coup Fourré was played
        """
        manager = self.manager
        interrupt = manager.state.interrupt
        if token is not None and token.cancelled:
            return False
        if not isinstance(interrupt, AwaitingCoupFourre) or interrupt.target != self.seat:
            return False

        try:
            wants = self.strategy.wants_coup_fourre(
                manager.view(self.seat), interrupt.hazard
            )
        except Exception as e:
            logger.exception(f"{self.seat.value} strategy failed on Coup Fourré")
            manager.add_log(f"AI Error: {e}", self.seat)
            wants = False

        if wants:
            return manager.resolve_coup_fourre(self.seat)
        manager.decline_coup_fourre(self.seat)
        return False
