"""Game manager: deck, turn/phase state machine and Coup Fourré window."""

from __future__ import annotations

import logging
import random
from typing import Callable

from mille_bornes.config import Config
from mille_bornes.errors import ProtocolViolation
from mille_bornes.logging import EventLog, GameLogger, LogEntry
from mille_bornes.models.card import Card, CardType, shuffled_deck
from mille_bornes.models.game_state import IDLE, AwaitingCoupFourre, GameState, TurnPhase
from mille_bornes.models.player import PlayerState, Seat
from mille_bornes.scheduling import ManualScheduler, RoundToken, Scheduler
from mille_bornes.strategy.base import Strategy
from mille_bornes.strategy.controller import AIController
from mille_bornes.strategy.simple import BasicStrategy
from mille_bornes.strategy.view import GameView, target_seat

from .rules import MoveResult, RuleBook
from .scoring import ScoreBreakdown, score_breakdown

logger = logging.getLogger(__name__)

Observer = Callable[[], None]
SeatRef = Seat | PlayerState


class GameManager:
    """Owns all mutable state of one match between a human and the AI.

    Every public mutating method either applies completely or leaves the
    state untouched. Calls in the wrong phase are protocol violations: they
    are logged and ignored, or raise ``ProtocolViolation`` when
    ``rules.strict_protocol`` is set.
    """

    def __init__(
        self,
        config: Config | None = None,
        strategy: Strategy | None = None,
        scheduler: Scheduler | None = None,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize game manager.

        Args:
            config: Configuration (uses defaults if not provided)
            strategy: Decision strategy of the automated opponent
            scheduler: Runs the automated opponent's think steps
            game_logger: GameLogger instance for JSONL replay logging
            rng: Random source for shuffling and the first starter
        """
        self.config = config or Config()
        self.rules = self.config.rules
        self.rule_book = RuleBook(self.rules)
        self.game_logger = game_logger
        self.scheduler = scheduler or ManualScheduler()
        self._rng = rng or random.Random(self.config.game.seed)

        self.state = GameState()
        self.deck: list[Card] = []
        self.discard_pile: list[Card] = []
        self.players: dict[Seat, PlayerState] = {
            Seat.PLAYER: PlayerState(name="Player 1"),
            Seat.AI: PlayerState(name="AI Opponent"),
        }
        self.event_log = EventLog(self.config.game.log_capacity)

        self.ai_controller = AIController(
            self, Seat.AI, strategy or BasicStrategy(self.config.ai), self.config.ai
        )

        self._observers: list[Observer] = []
        self._notifying = False
        self._token = RoundToken(0)
        self._token.cancel()

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def player(self) -> PlayerState:
        return self.players[Seat.PLAYER]

    @property
    def ai(self) -> PlayerState:
        return self.players[Seat.AI]

    @property
    def deck_count(self) -> int:
        return len(self.deck)

    @property
    def current_turn(self) -> Seat:
        return self.state.current_turn

    @property
    def current_phase(self) -> TurnPhase:
        return self.state.current_phase

    @property
    def pending_hazard(self) -> Card | None:
        interrupt = self.state.interrupt
        return interrupt.hazard if isinstance(interrupt, AwaitingCoupFourre) else None

    @property
    def game_ended(self) -> bool:
        return self.state.game_ended

    @property
    def match_ended(self) -> bool:
        return self.state.match_ended

    @property
    def round_token(self) -> RoundToken:
        return self._token

    @property
    def logs(self) -> list[LogEntry]:
        return self.event_log.entries()

    def seat_of(self, ref: SeatRef) -> Seat:
        """Resolve a seat or a player state to its seat."""
        if isinstance(ref, Seat):
            return ref
        for seat, state in self.players.items():
            if state is ref:
                return seat
        raise ValueError(f"{ref!r} does not belong to this game")

    def opponent_of(self, ref: SeatRef) -> PlayerState:
        return self.players[self.seat_of(ref).opponent]

    def view(self, seat: Seat) -> GameView:
        """Build a read-only snapshot for a strategy playing ``seat``."""
        return GameView.snapshot(self, seat)

    def validate(self, card: Card, actor: SeatRef, target: SeatRef | None = None) -> MoveResult:
        """Ask the rule book whether a move is legal (no side effects)."""
        actor_seat = self.seat_of(actor)
        target_seat_ = self.seat_of(target) if target is not None else target_seat(card, actor_seat)
        return self.rule_book.validate(card, self.players[actor_seat], self.players[target_seat_])

    # ------------------------------------------------------------------
    # Observers and history
    # ------------------------------------------------------------------

    def add_observer(self, observer: Observer) -> None:
        """Subscribe to state-changed notifications (no payload)."""
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        self._notifying = True
        try:
            for observer in list(self._observers):
                observer()
        finally:
            self._notifying = False

    def add_log(self, message: str, owner: Seat) -> None:
        """Append a human-readable entry to the bounded history."""
        self.event_log.add(message, owner)
        logger.debug(f"[{owner.value}] {message}")
        self._notify()

    def _log(self, message: str, owner: Seat) -> None:
        self.event_log.add(message, owner)
        logger.info(f"[{owner.value}] {message}")

    # ------------------------------------------------------------------
    # Protocol checks
    # ------------------------------------------------------------------

    def _violation(self, message: str) -> bool:
        if self.rules.strict_protocol:
            raise ProtocolViolation(message)
        logger.warning(f"Ignored call: {message}")
        return False

    def _check_reentry(self, action: str) -> str | None:
        if self._notifying:
            return f"{action} called from inside an observer callback"
        return None

    def _check_open(self, action: str) -> str | None:
        """Common preconditions of every in-round mutation."""
        problem = self._check_reentry(action)
        if problem:
            return problem
        if not self.state.round_started:
            return f"{action} before the round started"
        if self.state.game_ended:
            return f"{action} after the round ended"
        return None

    def _check_turn(self, action: str, seat: Seat, phase: TurnPhase) -> str | None:
        problem = self._check_open(action)
        if problem:
            return problem
        if self.state.awaiting_coup_fourre:
            return f"{action} while a Coup Fourré is pending"
        if self.state.current_turn != seat:
            return f"{action} by {seat.value} out of turn"
        if self.state.current_phase != phase:
            return f"{action} in {self.state.current_phase.value} phase"
        return None

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def start_new_round(self) -> None:
        """Rebuild the deck, reset both players and deal a new round."""
        problem = self._check_reentry("start_new_round")
        if problem:
            self._violation(problem)
            return

        self._token.cancel()
        self.event_log.clear()

        self.deck = shuffled_deck(self._rng)
        self.discard_pile = []
        for state in self.players.values():
            state.reset()

        last = self.state.last_round_starter
        if last is None:
            starter = self._rng.choice([Seat.PLAYER, Seat.AI])
            who = "You were" if starter == Seat.PLAYER else "AI was"
            self._log(f"Match Start! {who} randomly selected to start.", Seat.PLAYER)
        else:
            starter = last.opponent
            whose = "your" if starter == Seat.PLAYER else "AI's"
            self._log(f"New Round! It is {whose} turn to start.", starter)

        self.state.reset_for_new_round(starter)
        self._token = RoundToken(self.state.round_number)

        for _ in range(self.rules.hand_size):
            self._deal_one(Seat.PLAYER)
            self._deal_one(Seat.AI)

        logger.info(
            f"Round {self.state.round_number} dealt, {len(self.deck)} cards left, "
            f"starter: {starter.value}"
        )
        if self.game_logger:
            if self.state.round_number == 1:
                self.game_logger.log_match_start(self.players)
            self.game_logger.log_round_start(
                self.state.round_number, self.players, starter, len(self.deck)
            )

        self._notify()
        self._schedule_ai()

    def _deal_one(self, seat: Seat) -> Card | None:
        if not self.deck:
            return None
        card = self.deck.pop(0)
        self.players[seat].add_to_hand(card)
        return card

    def end_match(self) -> None:
        """Mark the match as finished."""
        problem = self._check_reentry("end_match")
        if problem:
            self._violation(problem)
            return

        self.state.match_ended = True
        self._token.cancel()
        if self.game_logger:
            self.game_logger.log_match_end(
                self.state.round_number,
                {seat: p.total_score for seat, p in self.players.items()},
            )
        self._notify()

    def reset_match(self) -> None:
        """Forget cumulative scores and the round starter."""
        problem = self._check_reentry("reset_match")
        if problem:
            self._violation(problem)
            return

        self._token.cancel()
        self.state.reset_for_new_match()
        for state in self.players.values():
            state.total_score = 0
        self._notify()

    # ------------------------------------------------------------------
    # Turn operations
    # ------------------------------------------------------------------

    def draw(self, player: SeatRef) -> bool:
        """Draw the top card of the deck for ``player`` (Draw phase only).

        With an empty deck the phase simply advances to Play.
        """
        seat = self.seat_of(player)
        problem = self._check_turn("draw", seat, TurnPhase.DRAW)
        if problem:
            return self._violation(problem)

        card = self._deal_one(seat)
        self.state.current_phase = TurnPhase.PLAY
        if card is None:
            self._check_for_end()
        else:
            logger.debug(f"{seat.value} drew {card}")

        if self.game_logger:
            self.game_logger.log_draw(
                self.state.round_number, self.state.turn_number, seat, card
            )

        self._notify()
        return True

    def submit_move(
        self,
        card: Card,
        actor: SeatRef,
        target: SeatRef | None = None,
    ) -> MoveResult:
        """Validate and, if legal, execute a move.

        Args:
            card: Card from the actor's hand
            actor: Seat (or player state) playing the card
            target: Defaults to the opponent for hazards and speed limits,
                the actor for everything else

        Returns:
            MoveResult; an illegal move leaves all state untouched
        """
        actor_seat = self.seat_of(actor)
        target_seat_ = self.seat_of(target) if target is not None else target_seat(card, actor_seat)

        problem = self._check_turn("submit_move", actor_seat, TurnPhase.PLAY)
        if problem is None and not self.players[actor_seat].holds(card):
            problem = f"{card} is not in {actor_seat.value}'s hand"
        if problem:
            self._violation(problem)
            return MoveResult.illegal(problem)

        result = self.rule_book.validate(
            card, self.players[actor_seat], self.players[target_seat_]
        )
        if not result:
            logger.debug(f"Rejected {card} by {actor_seat.value}: {result.reason}")
            return result

        self.execute(card, actor_seat, target_seat_)
        return result

    def execute(self, card: Card, actor: SeatRef, target: SeatRef) -> None:
        """Apply an already validated move.

        Hazards and speed limits aimed at a player who holds the matching
        safety open the Coup Fourré window instead of being applied.
        """
        actor_seat = self.seat_of(actor)
        target_seat_ = self.seat_of(target)
        actor_state = self.players[actor_seat]
        target_state = self.players[target_seat_]

        card = actor_state.remove_from_hand(card)
        self._log(f"{actor_state.name} played {card.name}.", actor_seat)

        if card.is_attack and target_state.find_protecting_safety(card.name):
            self._open_coup_fourre(card, target_seat_)
            return

        self._resolve_move(card, actor_seat, target_seat_)

    def discard(self, card: Card, actor: SeatRef) -> bool:
        """Discard a card from hand instead of playing (Play phase only)."""
        seat = self.seat_of(actor)
        problem = self._check_turn("discard", seat, TurnPhase.PLAY)
        if problem is None and not self.players[seat].holds(card):
            problem = f"{card} is not in {seat.value}'s hand"
        if problem:
            return self._violation(problem)

        card = self.players[seat].remove_from_hand(card)
        self.discard_pile.append(card)
        self._log(f"{self.players[seat].name} discarded a card.", seat)
        if self.game_logger:
            self.game_logger.log_discard(
                self.state.round_number, self.state.turn_number, seat, card
            )

        self._end_turn()
        return True

    # ------------------------------------------------------------------
    # Coup Fourré
    # ------------------------------------------------------------------

    def _open_coup_fourre(self, hazard: Card, target: Seat) -> None:
        self.state.interrupt = AwaitingCoupFourre(hazard=hazard, target=target)
        logger.info(f"Coup Fourré window open: {hazard} against {target.value}")
        self._notify()

        if target == self.ai_controller.seat:
            self.scheduler.schedule(
                self.ai_controller.respond_to_hazard,
                self._token,
                self.config.ai.think_delay,
            )

    def resolve_coup_fourre(self, defender: SeatRef) -> bool:
        """Play the matching safety out of turn and seize the turn."""
        seat = self.seat_of(defender)
        interrupt = self.state.interrupt
        problem = self._check_open("resolve_coup_fourre")
        if problem is None and not isinstance(interrupt, AwaitingCoupFourre):
            problem = "resolve_coup_fourre with no pending hazard"
        if problem is None and interrupt.target != seat:
            problem = f"resolve_coup_fourre by {seat.value}, who is not the target"
        if problem:
            return self._violation(problem)

        state = self.players[seat]
        hazard = interrupt.hazard
        safety = state.find_protecting_safety(hazard.name)
        if safety is None:
            return self._violation(f"{seat.value} holds no safety against {hazard}")

        state.remove_from_hand(safety)
        state.safety_area.append(safety)
        state.coup_fourre_count += 1
        self.discard_pile.append(hazard)
        self.state.interrupt = IDLE

        # Bonus draw, then the defender takes over the turn
        self._deal_one(seat)
        self.state.current_turn = seat
        self.state.current_phase = TurnPhase.DRAW if self.deck else TurnPhase.PLAY
        self.state.turn_number += 1

        self._log(f"COUP FOURRÉ! {state.name} played a safety out of turn!", seat)
        if self.game_logger:
            self.game_logger.log_coup_fourre(
                self.state.round_number, self.state.turn_number, seat, hazard, safety
            )

        self._settle_turn()
        self._notify()
        self._schedule_ai()
        return True

    def decline_coup_fourre(self, defender: SeatRef) -> bool:
        """Let the pending hazard land on the defender."""
        seat = self.seat_of(defender)
        interrupt = self.state.interrupt
        problem = self._check_open("decline_coup_fourre")
        if problem is None and not isinstance(interrupt, AwaitingCoupFourre):
            problem = "decline_coup_fourre with no pending hazard"
        if problem is None and interrupt.target != seat:
            problem = f"decline_coup_fourre by {seat.value}, who is not the target"
        if problem:
            return self._violation(problem)

        self.state.interrupt = IDLE
        logger.info(f"{seat.value} declined the Coup Fourré")
        self._resolve_move(interrupt.hazard, interrupt.attacker, seat)
        return True

    # ------------------------------------------------------------------
    # Move resolution
    # ------------------------------------------------------------------

    def _resolve_move(self, card: Card, actor: Seat, target: Seat) -> None:
        actor_state = self.players[actor]
        target_state = self.players[target]

        if card.type == CardType.DISTANCE:
            actor_state.distance_cards.append(card)
        elif card.type == CardType.HAZARD:
            target_state.battle_pile.push(card)
        elif card.type == CardType.REMEDY:
            actor_state.battle_pile.push(card)
        elif card.type == CardType.SPEED_LIMIT:
            target_state.speed_pile.push(card)
        elif card.type == CardType.END_LIMIT:
            actor_state.speed_pile.push(card)
        elif card.type == CardType.SAFETY:
            actor_state.safety_area.append(card)
            self._discard_covered(actor_state, card)

        if self.game_logger:
            self.game_logger.log_move(
                self.state.round_number,
                self.state.turn_number,
                actor,
                target,
                card,
                self.players,
            )

        if card.type == CardType.SAFETY:
            self._extra_turn(actor)
        else:
            self._end_turn()

    def _discard_covered(self, state: PlayerState, safety: Card) -> None:
        """Discard a top hazard or speed limit the new safety protects against."""
        for pile in (state.battle_pile, state.speed_pile):
            top = pile.top()
            if top is not None and safety.protects_against(top.name):
                self.discard_pile.append(pile.pop())
                logger.debug(f"{safety} cleared {top}")

    def _extra_turn(self, seat: Seat) -> None:
        """A safety keeps the turn: draw again, or play on if the deck is out."""
        self.state.current_turn = seat
        self.state.current_phase = TurnPhase.DRAW if self.deck else TurnPhase.PLAY
        self._settle_turn()
        self._notify()
        self._schedule_ai()

    def _end_turn(self) -> None:
        self.state.current_turn = self.state.current_turn.opponent
        self.state.current_phase = TurnPhase.DRAW if self.deck else TurnPhase.PLAY
        self.state.turn_number += 1
        self._settle_turn()
        self._notify()
        self._schedule_ai()

    def _settle_turn(self) -> None:
        """Skip a player who cannot act, then check for the end of the round.

        Once the deck is out a player with an empty hand can neither play
        nor discard, so the turn goes back to the opponent.
        """
        current = self.state.current_turn
        if (
            not self.deck
            and not self.players[current].hand
            and self.players[current.opponent].hand
        ):
            logger.debug(f"{current.value} has no cards left, turn passes")
            self.state.current_turn = current.opponent
            self.state.current_phase = TurnPhase.PLAY
        self._check_for_end()

    def _check_for_end(self) -> None:
        target = self.rules.target_distance
        out_of_cards = not self.deck and not self.player.hand and not self.ai.hand
        finished = any(p.total_distance == target for p in self.players.values())

        if (out_of_cards or finished) and not self.state.game_ended:
            self.state.game_ended = True
            self._token.cancel()
            reason = "trip completed" if finished else "out of cards"
            logger.info(f"Round {self.state.round_number} over ({reason})")
            self._log(f"Round over: {reason}.", self.state.current_turn)

    def _schedule_ai(self) -> None:
        if (
            self.state.round_started
            and not self.state.game_ended
            and not self.state.awaiting_coup_fourre
            and self.state.current_turn == self.ai_controller.seat
        ):
            self.scheduler.schedule(
                self.ai_controller.take_turn,
                self._token,
                self.config.ai.think_delay,
            )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_breakdown(self, player: SeatRef) -> ScoreBreakdown:
        """Itemised round score for ``player`` from the current state."""
        seat = self.seat_of(player)
        return score_breakdown(
            self.players[seat],
            self.players[seat.opponent],
            deck_empty=not self.deck,
            scoring=self.config.scoring,
            rules=self.rules,
        )

    def compute_score(self, player: SeatRef) -> int:
        """Round score for ``player``."""
        return self.score_breakdown(player).total

    def tally_round(self) -> dict[Seat, int]:
        """Add this round's scores to the cumulative totals, once per round.

        Returns:
            Round score per seat.
        """
        scores = {seat: self.score_breakdown(seat) for seat in Seat}
        problem = self._check_reentry("tally_round")
        if problem is None and (not self.state.game_ended or self.state.round_tallied):
            problem = "tally_round before the round ended or twice"
        if problem:
            self._violation(problem)
            return {seat: s.total for seat, s in scores.items()}

        for seat, breakdown in scores.items():
            self.players[seat].total_score += breakdown.total
        self.state.round_tallied = True

        if self.game_logger:
            self.game_logger.log_round_end(
                self.state.round_number,
                self.players,
                {seat: {**s.model_dump(), "total": s.total} for seat, s in scores.items()},
            )
        self._notify()
        return {seat: s.total for seat, s in scores.items()}

    def match_winner(self) -> Seat | None:
        """Seat whose cumulative score reached the match target, if any.

        When both reached it the higher total wins; a tie has no winner.
        """
        goal = self.config.scoring.match_target
        player, ai = self.player.total_score, self.ai.total_score
        if max(player, ai) < goal or player == ai:
            return None
        return Seat.PLAYER if player > ai else Seat.AI
