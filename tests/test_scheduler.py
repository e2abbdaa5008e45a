"""Tests for think-step scheduling."""

import asyncio

from mille_bornes.game.manager import GameManager
from mille_bornes.models.card import ROLL, distance, remedy
from mille_bornes.models.game_state import IDLE, TurnPhase
from mille_bornes.models.player import Seat
from mille_bornes.scheduling import AsyncioScheduler, ManualScheduler, RoundToken


class TestRoundToken:
    """Tests for RoundToken."""

    def test_cancel(self):
        """Test cancelling a token."""
        token = RoundToken(3)
        assert not token.cancelled
        token.cancel()
        assert token.cancelled
        assert "cancelled" in repr(token)


class TestManualScheduler:
    """Tests for ManualScheduler."""

    def test_runs_in_order(self):
        """Test that steps run first in, first out."""
        scheduler = ManualScheduler()
        ran = []
        token = RoundToken()
        scheduler.schedule(lambda t: ran.append("a"), token)
        scheduler.schedule(lambda t: ran.append("b"), token, delay=5.0)
        assert scheduler.pending == 2
        assert scheduler.run_pending() == 2
        assert ran == ["a", "b"]

    def test_runs_follow_ups(self):
        """Test that steps queued by a running step also run."""
        scheduler = ManualScheduler()
        ran = []
        token = RoundToken()

        def first(t):
            ran.append(1)
            scheduler.schedule(lambda t: ran.append(2), t)

        scheduler.schedule(first, token)
        scheduler.run_pending()
        assert ran == [1, 2]

    def test_skips_cancelled(self):
        """Test that a cancelled step is dropped."""
        scheduler = ManualScheduler()
        ran = []
        token = RoundToken()
        scheduler.schedule(lambda t: ran.append(t), token)
        token.cancel()
        assert scheduler.run_next()
        assert ran == []

    def test_run_next_empty(self):
        """Test run_next on an empty queue."""
        assert not ManualScheduler().run_next()

    def test_clear(self):
        """Test dropping queued steps."""
        scheduler = ManualScheduler()
        scheduler.schedule(lambda t: None, RoundToken())
        scheduler.clear()
        assert scheduler.pending == 0


class TestAsyncioScheduler:
    """Tests for AsyncioScheduler."""

    def test_runs_after_delay(self):
        """Test that a step runs once the delay has passed."""
        async def scenario():
            scheduler = AsyncioScheduler()
            ran = []
            token = RoundToken(1)
            scheduler.schedule(lambda t: ran.append(t), token, delay=0.01)
            assert ran == []
            await scheduler.drain()
            return token, ran

        token, ran = asyncio.run(scenario())
        assert ran == [token]

    def test_cancelled_while_waiting(self):
        """Test that a step whose round ended during the delay does nothing."""

        async def scenario():
            scheduler = AsyncioScheduler()
            ran = []
            token = RoundToken(1)
            scheduler.schedule(lambda t: ran.append(t), token, delay=0.01)
            token.cancel()
            await scheduler.drain()
            return ran

        assert asyncio.run(scenario()) == []

    def test_ai_turn_with_event_loop(self, config):
        """Test a full AI turn driven by asyncio."""

        async def scenario():
            game = GameManager(config, scheduler=AsyncioScheduler())
            game.start_new_round()
            await game.scheduler.drain()
            for player in game.players.values():
                player.reset()
            game.state.interrupt = IDLE
            game.state.game_ended = False
            game.player.hand[:] = [distance(25), distance(50)]
            game.ai.hand[:] = [distance(75)]
            game.deck[:] = [remedy(ROLL), distance(100)]
            game.state.current_turn = Seat.PLAYER
            game.state.current_phase = TurnPhase.PLAY

            game.discard(distance(25), Seat.PLAYER)
            assert game.current_turn == Seat.AI
            await game.scheduler.drain()
            return game

        game = asyncio.run(scenario())
        assert game.ai.battle_pile.top() == remedy(ROLL)
        assert game.current_turn == Seat.PLAYER
