"""Shared fixtures."""

import pytest

from mille_bornes.config import AIConfig, Config, GameConfig
from mille_bornes.game.manager import GameManager
from mille_bornes.models.card import ROLL, remedy
from mille_bornes.models.game_state import TurnPhase
from mille_bornes.models.player import Seat
from mille_bornes.scheduling import ManualScheduler


@pytest.fixture
def config():
    return Config(game=GameConfig(seed=7), ai=AIConfig(think_delay=0.0))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def manager(config, scheduler):
    """Manager with a dealt round and nothing queued."""
    game = GameManager(config, scheduler=scheduler)
    game.start_new_round()
    scheduler.clear()
    return game


@pytest.fixture
def arrange(manager):
    """Overwrite hands, deck and turn to a known position."""

    def _arrange(
        player_hand=(),
        ai_hand=(),
        deck=(),
        turn=Seat.PLAYER,
        phase=TurnPhase.PLAY,
        rolling=(),
    ):
        manager.player.hand[:] = list(player_hand)
        manager.ai.hand[:] = list(ai_hand)
        manager.deck[:] = list(deck)
        manager.state.current_turn = turn
        manager.state.current_phase = phase
        for seat in rolling:
            manager.players[seat].battle_pile.push(remedy(ROLL))
        manager.scheduler.clear()
        return manager

    return _arrange
