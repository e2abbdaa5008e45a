"""Tests for the headless match runner."""

import sys

import pytest

from mille_bornes.config import AIConfig, Config, GameConfig
from mille_bornes.game.manager import GameManager
from mille_bornes.logging import GameLogger
from mille_bornes.main import main, play_round, run_match
from mille_bornes.models.player import Seat
from mille_bornes.scheduling import AsyncioScheduler, ManualScheduler
from mille_bornes.strategy import AIController, BasicStrategy
from mille_bornes.utils.logger import GameDisplay


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_play_round_finishes(seed):
    """Test that two automated seats always finish a round."""
    config = Config(game=GameConfig(seed=seed), ai=AIConfig(think_delay=0.0))
    game = GameManager(config, scheduler=ManualScheduler())
    autopilot = AIController(game, Seat.PLAYER, BasicStrategy(config.ai))

    assert play_round(game, autopilot)
    assert game.game_ended
    for player in game.players.values():
        assert player.total_distance <= 1000
        assert player.count_distance(200) <= 2

    in_play = (
        len(game.deck)
        + len(game.discard_pile)
        + sum(
            len(p.hand)
            + len(p.battle_pile)
            + len(p.speed_pile)
            + len(p.safety_area)
            + len(p.distance_cards)
            for p in game.players.values()
        )
    )
    assert in_play == 106


def test_play_round_needs_manual_scheduler(config):
    """Test that headless play refuses an event-loop scheduler."""
    game = GameManager(config, scheduler=AsyncioScheduler())
    autopilot = AIController(game, Seat.PLAYER, BasicStrategy())
    with pytest.raises(TypeError):
        play_round(game, autopilot)


def test_run_match(capsys):
    """Test a seeded two-round match."""
    config = Config(game=GameConfig(seed=9, num_rounds=2))
    game = run_match(config, GameDisplay(), GameLogger())
    assert game.match_ended
    assert game.state.round_number == 2
    assert game.player.total_score + game.ai.total_score > 0
    out = capsys.readouterr().out
    assert "ROUND 2/2" in out


def test_main(monkeypatch, capsys, tmp_path):
    """Test the command line with a game log directory."""
    monkeypatch.setattr(
        sys, "argv", ["mille-bornes", "-n", "1", "-s", "3", "--game-log", str(tmp_path)]
    )
    assert main() == 0
    out = capsys.readouterr().out
    assert "FINAL RESULTS" in out
    assert list(tmp_path.glob("*.jsonl"))


def test_main_game_log_from_config(monkeypatch, tmp_path):
    """Test that a game log enabled in config lands inside the configured directory."""
    log_dir = tmp_path / "replays"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "game:\n"
        "  seed: 5\n"
        "game_log:\n"
        "  enabled: true\n"
        f"  output_path: {log_dir}\n"
    )
    monkeypatch.setattr(sys, "argv", ["mille-bornes", "-c", str(config_path)])
    assert main() == 0
    logs = list(log_dir.glob("*_mille_bornes.jsonl"))
    assert len(logs) == 1
    assert logs[0].is_file()
