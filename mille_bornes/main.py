"""Main entry point: play a headless match between two automated seats."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from mille_bornes.config import Config, GameLogConfig, load_config
from mille_bornes.game.manager import GameManager
from mille_bornes.logging import GameLogger
from mille_bornes.models.game_state import AwaitingCoupFourre
from mille_bornes.models.player import Seat
from mille_bornes.scheduling import ManualScheduler
from mille_bornes.strategy import AIController, BasicStrategy
from mille_bornes.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)

MAX_STEPS_PER_ROUND = 2000


def generate_log_filename(log_dir: str) -> str:
    """Generate log filename with timestamp.

    Format: {ISO timestamp}_mille_bornes.jsonl
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_mille_bornes.jsonl")


def play_round(manager: GameManager, autopilot: AIController) -> bool:
    """Deal and play one round until it ends.

    The automated opponent runs from the manager's scheduler; the human
    seat is driven by ``autopilot``.

    Args:
        manager: Game manager using a ManualScheduler
        autopilot: Controller for the human seat

    Returns:
        True if the round ended normally, False if it stalled
    """
    scheduler = manager.scheduler
    if not isinstance(scheduler, ManualScheduler):
        raise TypeError("Headless play needs a ManualScheduler")

    manager.start_new_round()
    for _ in range(MAX_STEPS_PER_ROUND):
        scheduler.run_pending()
        if manager.game_ended:
            return True

        interrupt = manager.state.interrupt
        if isinstance(interrupt, AwaitingCoupFourre):
            if interrupt.target == autopilot.seat:
                autopilot.respond_to_hazard(manager.round_token)
                continue
        elif manager.current_turn == autopilot.seat:
            if autopilot.take_turn(manager.round_token) or manager.game_ended:
                continue

        if scheduler.pending == 0:
            break

    logger.warning(f"Round {manager.state.round_number} stalled: {manager.state}")
    return False


def run_match(config: Config, display: GameDisplay, game_logger: GameLogger) -> GameManager:
    """Play ``config.game.num_rounds`` rounds and tally the scores."""
    config.ai.think_delay = 0.0
    manager = GameManager(config, scheduler=ManualScheduler(), game_logger=game_logger)
    manager.player.name = "Autopilot"
    autopilot = AIController(manager, Seat.PLAYER, BasicStrategy(config.ai), config.ai)

    num_rounds = config.game.num_rounds
    for round_number in range(1, num_rounds + 1):
        display.print_round_start(round_number, num_rounds)
        if not play_round(manager, autopilot):
            break

        display.print_players(manager.players)
        if config.logging.level.upper() == "DEBUG":
            display.print_log(manager.logs)

        scores = {seat: manager.score_breakdown(seat) for seat in Seat}
        manager.tally_round()
        display.print_round_end(round_number, scores)

        if manager.match_winner() is not None:
            break

    manager.end_match()
    return manager


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Mille Bornes headless match runner")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--num-rounds",
        type=int,
        help="Number of rounds to play (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Shuffle seed (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Show player hands in output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    config = load_config(args.config)

    if args.num_rounds:
        config.game.num_rounds = args.num_rounds
    if args.seed is not None:
        config.game.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            manager = run_match(config, display, game_logger)
            display.print_final_results(manager.players)
        return 0

    except KeyboardInterrupt:
        print("\nMatch interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Match error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
