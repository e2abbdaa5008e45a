"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mille_bornes.game.scoring import ScoreBreakdown
    from mille_bornes.logging import LogEntry
    from mille_bornes.models.player import PlayerState, Seat


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display match progress to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to show player hands
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_round_start(self, round_number: int, num_rounds: int) -> None:
        """Print round start message."""
        self.print_separator()
        print(f"ROUND {round_number}/{num_rounds}")
        self.print_separator()

    def print_players(self, players: dict["Seat", "PlayerState"]) -> None:
        """Print each player's tableau (and hand if enabled)."""
        for seat, player in players.items():
            safeties = ", ".join(c.name for c in player.safety_area) or "-"
            print(
                f"  {seat.value:>6}: {player.total_distance:>4}km  "
                f"battle={player.battle_pile} speed={player.speed_pile} "
                f"safeties=[{safeties}]"
            )
            if self.show_hands:
                print(f"          hand: {', '.join(c.name for c in player.hand)}")

    def print_log(self, entries: list["LogEntry"]) -> None:
        """Print the event history."""
        for entry in entries:
            print(f"  {entry}")

    def print_round_end(
        self,
        round_number: int,
        scores: dict["Seat", "ScoreBreakdown"],
    ) -> None:
        """Print itemised round scores."""
        print(f"\nRound {round_number} finished!")
        for seat, breakdown in scores.items():
            items = ", ".join(
                f"{name}={points}"
                for name, points in breakdown.model_dump().items()
                if points
            )
            print(f"  {seat.value:>6}: {breakdown.total:>5} ({items or 'nothing'})")

    def print_final_results(self, players: dict["Seat", "PlayerState"]) -> None:
        """Print cumulative match totals."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        ranked = sorted(players.items(), key=lambda x: x[1].total_score, reverse=True)
        for rank, (seat, player) in enumerate(ranked, 1):
            print(f"  #{rank}: {player.name} ({seat.value}) - {player.total_score} points")
