"""Game logger for detailed round replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from mille_bornes.config import GameLogConfig
from mille_bornes.models.card import Card
from mille_bornes.models.player import PlayerState, Seat

from .formatters import format_card, format_hands, format_tableau


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of a match.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file."""
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_match_start(self, players: dict[Seat, PlayerState]) -> None:
        """Log match start with player names."""
        self._write({
            "type": "match_start",
            "timestamp": datetime.now().isoformat(),
            "players": {seat.value: p.name for seat, p in players.items()},
        })

    def log_round_start(
        self,
        round_num: int,
        players: dict[Seat, PlayerState],
        starter: Seat,
        deck_size: int,
    ) -> None:
        """Log round start with the dealt hands.

        Args:
            round_num: Round number within the match.
            players: Both players after the deal.
            starter: Seat that plays first.
            deck_size: Cards left in the deck after the deal.
        """
        self._write({
            "type": "round_start",
            "round": round_num,
            "hands": format_hands(players),
            "starter": starter.value,
            "deck": deck_size,
        })

    def log_draw(self, round_num: int, turn_num: int, seat: Seat, card: Card | None) -> None:
        """Log a draw (card is None when the deck was empty)."""
        self._write({
            "type": "draw",
            "round": round_num,
            "turn": turn_num,
            "player": seat.value,
            "card": format_card(card) if card else "",
        })

    def log_move(
        self,
        round_num: int,
        turn_num: int,
        actor: Seat,
        target: Seat,
        card: Card,
        players: dict[Seat, PlayerState],
    ) -> None:
        """Log an applied move with both tableaux after it."""
        self._write({
            "type": "move",
            "round": round_num,
            "turn": turn_num,
            "player": actor.value,
            "target": target.value,
            "card": format_card(card),
            "tableau": {seat.value: format_tableau(p) for seat, p in players.items()},
        })

    def log_discard(self, round_num: int, turn_num: int, seat: Seat, card: Card) -> None:
        """Log a discard."""
        self._write({
            "type": "discard",
            "round": round_num,
            "turn": turn_num,
            "player": seat.value,
            "card": format_card(card),
        })

    def log_coup_fourre(
        self,
        round_num: int,
        turn_num: int,
        defender: Seat,
        hazard: Card,
        safety: Card,
    ) -> None:
        """Log a Coup Fourré."""
        self._write({
            "type": "coup_fourre",
            "round": round_num,
            "turn": turn_num,
            "player": defender.value,
            "hazard": format_card(hazard),
            "safety": format_card(safety),
        })

    def log_round_end(
        self,
        round_num: int,
        players: dict[Seat, PlayerState],
        scores: dict[Seat, dict[str, int]],
    ) -> None:
        """Log round end with itemised scores.

        Args:
            round_num: Round number.
            players: Both players at round end.
            scores: Score breakdown per seat.
        """
        self._write({
            "type": "round_end",
            "round": round_num,
            "distance": {seat.value: p.total_distance for seat, p in players.items()},
            "scores": {seat.value: s for seat, s in scores.items()},
        })

    def log_match_end(self, total_rounds: int, totals: dict[Seat, int]) -> None:
        """Log match end with cumulative totals."""
        self._write({
            "type": "match_end",
            "total_rounds": total_rounds,
            "totals": {seat.value: v for seat, v in totals.items()},
        })
