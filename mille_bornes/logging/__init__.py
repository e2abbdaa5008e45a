"""Game logging module."""

from .event_log import EventLog, LogEntry
from .formatters import format_card, format_cards, format_hands, format_tableau
from .game_logger import GameLogger

__all__ = [
    "EventLog",
    "LogEntry",
    "GameLogger",
    "format_card",
    "format_cards",
    "format_hands",
    "format_tableau",
]
