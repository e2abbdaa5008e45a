"""Mille Bornes rules engine and turn state machine."""

from mille_bornes.config import Config, load_config
from mille_bornes.game import GameManager, MoveResult, RuleBook
from mille_bornes.models import Card, CardType, PlayerState, Seat, TurnPhase

__all__ = [
    "Card",
    "CardType",
    "Config",
    "GameManager",
    "MoveResult",
    "PlayerState",
    "RuleBook",
    "Seat",
    "TurnPhase",
    "load_config",
]
