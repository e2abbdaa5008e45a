"""Strategy module for the automated opponent."""

from .base import Decision, Strategy
from .controller import AIController
from .simple import BasicStrategy, card_weight
from .view import GameView, target_seat

__all__ = [
    "AIController",
    "BasicStrategy",
    "Decision",
    "GameView",
    "Strategy",
    "card_weight",
    "target_seat",
]
