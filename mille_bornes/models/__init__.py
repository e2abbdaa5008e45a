"""Game models."""

from .card import Card, CardType, create_full_deck, shuffled_deck
from .game_state import IDLE, AwaitingCoupFourre, GameState, Idle, Interrupt, TurnPhase
from .player import PlayerState, Seat, StatusPile

__all__ = [
    "Card",
    "CardType",
    "create_full_deck",
    "shuffled_deck",
    "PlayerState",
    "Seat",
    "StatusPile",
    "GameState",
    "TurnPhase",
    "Interrupt",
    "Idle",
    "AwaitingCoupFourre",
    "IDLE",
]
