"""Basic priority strategy.

Strategy:
- Play any legal safety first
- Then fix own problems with a remedy or End Limit
- Then drive as far as possible (highest legal distance)
- Then attack the opponent with a hazard or speed limit
- Otherwise discard the least useful card
"""

from mille_bornes.config import AIConfig
from mille_bornes.models.card import ROLL, Card, CardType

from .base import Strategy
from .view import GameView

# Discard weights: higher = keep
SAFETY_WEIGHT = 1000
ROLL_WEIGHT = 500
OTHER_WEIGHT = 50


def card_weight(card: Card) -> int:
    """How much the strategy wants to keep a card."""
    if card.type == CardType.SAFETY:
        return SAFETY_WEIGHT
    if card.name == ROLL:
        return ROLL_WEIGHT
    if card.type == CardType.DISTANCE:
        return card.value
    return OTHER_WEIGHT


class BasicStrategy(Strategy):
    """Priority-ordered strategy: safeties, remedies, distance, attacks."""

    def __init__(self, config: AIConfig | None = None):
        self.config = config or AIConfig()

    def select_play(self, view: GameView) -> Card | None:
        legal = view.legal_plays()

        for card in legal:
            if card.type == CardType.SAFETY:
                return card

        for card in legal:
            if card.type in (CardType.REMEDY, CardType.END_LIMIT):
                return card

        distances = [c for c in legal if c.type == CardType.DISTANCE]
        if distances:
            return max(distances, key=lambda c: c.value)

        for card in legal:
            if card.is_attack:
                return card

        return None

    def select_discard(self, view: GameView) -> Card:
        if not view.hand:
            raise ValueError("Nothing to discard: hand is empty")
        return min(view.hand, key=card_weight)

    def wants_coup_fourre(self, view: GameView, hazard: Card) -> bool:
        return self.config.always_coup_fourre
