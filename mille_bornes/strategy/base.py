"""Base strategy class for the automated opponent.

Defines the interface that all AI strategies must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mille_bornes.models.card import Card
from mille_bornes.models.player import Seat

from .view import GameView, target_seat


@dataclass(frozen=True)
class Decision:
    """What a strategy wants to do with its Play phase."""

    card: Card
    discard: bool = False
    target: Seat | None = None

    @classmethod
    def play(cls, card: Card, actor: Seat) -> "Decision":
        return cls(card=card, target=target_seat(card, actor))

    @classmethod
    def throw_away(cls, card: Card) -> "Decision":
        return cls(card=card, discard=True)


class Strategy(ABC):
    """Abstract base class for game strategies.

    All AI implementations must inherit from this class
    and implement the required methods.
    """

    @abstractmethod
    def select_play(self, view: GameView) -> Card | None:
        """Select a legal card to play.

        Args:
            view: Snapshot of the game from the strategy's seat

        Returns:
            Card to play, or None if nothing should be played
        """

    @abstractmethod
    def select_discard(self, view: GameView) -> Card:
        """Select the card to throw away when nothing is played.

        Args:
            view: Snapshot of the game from the strategy's seat

        Returns:
            Card from hand to discard
        """

    def wants_coup_fourre(self, view: GameView, hazard: Card) -> bool:
        """Decide whether to answer ``hazard`` with a Coup Fourré."""
        return True

    def decide(self, view: GameView) -> Decision:
        """Select a play, falling back to a discard.

        Args:
            view: Snapshot of the game from the strategy's seat

        Returns:
            Decision with the card and its target
        """
        card = self.select_play(view)
        if card is not None:
            return Decision.play(card, view.seat)
        return Decision.throw_away(self.select_discard(view))
