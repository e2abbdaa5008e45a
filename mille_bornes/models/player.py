"""Player state model."""

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from .card import (
    DRIVING_ACE,
    EXTRA_TANK,
    PUNCTURE_PROOF,
    RIGHT_OF_WAY,
    ROLL,
    Card,
    CardType,
)


class Seat(str, Enum):
    """Who owns a turn: the human player or the automated opponent."""

    PLAYER = "player"
    AI = "ai"

    @property
    def opponent(self) -> "Seat":
        return Seat.AI if self is Seat.PLAYER else Seat.PLAYER


class StatusPile:
    """Ordered pile whose top card is the owner's current status.

    Only the top card is ever inspected, so the interface is restricted to
    push, peek and pop of the top.
    """

    def __init__(self) -> None:
        self._cards: list[Card] = []

    def push(self, card: Card) -> None:
        """Put a card on top."""
        self._cards.append(card)

    def top(self) -> Card | None:
        """Get the top card, or None if the pile is empty."""
        return self._cards[-1] if self._cards else None

    def pop(self) -> Card:
        """Remove and return the top card."""
        if not self._cards:
            raise IndexError("pop from empty pile")
        return self._cards.pop()

    def is_empty(self) -> bool:
        return not self._cards

    def clear(self) -> None:
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        # Bottom to top, for display and bookkeeping only
        return iter(list(self._cards))

    def __str__(self) -> str:
        top = self.top()
        return f"[{top}]" if top else "[]"

    def __repr__(self) -> str:
        return f"StatusPile({self._cards!r})"


class PlayerState(BaseModel):
    """Piles and counters for one player in the current round."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = "Player"

    hand: list[Card] = Field(default_factory=list)
    battle_pile: StatusPile = Field(default_factory=StatusPile)
    speed_pile: StatusPile = Field(default_factory=StatusPile)
    safety_area: list[Card] = Field(default_factory=list)
    distance_cards: list[Card] = Field(default_factory=list)

    coup_fourre_count: int = 0
    total_score: int = 0  # Cumulative across rounds

    @property
    def total_distance(self) -> int:
        return sum(c.value for c in self.distance_cards)

    def has_safety(self, name: str) -> bool:
        """Check if a safety with this name is in the safety area."""
        return any(c.name == name for c in self.safety_area)

    @property
    def has_right_of_way(self) -> bool:
        return self.has_safety(RIGHT_OF_WAY)

    @property
    def has_extra_tank(self) -> bool:
        return self.has_safety(EXTRA_TANK)

    @property
    def has_puncture_proof(self) -> bool:
        return self.has_safety(PUNCTURE_PROOF)

    @property
    def has_driving_ace(self) -> bool:
        return self.has_safety(DRIVING_ACE)

    @property
    def is_speed_limited(self) -> bool:
        top = self.speed_pile.top()
        return (
            top is not None
            and top.type == CardType.SPEED_LIMIT
            and not self.has_right_of_way
        )

    @property
    def can_move(self) -> bool:
        top = self.battle_pile.top()
        # Right of Way is a permanent Roll unless a hazard sits on top
        if self.has_right_of_way:
            return top is None or top.type != CardType.HAZARD
        return top is not None and top.name == ROLL

    def count_distance(self, value: int) -> int:
        """Count played distance cards of the given value."""
        return sum(1 for c in self.distance_cards if c.value == value)

    def is_protected_against(self, hazard_name: str) -> bool:
        """Check if any played safety blocks the hazard."""
        return any(s.protects_against(hazard_name) for s in self.safety_area)

    def find_protecting_safety(self, hazard_name: str) -> Card | None:
        """Find a safety in hand that blocks the hazard (Coup Fourré check)."""
        for card in self.hand:
            if card.protects_against(hazard_name):
                return card
        return None

    def holds(self, card: Card) -> bool:
        """Check if this exact card (or an interchangeable one) is in hand."""
        return any(c is card for c in self.hand) or card in self.hand

    def add_to_hand(self, card: Card) -> None:
        self.hand.append(card)

    def remove_from_hand(self, card: Card) -> Card:
        """Remove a card from hand, preferring the same instance.

        Returns:
            The card instance that left the hand.
        """
        for i, c in enumerate(self.hand):
            if c is card:
                return self.hand.pop(i)
        return self.hand.pop(self.hand.index(card))

    def reset(self) -> None:
        """Clear all piles for a new round (cumulative score is kept)."""
        self.hand.clear()
        self.battle_pile.clear()
        self.speed_pile.clear()
        self.safety_area.clear()
        self.distance_cards.clear()
        self.coup_fourre_count = 0

    def __str__(self) -> str:
        status = []
        if not self.can_move:
            status.append("stopped")
        if self.is_speed_limited:
            status.append("limited")
        status_str = f" ({', '.join(status)})" if status else ""
        return f"{self.name}[{self.total_distance}km]{status_str}"

    def __repr__(self) -> str:
        return (
            f"PlayerState(name={self.name!r}, distance={self.total_distance}, "
            f"hand={len(self.hand)}, safeties={len(self.safety_area)})"
        )
