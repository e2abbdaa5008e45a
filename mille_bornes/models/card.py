"""Card model, card names and deck construction."""

import random
from enum import Enum

from pydantic import BaseModel


class CardType(str, Enum):
    """Kind of card, decides which pile a played card lands on."""

    DISTANCE = "distance"
    HAZARD = "hazard"
    REMEDY = "remedy"
    SAFETY = "safety"
    SPEED_LIMIT = "speed_limit"
    END_LIMIT = "end_limit"


# Card names (identity strings)
ROLL = "Roll"
STOP = "Stop"
SPEED_LIMIT = "Speed Limit"
END_LIMIT = "End Limit"
OUT_OF_GAS = "Out of Gas"
GASOLINE = "Gasoline"
FLAT_TIRE = "Flat Tire"
SPARE_TIRE = "Spare Tire"
ACCIDENT = "Accident"
REPAIRS = "Repairs"

RIGHT_OF_WAY = "Right of Way"
EXTRA_TANK = "Extra Tank"
PUNCTURE_PROOF = "Puncture-Proof"
DRIVING_ACE = "Driving Ace"

SAFETY_NAMES = (RIGHT_OF_WAY, EXTRA_TANK, PUNCTURE_PROOF, DRIVING_ACE)

# Remedy name -> hazard name it cancels
FIXES: dict[str, str] = {
    ROLL: STOP,
    END_LIMIT: SPEED_LIMIT,
    GASOLINE: OUT_OF_GAS,
    SPARE_TIRE: FLAT_TIRE,
    REPAIRS: ACCIDENT,
}

# Safety name -> hazard names it blocks
PROTECTS: dict[str, frozenset[str]] = {
    RIGHT_OF_WAY: frozenset({STOP, SPEED_LIMIT}),
    EXTRA_TANK: frozenset({OUT_OF_GAS}),
    PUNCTURE_PROOF: frozenset({FLAT_TIRE}),
    DRIVING_ACE: frozenset({ACCIDENT}),
}


class Card(BaseModel, frozen=True):
    """Single card. Only distance cards carry a meaningful value."""

    name: str
    type: CardType
    value: int = 0

    @property
    def is_distance(self) -> bool:
        return self.type == CardType.DISTANCE

    @property
    def is_attack(self) -> bool:
        """Hazards and speed limits are played on the opponent."""
        return self.type in (CardType.HAZARD, CardType.SPEED_LIMIT)

    def fixes(self, hazard_name: str) -> bool:
        """Check if this remedy (or End Limit) cancels the given hazard."""
        if self.type not in (CardType.REMEDY, CardType.END_LIMIT):
            return False
        return FIXES.get(self.name) == hazard_name

    def protects_against(self, hazard_name: str) -> bool:
        """Check if this safety grants immunity to the given hazard."""
        if self.type != CardType.SAFETY:
            return False
        return hazard_name in PROTECTS.get(self.name, frozenset())

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Card({self.name!r})"


def distance(value: int) -> Card:
    """Create a distance card, e.g. ``distance(75)`` -> "75km"."""
    return Card(name=f"{value}km", type=CardType.DISTANCE, value=value)


def hazard(name: str) -> Card:
    """Create a hazard card (Speed Limit gets its own type)."""
    if name == SPEED_LIMIT:
        return Card(name=name, type=CardType.SPEED_LIMIT)
    return Card(name=name, type=CardType.HAZARD)


def remedy(name: str) -> Card:
    """Create a remedy card (End Limit gets its own type)."""
    if name == END_LIMIT:
        return Card(name=name, type=CardType.END_LIMIT)
    return Card(name=name, type=CardType.REMEDY)


def safety(name: str) -> Card:
    """Create a safety card."""
    return Card(name=name, type=CardType.SAFETY)


# (factory argument, copies) per card kind
DISTANCE_COUNTS = {25: 10, 50: 10, 75: 10, 100: 12, 200: 4}
HAZARD_COUNTS = {STOP: 5, OUT_OF_GAS: 3, FLAT_TIRE: 3, ACCIDENT: 3, SPEED_LIMIT: 4}
REMEDY_COUNTS = {END_LIMIT: 6, ROLL: 14, GASOLINE: 6, SPARE_TIRE: 6, REPAIRS: 6}


def create_full_deck() -> list[Card]:
    """Create the unshuffled 106-card deck."""
    cards: list[Card] = []

    for value, count in DISTANCE_COUNTS.items():
        cards.extend(distance(value) for _ in range(count))
    for name, count in HAZARD_COUNTS.items():
        cards.extend(hazard(name) for _ in range(count))
    for name, count in REMEDY_COUNTS.items():
        cards.extend(remedy(name) for _ in range(count))
    cards.extend(safety(name) for name in SAFETY_NAMES)

    return cards


def shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    """Create a full deck and shuffle it in place."""
    cards = create_full_deck()
    (rng or random).shuffle(cards)
    return cards
