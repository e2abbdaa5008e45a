"""Formatters for game log output."""

from typing import Iterable

from mille_bornes.models.card import Card, CardType
from mille_bornes.models.player import PlayerState, Seat

# Type codes for log output
TYPE_CODES: dict[CardType, str] = {
    CardType.DISTANCE: "D",
    CardType.HAZARD: "H",
    CardType.REMEDY: "R",
    CardType.SAFETY: "S",
    CardType.SPEED_LIMIT: "H",
    CardType.END_LIMIT: "R",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "D:75km", "H:Stop", "S:Right of Way").
    """
    return f"{TYPE_CODES[card.type]}:{card.name}"


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards to comma-separated string.

    Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_hands(players: dict[Seat, PlayerState]) -> dict[str, str]:
    """Format both players' hands to dict keyed by seat."""
    return {seat.value: format_cards(p.hand) for seat, p in players.items()}


def format_tableau(player: PlayerState) -> dict[str, object]:
    """Format a player's visible piles."""
    battle = player.battle_pile.top()
    speed = player.speed_pile.top()
    return {
        "distance": player.total_distance,
        "battle": format_card(battle) if battle else "",
        "speed": format_card(speed) if speed else "",
        "safeties": format_cards(player.safety_area),
        "coup_fourres": player.coup_fourre_count,
    }
