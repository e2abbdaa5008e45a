"""Tests for card models."""

from collections import Counter

import pytest
from pydantic import ValidationError

from mille_bornes.models.card import (
    ACCIDENT,
    DRIVING_ACE,
    END_LIMIT,
    EXTRA_TANK,
    FLAT_TIRE,
    GASOLINE,
    OUT_OF_GAS,
    PUNCTURE_PROOF,
    REPAIRS,
    RIGHT_OF_WAY,
    ROLL,
    SPARE_TIRE,
    SPEED_LIMIT,
    STOP,
    Card,
    CardType,
    create_full_deck,
    distance,
    hazard,
    remedy,
    safety,
    shuffled_deck,
)


class TestCard:
    """Tests for Card class."""

    def test_distance_card(self):
        """Test creating a distance card."""
        card = distance(75)
        assert card.type == CardType.DISTANCE
        assert card.value == 75
        assert card.name == "75km"
        assert card.is_distance

    def test_speed_limit_has_own_type(self):
        """Test that Speed Limit and End Limit get their own types."""
        assert hazard(SPEED_LIMIT).type == CardType.SPEED_LIMIT
        assert remedy(END_LIMIT).type == CardType.END_LIMIT
        assert hazard(STOP).type == CardType.HAZARD
        assert remedy(ROLL).type == CardType.REMEDY

    def test_attack_cards(self):
        """Test which cards are aimed at the opponent."""
        assert hazard(STOP).is_attack
        assert hazard(SPEED_LIMIT).is_attack
        assert not remedy(ROLL).is_attack
        assert not safety(RIGHT_OF_WAY).is_attack
        assert not distance(100).is_attack

    def test_fixes_table(self):
        """Test that each remedy fixes exactly its hazard."""
        pairs = {
            ROLL: STOP,
            END_LIMIT: SPEED_LIMIT,
            GASOLINE: OUT_OF_GAS,
            SPARE_TIRE: FLAT_TIRE,
            REPAIRS: ACCIDENT,
        }
        hazards = set(pairs.values())
        for remedy_name, hazard_name in pairs.items():
            card = remedy(remedy_name)
            assert card.fixes(hazard_name)
            for other in hazards - {hazard_name}:
                assert not card.fixes(other)

    def test_hazard_fixes_nothing(self):
        """Test that non-remedies never fix."""
        assert not hazard(STOP).fixes(STOP)
        assert not safety(RIGHT_OF_WAY).fixes(STOP)

    def test_right_of_way_protects_two(self):
        """Test that Right of Way blocks both Stop and Speed Limit."""
        row = safety(RIGHT_OF_WAY)
        assert row.protects_against(STOP)
        assert row.protects_against(SPEED_LIMIT)
        assert not row.protects_against(ACCIDENT)

    def test_other_safeties_protect_one(self):
        """Test the single-hazard safeties."""
        assert safety(EXTRA_TANK).protects_against(OUT_OF_GAS)
        assert safety(PUNCTURE_PROOF).protects_against(FLAT_TIRE)
        assert safety(DRIVING_ACE).protects_against(ACCIDENT)
        assert not safety(DRIVING_ACE).protects_against(FLAT_TIRE)

    def test_remedy_protects_nothing(self):
        """Test that only safeties protect."""
        assert not remedy(REPAIRS).protects_against(ACCIDENT)

    def test_card_equality(self):
        """Test that cards of the same kind are interchangeable."""
        assert remedy(ROLL) == remedy(ROLL)
        assert remedy(ROLL) != hazard(STOP)
        assert len({distance(25), distance(25)}) == 1

    def test_card_is_frozen(self):
        """Test that cards are immutable."""
        card = distance(50)
        with pytest.raises(ValidationError):
            card.value = 200

    def test_card_string(self):
        """Test card string representation."""
        assert str(hazard(FLAT_TIRE)) == "Flat Tire"
        assert "Roll" in repr(remedy(ROLL))


class TestDeck:
    """Tests for deck construction."""

    def test_full_deck_size(self):
        """Test that the deck has 106 cards."""
        assert len(create_full_deck()) == 106

    def test_full_deck_composition(self):
        """Test card counts by name."""
        counts = Counter(c.name for c in create_full_deck())
        assert counts["25km"] == 10
        assert counts["100km"] == 12
        assert counts["200km"] == 4
        assert counts[STOP] == 5
        assert counts[SPEED_LIMIT] == 4
        assert counts[END_LIMIT] == 6
        assert counts[ROLL] == 14
        assert counts[REPAIRS] == 6
        for name in (RIGHT_OF_WAY, EXTRA_TANK, PUNCTURE_PROOF, DRIVING_ACE):
            assert counts[name] == 1

    def test_shuffle_is_seeded(self):
        """Test that the same seed gives the same order."""
        import random

        first = shuffled_deck(random.Random(3))
        second = shuffled_deck(random.Random(3))
        assert first == second
        assert Counter(c.name for c in first) == Counter(
            c.name for c in create_full_deck()
        )

    def test_cards_are_card_instances(self):
        """Test that the deck holds Card models."""
        assert all(isinstance(c, Card) for c in create_full_deck())
