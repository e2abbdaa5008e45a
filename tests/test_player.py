"""Tests for player state and status piles."""

import pytest

from mille_bornes.models.card import (
    ACCIDENT,
    END_LIMIT,
    EXTRA_TANK,
    GASOLINE,
    RIGHT_OF_WAY,
    ROLL,
    SPEED_LIMIT,
    STOP,
    distance,
    hazard,
    remedy,
    safety,
)
from mille_bornes.models.player import PlayerState, Seat, StatusPile


class TestSeat:
    """Tests for Seat enum."""

    def test_opponent(self):
        """Test seat opponents."""
        assert Seat.PLAYER.opponent is Seat.AI
        assert Seat.AI.opponent is Seat.PLAYER


class TestStatusPile:
    """Tests for StatusPile class."""

    def test_empty(self):
        """Test that a new pile has no top."""
        pile = StatusPile()
        assert pile.is_empty()
        assert pile.top() is None
        assert len(pile) == 0

    def test_push_top_pop(self):
        """Test that only the last card is exposed."""
        pile = StatusPile()
        pile.push(remedy(ROLL))
        pile.push(hazard(STOP))
        assert pile.top() == hazard(STOP)
        assert pile.pop() == hazard(STOP)
        assert pile.top() == remedy(ROLL)

    def test_pop_empty_raises(self):
        """Test popping an empty pile."""
        with pytest.raises(IndexError):
            StatusPile().pop()

    def test_clear(self):
        """Test clearing a pile."""
        pile = StatusPile()
        pile.push(hazard(STOP))
        pile.clear()
        assert pile.is_empty()


class TestPlayerState:
    """Tests for PlayerState derived predicates."""

    def test_total_distance(self):
        """Test that distance is the sum of played distance cards."""
        player = PlayerState()
        player.distance_cards.extend([distance(200), distance(75), distance(25)])
        assert player.total_distance == 300
        assert player.count_distance(200) == 1

    def test_cannot_move_with_empty_battle_pile(self):
        """Test that a new player is stopped."""
        assert not PlayerState().can_move

    def test_can_move_with_roll_on_top(self):
        """Test that Roll on top allows moving."""
        player = PlayerState()
        player.battle_pile.push(remedy(ROLL))
        assert player.can_move

    def test_other_remedy_on_top_does_not_move(self):
        """Test that only Roll grants movement without Right of Way."""
        player = PlayerState()
        player.battle_pile.push(hazard(ACCIDENT))
        player.battle_pile.push(remedy(GASOLINE))
        assert not player.can_move

    def test_right_of_way_moves_on_empty_pile(self):
        """Test that Right of Way acts as a permanent Roll."""
        player = PlayerState()
        player.safety_area.append(safety(RIGHT_OF_WAY))
        assert player.can_move

    def test_right_of_way_blocked_by_hazard(self):
        """Test that a hazard on top stops even a Right of Way holder."""
        player = PlayerState()
        player.safety_area.append(safety(RIGHT_OF_WAY))
        player.battle_pile.push(hazard(ACCIDENT))
        assert not player.can_move

    def test_speed_limited(self):
        """Test the speed limit flag."""
        player = PlayerState()
        player.speed_pile.push(hazard(SPEED_LIMIT))
        assert player.is_speed_limited

    def test_end_limit_on_top_lifts_limit(self):
        """Test that End Limit on top lifts the limit."""
        player = PlayerState()
        player.speed_pile.push(hazard(SPEED_LIMIT))
        player.speed_pile.push(remedy(END_LIMIT))
        assert not player.is_speed_limited

    def test_right_of_way_ignores_speed_limit(self):
        """Test that Right of Way ignores a speed limit."""
        player = PlayerState()
        player.speed_pile.push(hazard(SPEED_LIMIT))
        player.safety_area.append(safety(RIGHT_OF_WAY))
        assert not player.is_speed_limited

    def test_safety_flags(self):
        """Test the per-safety predicates."""
        player = PlayerState()
        player.safety_area.append(safety(EXTRA_TANK))
        assert player.has_extra_tank
        assert not player.has_right_of_way
        assert not player.has_driving_ace
        assert not player.has_puncture_proof

    def test_find_protecting_safety_in_hand(self):
        """Test finding a Coup Fourré safety in hand."""
        player = PlayerState()
        player.add_to_hand(distance(25))
        player.add_to_hand(safety(RIGHT_OF_WAY))
        assert player.find_protecting_safety(SPEED_LIMIT) == safety(RIGHT_OF_WAY)
        assert player.find_protecting_safety(ACCIDENT) is None

    def test_remove_from_hand_prefers_instance(self):
        """Test that the exact instance leaves the hand."""
        player = PlayerState()
        first, second = distance(50), distance(50)
        player.add_to_hand(first)
        player.add_to_hand(second)
        removed = player.remove_from_hand(second)
        assert removed is second
        assert player.hand[0] is first

    def test_remove_missing_card_raises(self):
        """Test removing a card that is not in hand."""
        with pytest.raises(ValueError):
            PlayerState().remove_from_hand(distance(25))

    def test_reset_keeps_total_score(self):
        """Test that reset clears piles but not the match score."""
        player = PlayerState(total_score=1200, coup_fourre_count=1)
        player.add_to_hand(distance(25))
        player.battle_pile.push(remedy(ROLL))
        player.distance_cards.append(distance(100))
        player.reset()
        assert player.hand == []
        assert player.battle_pile.is_empty()
        assert player.total_distance == 0
        assert player.coup_fourre_count == 0
        assert player.total_score == 1200
