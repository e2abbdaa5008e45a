"""Game logic."""

from .manager import GameManager
from .rules import MoveResult, RuleBook, validate_move
from .scoring import ScoreBreakdown, score_breakdown

__all__ = [
    "GameManager",
    "MoveResult",
    "RuleBook",
    "ScoreBreakdown",
    "score_breakdown",
    "validate_move",
]
