"""
Engine Core - Deterministic game state and round resolution.

The engine is the runtime that:
1. Loads questions into a QuestionStore
2. Tracks the current Round and both Teams
3. Resolves guesses, reveals and errors
4. Keeps a full-state undo stack
5. Returns effect descriptors instead of rendering
"""

from .state import Answer, GameSnapshot, Question, RoundStatus, Team, TeamId, TeamState
from .action import ActionResult, Effect, EffectType
from .matching import match_answer, normalize_answer
from .question_store import QuestionStore
from .round import Round, RoundEvent, RoundUpdate, round_multiplier
from .game import Game, WIN_THRESHOLD

__all__ = [
    "Answer",
    "GameSnapshot",
    "Question",
    "RoundStatus",
    "Team",
    "TeamId",
    "TeamState",
    "ActionResult",
    "Effect",
    "EffectType",
    "match_answer",
    "normalize_answer",
    "QuestionStore",
    "Round",
    "RoundEvent",
    "RoundUpdate",
    "round_multiplier",
    "Game",
    "WIN_THRESHOLD",
]
