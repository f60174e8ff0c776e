"""
Action System - Effect descriptors and action results.

The engine never touches the board or the speakers. Every operation returns
an ActionResult listing the effects it requests; an EffectApplier forwards
them to the presentation and audio collaborators.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ErrorCode
from .state import Answer, TeamId


class EffectType(Enum):
    """Types of side effects the engine can request."""
    # Board
    SET_QUESTION = "set_question"
    SHOW_ANSWER_ROWS = "show_answer_rows"
    SET_ANSWER = "set_answer"
    CLEAR_BOARD = "clear_board"
    SET_POINTS = "set_points"
    SET_ERRORS = "set_errors"
    SET_ACTIVE_TEAM = "set_active_team"
    FINISH_GAME = "finish_game"
    RESTORE_PRESENTATION = "restore_presentation"

    # Audio
    PLAY_REVEAL = "play_reveal"
    PLAY_WRONG = "play_wrong"


@dataclass(frozen=True)
class Effect:
    """
    A single request to a collaborator.

    Different effect types use different fields; unused ones stay None.
    """
    effect_type: EffectType
    team_id: TeamId | None = None
    rank: int | None = None
    text: str | None = None
    value: int | None = None
    blob: Any = None

    @classmethod
    def set_question(cls, text: str) -> Effect:
        return cls(EffectType.SET_QUESTION, text=text)

    @classmethod
    def show_answer_rows(cls, count: int) -> Effect:
        return cls(EffectType.SHOW_ANSWER_ROWS, value=count)

    @classmethod
    def set_answer(cls, answer: Answer) -> Effect:
        return cls(EffectType.SET_ANSWER, rank=answer.rank, text=answer.text, value=answer.points)

    @classmethod
    def clear_board(cls) -> Effect:
        return cls(EffectType.CLEAR_BOARD)

    @classmethod
    def set_points(cls, team_id: TeamId, points: int) -> Effect:
        return cls(EffectType.SET_POINTS, team_id=team_id, value=points)

    @classmethod
    def set_errors(cls, team_id: TeamId, errors: int) -> Effect:
        return cls(EffectType.SET_ERRORS, team_id=team_id, value=errors)

    @classmethod
    def set_active_team(cls, team_id: TeamId | None) -> Effect:
        return cls(EffectType.SET_ACTIVE_TEAM, team_id=team_id)

    @classmethod
    def finish_game(cls, winner: TeamId) -> Effect:
        return cls(EffectType.FINISH_GAME, team_id=winner)

    @classmethod
    def restore_presentation(cls, blob: Any) -> Effect:
        return cls(EffectType.RESTORE_PRESENTATION, blob=blob)

    @classmethod
    def play_reveal(cls) -> Effect:
        return cls(EffectType.PLAY_REVEAL)

    @classmethod
    def play_wrong(cls) -> Effect:
        return cls(EffectType.PLAY_WRONG)


@dataclass
class ActionResult:
    """
    Result of a game operation.

    Contains:
    - Whether the operation was accepted
    - Error code (if rejected)
    - Effects to apply (in order)
    - Human-readable changes (for logs and the console)
    """
    success: bool
    error: str | None = None
    error_code: ErrorCode | None = None
    effects: list[Effect] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(
        cls,
        effects: list[Effect] | None = None,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result."""
        return cls(success=True, effects=effects or [], changes=changes or [])

    def effect_types(self) -> list[EffectType]:
        return [e.effect_type for e in self.effects]
