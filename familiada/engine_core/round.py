"""
Round - Per-question state machine.

States:
    DEFAULT -> STOLEN   on the third error of a team
    STOLEN             terminal; the next awarding reveal or error ends the round

The round tracks which ranks are on the board and how many points the
active team has collected. Crediting teams and switching turns is left to
the Game, which owns the teams; the round reports what happened through a
RoundUpdate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .action import Effect
from .state import Answer, Question, RoundStatus, Team

STEAL_ERROR_THRESHOLD = 3

# Round number -> score multiplier
ROUND_MULTIPLIERS = {4: 2, 5: 3}


def round_multiplier(round_count: int) -> int:
    """Scoring factor for a round: x2 in round 4, x3 in round 5, else x1."""
    return ROUND_MULTIPLIERS.get(round_count, 1)


class RoundEvent(Enum):
    """What a reveal or error did to the round."""
    NO_CHANGE = "no_change"  # Rank already revealed
    REVEALED = "revealed"
    ROUND_COMPLETE = "round_complete"  # Every answer is on the board
    STEAL_SUCCEEDED = "steal_succeeded"  # Stealing team found an answer
    ERROR = "error"
    STEAL_STARTED = "steal_started"  # Third error, opponent may steal
    STEAL_FAILED = "steal_failed"  # Stealing team erred


@dataclass
class RoundUpdate:
    event: RoundEvent
    effects: list[Effect] = field(default_factory=list)


class Round:
    """
    State of the question currently on the board.

    `right` counts every revealed answer; `points` only counts answers
    revealed while a team was earning.
    """

    def __init__(
        self,
        question: Question,
        status: RoundStatus = RoundStatus.DEFAULT,
        points: int = 0,
        right: int = 0,
        revealed: Iterable[int] = (),
    ):
        self.question = question
        self.status = status
        self.points = points
        self.right = right
        self.revealed: set[int] = set(revealed)

    def opening_effects(self) -> list[Effect]:
        """Effects that put this round's question on the board."""
        return [
            Effect.set_question(self.question.text),
            Effect.show_answer_rows(self.question.answer_count),
        ]

    @property
    def is_complete(self) -> bool:
        return self.right == self.question.answer_count

    def is_revealed(self, rank: int) -> bool:
        return rank in self.revealed

    def reveal(self, answer: Answer, awarding: bool) -> RoundUpdate:
        """
        Put an answer on the board.

        Revealing a rank twice is a silent no-op. When `awarding`, the
        answer's points go into the round pot.
        """
        if answer.rank in self.revealed:
            return RoundUpdate(RoundEvent.NO_CHANGE)

        self.revealed.add(answer.rank)
        self.right += 1
        if awarding:
            self.points += answer.points

        effects = [Effect.set_answer(answer), Effect.play_reveal()]

        if awarding and self.status == RoundStatus.STOLEN:
            return RoundUpdate(RoundEvent.STEAL_SUCCEEDED, effects)
        if self.is_complete:
            return RoundUpdate(RoundEvent.ROUND_COMPLETE, effects)
        return RoundUpdate(RoundEvent.REVEALED, effects)

    def record_error(self, team: Team) -> RoundUpdate:
        """Mark an error for a team and advance the steal state machine."""
        team.add_error()
        effects = [Effect.set_errors(team.team_id, team.errors), Effect.play_wrong()]

        if self.status == RoundStatus.STOLEN:
            return RoundUpdate(RoundEvent.STEAL_FAILED, effects)

        if team.errors == STEAL_ERROR_THRESHOLD:
            self.status = RoundStatus.STOLEN
            return RoundUpdate(RoundEvent.STEAL_STARTED, effects)

        return RoundUpdate(RoundEvent.ERROR, effects)

    def award(self, round_count: int) -> int:
        """Points the round is worth to the team that takes it."""
        return self.points * round_multiplier(round_count)
