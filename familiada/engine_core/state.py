"""
Game State - Data records for questions, teams and undo snapshots.

Design principles:
- Questions and answers are immutable once loaded
- Teams are the only long-lived mutable records
- Snapshots are plain values: restoring one rebuilds the full game state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class TeamId(Enum):
    """The two team slots. Exactly one Team exists per slot."""
    BLUE = "blue"
    RED = "red"

    @property
    def opponent(self) -> TeamId:
        return TeamId.RED if self is TeamId.BLUE else TeamId.BLUE


class RoundStatus(Enum):
    """Status of the current round."""
    DEFAULT = "default"  # Active team answers and accrues errors
    STOLEN = "stolen"  # Opponent gets one attempt at the round's points


@dataclass(frozen=True)
class Answer:
    """A ranked answer on the board."""
    text: str
    rank: int  # "lp" in the dataset, 1-based board position
    points: int

    @classmethod
    def from_record(cls, record: Answer | Mapping[str, Any]) -> Answer:
        """
        Build an answer from a dataset record.

        Accepts the dataset keys (lp, ans, points) as well as the long
        names (rank, text, points).
        """
        if isinstance(record, Answer):
            return record
        text = record["ans"] if "ans" in record else record["text"]
        rank = record["lp"] if "lp" in record else record["rank"]
        return cls(text=str(text), rank=int(rank), points=int(record.get("points", 0)))


@dataclass(frozen=True)
class Question:
    """A question with its ranked answers."""
    text: str
    answers: tuple[Answer, ...] = ()

    def __post_init__(self):
        # Normalize lists to tuples so the record stays hashable
        object.__setattr__(self, "answers", tuple(self.answers))
        ranks = [a.rank for a in self.answers]
        if len(ranks) != len(set(ranks)):
            raise ValueError(f"Duplicate answer ranks in question {self.text!r}")

    @property
    def answer_count(self) -> int:
        return len(self.answers)

    @property
    def ranks(self) -> frozenset[int]:
        return frozenset(a.rank for a in self.answers)

    def get_answer(self, rank: int) -> Answer | None:
        """Get answer by rank."""
        for answer in self.answers:
            if answer.rank == rank:
                return answer
        return None

    def answer_words(self) -> list[str]:
        """Answer texts, used to load a speech grammar."""
        return [a.text for a in self.answers]


@dataclass
class Team:
    """
    Score and error counters for one side.

    The three-error steal threshold lives in Round, not here.
    """
    team_id: TeamId
    points: int = 0
    errors: int = 0

    def add_points(self, points: int):
        self.points += points

    def add_error(self):
        self.errors += 1

    def reset_errors(self):
        self.errors = 0

    def set_points(self, points: int):
        """Absolute setter, used when restoring a snapshot."""
        self.points = max(0, points)

    def set_errors(self, errors: int):
        """Absolute setter, used when restoring a snapshot."""
        self.errors = max(0, errors)


@dataclass(frozen=True)
class TeamState:
    """Value copy of a Team inside a snapshot."""
    team_id: TeamId
    points: int
    errors: int


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete game state at a point in time.

    Pushed on the undo stack before every accepted mutating operation.
    `presentation` is an opaque companion captured by the presentation
    adapter; the engine only carries it back on undo.
    """
    round_count: int
    pending_next_round: bool
    current_team: TeamId | None
    winner: TeamId | None
    store_cursor: int
    question: Question
    round_status: RoundStatus
    round_points: int
    round_right: int
    revealed: frozenset[int]
    teams: tuple[TeamState, ...] = field(default_factory=tuple)
    presentation: Any = None

    def team(self, team_id: TeamId) -> TeamState | None:
        for state in self.teams:
            if state.team_id == team_id:
                return state
        return None
