"""
Text Board - In-memory board used by the console and the HTTP API.

Holds exactly what a physical scoreboard would show and can render it as
plain text. Its whole state is the undo companion blob.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import asdict, dataclass, field
from typing import Any

from ..engine_core.state import TeamId
from .interfaces import Presentation

MAX_ANSWER_ROWS = 6
ANSWER_FIELD_FILL = "... ... ... ... ... ... ... ... ... ... ... ... ..."
TEAM_DISPLAY_NAMES = {TeamId.BLUE: "Niebiescy", TeamId.RED: "Czerwoni"}


def fill_answer_field(text: str) -> str:
    """Pad an answer with dots to the field width, or truncate with an ellipsis."""
    width = len(ANSWER_FIELD_FILL)
    if len(text) > width:
        return text[: width - 3] + "..."
    return text + ANSWER_FIELD_FILL[len(text):]


@dataclass
class AnswerSlot:
    text: str = ANSWER_FIELD_FILL
    points: int = 0
    visible: bool = True


@dataclass
class BoardState:
    """Everything on the board, as plain values."""
    question: str = ""
    answers: dict[int, AnswerSlot] = field(
        default_factory=lambda: {n: AnswerSlot() for n in range(1, MAX_ANSWER_ROWS + 1)}
    )
    points: dict[str, int] = field(default_factory=lambda: {t.value: 0 for t in TeamId})
    errors: dict[str, int] = field(default_factory=lambda: {t.value: 0 for t in TeamId})
    active_team: str | None = None
    winner_text: str = ""


class TextBoard(Presentation):
    """Presentation backed by a BoardState."""

    def __init__(self, team_names: dict[TeamId, str] | None = None):
        self.team_names = {**TEAM_DISPLAY_NAMES, **(team_names or {})}
        self.state = BoardState()

    def set_question(self, text: str) -> None:
        self.state.question = text

    def show_answer_rows(self, count: int) -> None:
        for number, slot in self.state.answers.items():
            slot.visible = number <= count

    def set_answer(self, rank: int, text: str, points: int) -> None:
        if rank not in self.state.answers:
            raise ValueError(f"Answer slot {rank} does not exist (1-{MAX_ANSWER_ROWS})")
        slot = self.state.answers[rank]
        slot.text = fill_answer_field(text)
        slot.points = points

    def clear_board(self) -> None:
        for slot in self.state.answers.values():
            slot.text = ANSWER_FIELD_FILL
            slot.points = 0
        for team in TeamId:
            self.state.errors[team.value] = 0

    def set_points(self, team_id: TeamId, points: int) -> None:
        self.state.points[team_id.value] = points

    def set_errors(self, team_id: TeamId, errors: int) -> None:
        self.state.errors[team_id.value] = errors

    def set_active_team(self, team_id: TeamId | None) -> None:
        self.state.active_team = team_id.value if team_id else None

    def finish_game(self, winner: TeamId) -> None:
        self.state.winner_text = f"Wygrala druzyna {self.team_names[winner]}"

    def capture_state(self) -> Any:
        return deepcopy(self.state)

    def restore_state(self, blob: Any) -> None:
        if blob is None:
            return
        self.state = deepcopy(blob)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self.state)

    def render(self) -> str:
        """Render the board as text lines."""
        lines = [self.state.question, ""]
        for number, slot in sorted(self.state.answers.items()):
            if not slot.visible:
                continue
            lines.append(f"{number}. {slot.text} {slot.points:>3}")
        lines.append("")
        for team in TeamId:
            marker = ">" if self.state.active_team == team.value else " "
            marks = "X" * self.state.errors[team.value]
            lines.append(
                f"{marker} {self.team_names[team]:<10} {self.state.points[team.value]:>4}  {marks}"
            )
        if self.state.winner_text:
            lines.extend(["", self.state.winner_text])
        return "\n".join(lines)
