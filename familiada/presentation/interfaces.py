"""
Collaborator Interfaces - Board, audio and speech contracts the engine drives.

The engine never imports an implementation; it only emits effects that an
applier forwards to these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..engine_core.state import TeamId


class Presentation(ABC):
    """Board interface to decouple the engine from a specific renderer.

    Implementations receive fire-and-forget requests; return values are
    never consumed, except for capture_state which produces the opaque blob
    carried through undo.
    """

    @abstractmethod
    def set_question(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_answer_rows(self, count: int) -> None:
        """Show the first `count` answer rows and hide the rest."""
        raise NotImplementedError

    @abstractmethod
    def set_answer(self, rank: int, text: str, points: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_board(self) -> None:
        """Blank every answer slot and error mark."""
        raise NotImplementedError

    @abstractmethod
    def set_points(self, team_id: TeamId, points: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_errors(self, team_id: TeamId, errors: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_active_team(self, team_id: TeamId | None) -> None:
        raise NotImplementedError

    @abstractmethod
    def finish_game(self, winner: TeamId) -> None:
        """Show the game-over banner."""
        raise NotImplementedError

    def capture_state(self) -> Any:
        """Opaque blob for the undo stack. None means nothing to restore."""
        return None

    def restore_state(self, blob: Any) -> None:
        """Restore a blob produced by capture_state."""
        return None


class AudioPlayer(ABC):
    """Sound effects interface."""

    @abstractmethod
    def play_reveal(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def play_wrong(self) -> None:
        raise NotImplementedError


class SpeechRecognizer(ABC):
    """Speech recognition interface.

    Callers check is_supported() before start(). At most one recognition is
    in flight at a time; retry policy belongs to the implementation.
    """

    @abstractmethod
    def is_supported(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def load_grammar(self, words: Sequence[str]) -> None:
        """Bias recognition towards the current answers."""
        raise NotImplementedError

    @abstractmethod
    async def start(self) -> str:
        """Listen once.

        Returns:
            The best transcript.

        Raises:
            RecognitionFailure: nothing matched or the recognizer failed.
            UnsupportedCapability: called on an unsupported recognizer.
        """
        raise NotImplementedError
