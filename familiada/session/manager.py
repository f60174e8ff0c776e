"""
Session Manager - Creates and manages game sessions.

A session is one evening of the show: a Game, the board it draws on and
the host controller driving it.

PERSISTENCE RULES:
- Sessions live in memory only
- Ending a session drops all of its state
- There is no cross-session history
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import random
import time
import uuid

from ..dataset import QuestionDataset
from ..engine_core.game import Game
from ..engine_core.state import Team, TeamId
from ..presentation.adapter import EffectApplier
from ..presentation.audio import SilentAudio
from ..presentation.board import TextBoard
from ..presentation.interfaces import AudioPlayer, SpeechRecognizer
from .controller import HostController

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # A team reached the winning score
    ENDED = "ended"  # Host closed the session


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The game engine
    - The text board it renders to
    - The host controller
    - Session metadata
    """
    session_id: str
    game: Game
    board: TextBoard
    controller: HostController
    created_at: float
    ended: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        if self.game.is_over:
            return SessionState.GAME_OVER
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE


def build_session(
    dataset: QuestionDataset,
    randomize: bool | None = None,
    seed: int | None = None,
    audio: AudioPlayer | None = None,
    recognizer: SpeechRecognizer | None = None,
    team_names: dict[TeamId, str] | None = None,
) -> Session:
    """Wire a game, a text board and a controller together."""
    rng = random.Random(seed)
    board = TextBoard(team_names=team_names)
    applier = EffectApplier(board, audio or SilentAudio())
    game = Game(
        [Team(TeamId.BLUE), Team(TeamId.RED)],
        dataset.build_store(randomize=randomize, rng=rng),
        rng=rng,
        capture_presentation=applier.capture,
    )
    controller = HostController(game, applier, recognizer)
    controller.start()

    return Session(
        session_id=str(uuid.uuid4()),
        game=game,
        board=board,
        controller=controller,
        created_at=time.time(),
    )


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from a dataset
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        dataset: QuestionDataset,
        randomize: bool | None = None,
        seed: int | None = None,
        team_names: dict[TeamId, str] | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            dataset: Validated question dataset
            randomize: Overrides the dataset's shuffle flag when not None
            seed: Seed for question order and starting teams
            team_names: Display names for the board

        Returns:
            New Session with the first round on the board
        """
        session = build_session(
            dataset, randomize=randomize, seed=seed, team_names=team_names
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s created", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """End a session and drop it from memory."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.ended = True
        logger.info("Session %s ended", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is still running."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
