"""
API Service - Business logic layer between the HTTP API and the engine.

The service:
1. Translates API requests to controller calls
2. Manages sessions
3. Formats game state for the host console

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from .. import __version__
from ..config import FAMILIADA_DATA_PATH, random_override
from ..dataset import QuestionDataset, load_dataset
from ..engine_core.action import ActionResult
from ..engine_core.round import round_multiplier
from ..engine_core.state import TeamId
from ..errors import ConfigurationError, ErrorCode
from ..session import Session, SessionManager
from .schemas import (
    ActionResponse,
    AnswerSlotInfo,
    CreateSessionRequest,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    RoundInfo,
    SessionResponse,
    SessionStatus,
    TeamInfo,
    TeamSlot,
)


@dataclass
class APIService:
    """
    Main API service for the host console.

    Usage:
        service = APIService()
        session = service.create_session(CreateSessionRequest())
        result = service.reveal(session.session_id, 1)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    dataset: QuestionDataset | None = None

    def default_dataset(self) -> QuestionDataset:
        """Server dataset, loaded on first use."""
        if self.dataset is None:
            self.dataset = load_dataset(FAMILIADA_DATA_PATH)
        return self.dataset

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        randomize = request.randomize
        if randomize is None:
            randomize = random_override()

        team_names = {}
        if request.blue_name:
            team_names[TeamId.BLUE] = request.blue_name
        if request.red_name:
            team_names[TeamId.RED] = request.red_name

        try:
            dataset = request.dataset if request.dataset is not None else self.default_dataset()
            session = self.session_manager.create_session(
                dataset, randomize=randomize, seed=request.seed, team_names=team_names,
            )
        except ConfigurationError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_DATASET)

        return self._session_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if session is None:
            return self._not_found(session_id)
        return self._session_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if session is None:
            return self._not_found(session_id)
        return self.build_game_state(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def health(self) -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_sessions=len(self.session_manager.list_active_sessions()),
        )

    # =========================================================================
    # Game actions
    # =========================================================================

    def answer(self, session_id: str, text: str) -> ActionResponse | ErrorResponse:
        return self._act(session_id, lambda s: s.controller.answer(text))

    def reveal(self, session_id: str, rank: int) -> ActionResponse | ErrorResponse:
        return self._act(session_id, lambda s: s.controller.reveal(rank))

    def add_error(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self._act(session_id, lambda s: s.controller.add_error())

    def select_team(self, session_id: str, team: TeamSlot | None) -> ActionResponse | ErrorResponse:
        team_id = TeamId(team.value) if team is not None else None
        return self._act(session_id, lambda s: s.controller.select_team(team_id))

    def next_round(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self._act(session_id, lambda s: s.controller.next_round())

    def undo(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self._act(session_id, lambda s: s.controller.undo())

    async def press_key(self, session_id: str, key: str) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if session is None:
            return self._not_found(session_id)
        result = await session.controller.handle_key(key)
        return self._action_response(session, result)

    # =========================================================================
    # Formatting
    # =========================================================================

    def build_game_state(self, session: Session) -> GameStateResponse:
        game = session.game
        rnd = game.round

        answers = []
        for answer in sorted(rnd.question.answers, key=lambda a: a.rank):
            revealed = rnd.is_revealed(answer.rank)
            answers.append(AnswerSlotInfo(
                rank=answer.rank,
                revealed=revealed,
                text=answer.text if revealed else None,
                points=answer.points if revealed else None,
            ))

        return GameStateResponse(
            session_id=session.session_id,
            round=RoundInfo(
                round_count=game.round_count,
                question=rnd.question.text,
                status=rnd.status.value,
                points=rnd.points,
                multiplier=round_multiplier(game.round_count),
                right=rnd.right,
                answer_count=rnd.question.answer_count,
                pending_next_round=game.pending_next_round,
            ),
            answers=answers,
            teams=[
                TeamInfo(
                    team_id=TeamSlot(team.team_id.value),
                    name=session.board.team_names[team.team_id],
                    points=team.points,
                    errors=team.errors,
                    is_active=team.team_id == game.current_team_id,
                )
                for team in game.teams
            ],
            current_team=TeamSlot(game.current_team_id.value) if game.current_team_id else None,
            winner=TeamSlot(game.winner.value) if game.winner else None,
            can_undo=game.can_undo,
            score_overlay_visible=session.controller.score_overlay_visible,
            board_text=session.board.render(),
        )

    def _session_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            created_at=session.created_at,
            game_state=self.build_game_state(session),
        )

    def _act(self, session_id: str, operation) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if session is None:
            return self._not_found(session_id)
        return self._action_response(session, operation(session))

    def _action_response(self, session: Session, result: ActionResult) -> ActionResponse:
        return ActionResponse(
            success=result.success,
            error=result.error,
            error_code=result.error_code,
            changes=result.changes,
            game_state=self.build_game_state(session),
        )

    @staticmethod
    def _not_found(session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
