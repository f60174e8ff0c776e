"""
FastAPI Application - REST API for the host console.

Endpoints:
    GET    /api/v1/health                       Liveness and version
    POST   /api/v1/sessions                     Start a game
    GET    /api/v1/sessions                     List running games
    GET    /api/v1/sessions/{id}                Get session status
    DELETE /api/v1/sessions/{id}                End session
    GET    /api/v1/sessions/{id}/state          Get game state
    POST   /api/v1/sessions/{id}/answer         Submit a typed/transcribed guess
    POST   /api/v1/sessions/{id}/reveal         Reveal an answer by number
    POST   /api/v1/sessions/{id}/error          Error for the selected team
    POST   /api/v1/sessions/{id}/team           Select or deselect a team
    POST   /api/v1/sessions/{id}/next-round     Advance to the next round
    POST   /api/v1/sessions/{id}/undo           Undo the last action
    POST   /api/v1/sessions/{id}/key            Raw host key press

One session is one show run by one host; there are no player accounts.
All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ALLOWED_ORIGINS
from ..errors import ErrorCode
from .schemas import (
    ActionResponse,
    AnswerRequest,
    CreateSessionRequest,
    EndSessionResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    KeyRequest,
    RevealRequest,
    SelectTeamRequest,
    SessionListResponse,
    SessionResponse,
)
from .service import APIService


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Familiada Host API",
        description="""
Game show host console - run a Familiada game from a browser or a clicker.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_DATASET` | Question dataset failed validation |
| `NOT_FOUND` | Answer number not in the current question |
| `NO_ACTIVE_TEAM` | No team selected |
| `ROUND_FINISHED` | Round already decided |
| `NO_PENDING_ROUND` | Round still in play |
| `GAME_OVER` | A team already won |
| `EMPTY_UNDO` | Nothing to undo |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Map an ErrorResponse to its HTTP status."""
        status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return api_service.health()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid dataset"}},
        tags=["Sessions"],
        summary="Start a new game",
    )
    async def create_session(body: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Start a new game with the server dataset or an inline one.

        The first question is on the board and a random team is active.
        """
        return respond(api_service.create_session(body))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List running games",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game_state(session_id))

    action_responses = {404: {"model": ErrorResponse, "description": "Session not found"}}

    @app.post(
        "/api/v1/sessions/{session_id}/answer",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Submit a guess",
    )
    async def answer(session_id: str, body: AnswerRequest) -> Union[ActionResponse, JSONResponse]:
        """
        Resolve a guess against the current question.

        A match reveals the answer (with points if a team is selected);
        a miss counts as an error for the selected team.
        """
        return respond(api_service.answer(session_id, body.text))

    @app.post(
        "/api/v1/sessions/{session_id}/reveal",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Reveal an answer by number",
    )
    async def reveal(session_id: str, body: RevealRequest) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.reveal(session_id, body.rank))

    @app.post(
        "/api/v1/sessions/{session_id}/error",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Record an error for the selected team",
    )
    async def add_error(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.add_error(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/team",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Select or deselect the answering team",
    )
    async def select_team(
        session_id: str, body: SelectTeamRequest
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.select_team(session_id, body.team_id))

    @app.post(
        "/api/v1/sessions/{session_id}/next-round",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Advance to the next round",
    )
    async def next_round(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.next_round(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/undo",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Undo the last action",
    )
    async def undo(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.undo(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/key",
        response_model=ActionResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Send a host key press",
    )
    async def press_key(
        session_id: str,
        body: KeyRequest,
        verbose: bool = Query(True, description="Include game state in the response"),
    ) -> Union[ActionResponse, JSONResponse]:
        """Same keyboard layout as the console: S Z R E Q W X P 1-9."""
        response = await api_service.press_key(session_id, body.key)
        if isinstance(response, ActionResponse) and not verbose:
            response.game_state = None
        return respond(response)

    return app
