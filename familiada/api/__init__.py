"""
API Module - Host console interface.

Exposes the engine via REST API so a game can be run from a browser:
1. Start a session
2. Select teams, submit guesses, reveal answers
3. Advance rounds and undo mistakes

All state is session-scoped and held in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    AnswerRequest,
    RevealRequest,
    SelectTeamRequest,
    KeyRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    ActionResponse,
    ErrorResponse,
    # Shared
    TeamInfo,
    AnswerSlotInfo,
    RoundInfo,
    TeamSlot,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "AnswerRequest",
    "RevealRequest",
    "SelectTeamRequest",
    "KeyRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "ActionResponse",
    "ErrorResponse",
    # Shared
    "TeamInfo",
    "AnswerSlotInfo",
    "RoundInfo",
    "TeamSlot",
    # Service
    "APIService",
    "create_app",
]
