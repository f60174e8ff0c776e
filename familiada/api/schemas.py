"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the host console UI and the
engine. Unrevealed answers are never sent: their text and points are null
until they are on the board.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_DATASET: Uploaded dataset failed validation
- NOT_FOUND: Answer number not in the current question
- NO_ACTIVE_TEAM / ROUND_FINISHED / NO_PENDING_ROUND / GAME_OVER / EMPTY_UNDO:
  the operation does not apply to the current game state
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..dataset import QuestionDataset
from ..errors import ErrorCode


# =============================================================================
# Enums
# =============================================================================

class TeamSlot(str, Enum):
    """Team identifiers."""
    BLUE = "blue"
    RED = "red"


class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ENDED = "ended"


# =============================================================================
# Shared Models
# =============================================================================

class TeamInfo(BaseModel):
    """Team information for display."""
    team_id: TeamSlot
    name: str
    points: int = 0
    errors: int = 0
    is_active: bool = False


class AnswerSlotInfo(BaseModel):
    """One row of the board."""
    rank: int
    revealed: bool = False
    text: Optional[str] = Field(None, description="Only set once revealed")
    points: Optional[int] = Field(None, description="Only set once revealed")


class RoundInfo(BaseModel):
    """State of the round in play."""
    round_count: int
    question: str
    status: str = Field(description="default or stolen")
    points: int = Field(description="Round pot before the multiplier")
    multiplier: int
    right: int
    answer_count: int
    pending_next_round: bool


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Start a new game."""
    randomize: Optional[bool] = Field(None, description="Override the dataset's shuffle flag")
    seed: Optional[int] = Field(None, description="Seed for question order and starting team")
    dataset: Optional[QuestionDataset] = Field(None, description="Inline dataset; default is the server's")
    blue_name: Optional[str] = None
    red_name: Optional[str] = None


class AnswerRequest(BaseModel):
    """A typed or transcribed guess."""
    text: str


class RevealRequest(BaseModel):
    """Reveal an answer by board number."""
    rank: int = Field(ge=1, le=9)


class SelectTeamRequest(BaseModel):
    """Select the answering team; null deselects."""
    team_id: Optional[TeamSlot] = None


class KeyRequest(BaseModel):
    """A raw host key press."""
    key: str = Field(min_length=1, max_length=1)


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    round: RoundInfo
    answers: list[AnswerSlotInfo] = Field(default_factory=list)
    teams: list[TeamInfo] = Field(default_factory=list)
    current_team: Optional[TeamSlot] = None
    winner: Optional[TeamSlot] = None
    can_undo: bool = False
    score_overlay_visible: bool = False
    board_text: str = ""


class SessionResponse(BaseModel):
    """Session metadata plus the current game state."""
    session_id: str
    status: SessionStatus
    created_at: float
    game_state: GameStateResponse


class ActionResponse(BaseModel):
    """Result of a host action."""
    success: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    changes: list[str] = Field(default_factory=list)
    game_state: Optional[GameStateResponse] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class SessionListResponse(BaseModel):
    sessions: list[str] = Field(default_factory=list)
    count: int = 0


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    active_sessions: int = 0
