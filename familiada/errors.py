"""
Errors - Exceptions for setup defects and collaborator failures.

Business conditions (wrong guess, unknown rank, no active team, empty undo
stack) are never raised: they come back as ActionResult failures carrying an
ErrorCode. Only the conditions below are exceptions.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes carried by failed ActionResults."""
    NOT_FOUND = "NOT_FOUND"
    NO_ACTIVE_TEAM = "NO_ACTIVE_TEAM"
    NO_PENDING_ROUND = "NO_PENDING_ROUND"
    ROUND_FINISHED = "ROUND_FINISHED"
    GAME_OVER = "GAME_OVER"
    EMPTY_UNDO = "EMPTY_UNDO"
    UNSUPPORTED_CAPABILITY = "UNSUPPORTED_CAPABILITY"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"

    # Host API
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_DATASET = "INVALID_DATASET"


class FamiliadaError(Exception):
    """Base class for engine exceptions."""


class ConfigurationError(FamiliadaError):
    """A required collaborator or setup value is missing or invalid. Fatal."""


class DatasetError(ConfigurationError):
    """The question dataset could not be read or failed validation."""


class UnsupportedCapability(FamiliadaError):
    """Speech recognition was started on a recognizer that is not supported."""


class RecognitionFailure(FamiliadaError):
    """The recognizer heard nothing usable or reported an error."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
