"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of the show:
- Created when the host starts a game
- Holds the game, its board and the host controller
- Destroyed when the host ends it

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .controller import HostController
from .manager import SessionManager, Session, SessionState, build_session

__all__ = [
    "HostController",
    "SessionManager",
    "Session",
    "SessionState",
    "build_session",
]
