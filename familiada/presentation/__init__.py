"""
Presentation - Collaborators that show, sound and hear the game.

The engine only produces effect descriptors. This package defines the
collaborator interfaces, the applier that routes effects to them, and small
reference implementations for the console and the HTTP API.
"""

from .interfaces import AudioPlayer, Presentation, SpeechRecognizer
from .adapter import EffectApplier
from .board import TextBoard, BoardState, fill_answer_field
from .audio import BellAudio, SilentAudio
from .speech import ScriptedRecognizer, UnavailableRecognizer

__all__ = [
    "AudioPlayer",
    "Presentation",
    "SpeechRecognizer",
    "EffectApplier",
    "TextBoard",
    "BoardState",
    "fill_answer_field",
    "BellAudio",
    "SilentAudio",
    "ScriptedRecognizer",
    "UnavailableRecognizer",
]
