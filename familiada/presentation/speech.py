"""
Speech - Reference recognizers.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, List, Optional, Sequence

from ..errors import RecognitionFailure, UnsupportedCapability
from .interfaces import SpeechRecognizer

logger = logging.getLogger(__name__)


class ScriptedRecognizer(SpeechRecognizer):
    """Recognizer fed from a queue of transcripts.

    A None entry stands for an utterance that matched nothing. Used by tests
    and by the console, where typed lines stand in for speech.
    """

    def __init__(self, transcripts: Iterable[Optional[str]] = ()) -> None:
        self._queue = deque(transcripts)
        self.grammar: List[str] = []

    def feed(self, transcript: Optional[str]) -> None:
        self._queue.append(transcript)

    def is_supported(self) -> bool:
        return True

    def load_grammar(self, words: Sequence[str]) -> None:
        self.grammar = list(words)
        logger.debug("Grammar loaded with %d words", len(self.grammar))

    async def start(self) -> str:
        if not self._queue:
            raise RecognitionFailure("Error occurred in recognition: no-speech")
        transcript = self._queue.popleft()
        if transcript is None:
            raise RecognitionFailure("No match")
        return transcript


class UnavailableRecognizer(SpeechRecognizer):
    """Placeholder for hosts without speech recognition."""

    def is_supported(self) -> bool:
        return False

    def load_grammar(self, words: Sequence[str]) -> None:
        return None

    async def start(self) -> str:
        raise UnsupportedCapability("Speech recognition is not supported")
