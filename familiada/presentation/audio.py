"""
Audio - Reference sound players for the console, the API and tests.
"""

from __future__ import annotations

import logging
import sys
from typing import List, TextIO

from .interfaces import AudioPlayer

logger = logging.getLogger(__name__)


class SilentAudio(AudioPlayer):
    """Records requested sounds without playing anything (tests, API)."""

    def __init__(self) -> None:
        self.played: List[str] = []

    def play_reveal(self) -> None:
        self.played.append("reveal")

    def play_wrong(self) -> None:
        self.played.append("wrong")


class BellAudio(AudioPlayer):
    """Terminal bell on a wrong answer; reveals are silent."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def play_reveal(self) -> None:
        logger.debug("Reveal sound")

    def play_wrong(self) -> None:
        try:
            self.stream.write("\a")
            self.stream.flush()
        except OSError as e:
            logger.debug("Bell failed: %s", e)
