"""
Effect Applier - Routes engine effects to the board and the speakers.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..engine_core.action import Effect, EffectType
from ..errors import ConfigurationError
from .interfaces import AudioPlayer, Presentation

logger = logging.getLogger(__name__)


class EffectApplier:
    """Forwards engine effects to the board and the speakers.

    Both collaborators are required: a missing one is a setup defect and
    fails at construction rather than mid-game.
    """

    def __init__(self, presentation: Presentation | None, audio: AudioPlayer | None) -> None:
        if presentation is None:
            raise ConfigurationError("No presentation target configured")
        if audio is None:
            raise ConfigurationError("No audio player configured")
        self.presentation = presentation
        self.audio = audio

    def capture(self):
        """Presentation blob to store next to an undo snapshot."""
        return self.presentation.capture_state()

    def apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            self.apply_one(effect)

    def apply_one(self, effect: Effect) -> None:
        p = self.presentation
        kind = effect.effect_type
        if kind == EffectType.SET_QUESTION:
            p.set_question(effect.text or "")
        elif kind == EffectType.SHOW_ANSWER_ROWS:
            p.show_answer_rows(effect.value or 0)
        elif kind == EffectType.SET_ANSWER:
            p.set_answer(effect.rank, effect.text or "", effect.value or 0)
        elif kind == EffectType.CLEAR_BOARD:
            p.clear_board()
        elif kind == EffectType.SET_POINTS:
            p.set_points(effect.team_id, effect.value or 0)
        elif kind == EffectType.SET_ERRORS:
            p.set_errors(effect.team_id, effect.value or 0)
        elif kind == EffectType.SET_ACTIVE_TEAM:
            p.set_active_team(effect.team_id)
        elif kind == EffectType.FINISH_GAME:
            p.finish_game(effect.team_id)
        elif kind == EffectType.RESTORE_PRESENTATION:
            p.restore_state(effect.blob)
        elif kind == EffectType.PLAY_REVEAL:
            self.audio.play_reveal()
        elif kind == EffectType.PLAY_WRONG:
            self.audio.play_wrong()
        else:  # pragma: no cover - enum is closed
            logger.warning("Unhandled effect type: %s", kind)
