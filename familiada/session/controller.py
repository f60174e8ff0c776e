"""
Host Controller - Maps the host's keyboard and microphone to the game.

Keyboard layout:
    S      toggle score overlay (always available)
    Z      undo (always available)
    R      listen for an answer
    E      deselect team
    Q / W  select blue / red team
    X      error for the selected team
    P      next round
    1-9    reveal answer by number

While the score overlay is up only S and Z are accepted.
"""

from __future__ import annotations
import logging

from ..engine_core.action import ActionResult
from ..engine_core.game import Game
from ..engine_core.state import TeamId
from ..errors import ErrorCode, RecognitionFailure
from ..presentation.adapter import EffectApplier
from ..presentation.interfaces import SpeechRecognizer

logger = logging.getLogger(__name__)

ALWAYS_AVAILABLE_KEYS = {"s", "z"}


class HostController:
    """
    Drives a Game from host input and applies the resulting effects.

    Usage:
        controller = HostController(game, applier, recognizer)
        controller.start()
        await controller.handle_key("q")
        controller.answer("kot")
    """

    def __init__(
        self,
        game: Game,
        applier: EffectApplier,
        recognizer: SpeechRecognizer | None = None,
    ):
        self.game = game
        self.applier = applier
        self.recognizer = recognizer
        self.score_overlay_visible = False

        if self.game.capture_presentation is None:
            self.game.capture_presentation = self.applier.capture

    def start(self):
        """Draw the initial board and prime the recognizer."""
        self.applier.apply(self.game.opening_effects())
        self._reload_grammar()

    @property
    def speech_supported(self) -> bool:
        return self.recognizer is not None and self.recognizer.is_supported()

    # =========================================================================
    # Input
    # =========================================================================

    async def handle_key(self, key: str) -> ActionResult:
        """Handle one key press, including R which listens for speech."""
        if key.lower() == "r" and not self.score_overlay_visible:
            return await self.listen()
        return self.dispatch(key)

    def dispatch(self, key: str) -> ActionResult:
        """Handle every key except R synchronously."""
        key = key.lower()

        if self.score_overlay_visible and key not in ALWAYS_AVAILABLE_KEYS:
            return ActionResult.ok(changes=["Score overlay visible, key ignored"])

        if key == "s":
            self.score_overlay_visible = not self.score_overlay_visible
            return ActionResult.ok(
                changes=[f"Score overlay {'shown' if self.score_overlay_visible else 'hidden'}"]
            )
        if key == "z":
            return self.undo()

        if key == "e":
            return self.select_team(None)
        if key == "q":
            return self.select_team(TeamId.BLUE)
        if key == "w":
            return self.select_team(TeamId.RED)
        if key == "x":
            return self.add_error()
        if key == "p":
            return self.next_round()
        if len(key) == 1 and key in "123456789":
            return self.reveal(int(key))

        return ActionResult.failure(f"Unknown key: {key!r}", error_code=ErrorCode.UNKNOWN_COMMAND)

    def answer(self, text: str) -> ActionResult:
        """A typed or already-transcribed guess."""
        return self._run(self.game.handle_player_answer(text))

    def reveal(self, rank: int) -> ActionResult:
        return self._run(self.game.reveal_answer_by_number(rank))

    def add_error(self) -> ActionResult:
        return self._run(self.game.add_error_for_selected_team())

    def select_team(self, team_id: TeamId | None) -> ActionResult:
        return self._run(self.game.set_current_team(team_id))

    async def listen(self) -> ActionResult:
        """
        Listen for one answer.

        A failed recognition counts as a guess that matched nothing.
        """
        if not self.speech_supported:
            return ActionResult.failure(
                "Speech recognition is not supported",
                error_code=ErrorCode.UNSUPPORTED_CAPABILITY,
            )
        try:
            transcript = await self.recognizer.start()
        except RecognitionFailure as e:
            logger.warning("Recognition failed: %s", e.reason)
            transcript = ""
        logger.debug("Heard %r", transcript)
        return self.answer(transcript)

    def next_round(self) -> ActionResult:
        result = self._run(self.game.advance_to_next_round())
        if result.success:
            self._reload_grammar()
        return result

    def undo(self) -> ActionResult:
        result = self._run(self.game.undo())
        if result.success:
            self._reload_grammar()
        return result

    # =========================================================================
    # Helpers
    # =========================================================================

    def _run(self, result: ActionResult) -> ActionResult:
        if result.success:
            self.applier.apply(result.effects)
            for change in result.changes:
                logger.debug(change)
        else:
            logger.debug("Rejected: %s (%s)", result.error, result.error_code)
        return result

    def _reload_grammar(self):
        if self.speech_supported:
            self.recognizer.load_grammar(self.game.answer_words())
