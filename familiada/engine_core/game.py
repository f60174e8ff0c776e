"""
Game - Orchestrates teams, rounds and the question store.

The game is the single point of state mutation. Every external event (key
press, recognized speech, button click) maps to one Game method, which:
1. Validates the event against the current state
2. Pushes an undo snapshot
3. Mutates Round / Team / QuestionStore
4. Returns an ActionResult with the effects to render

Business conditions (unknown rank, no active team, nothing to undo) are
returned as failures, never raised.
"""

from __future__ import annotations
import logging
import random
from dataclasses import replace
from typing import Any, Callable, Iterable

from ..errors import ConfigurationError, ErrorCode
from .action import ActionResult, Effect
from .matching import match_answer
from .question_store import QuestionStore
from .round import Round, RoundEvent
from .state import Answer, GameSnapshot, Team, TeamId, TeamState

logger = logging.getLogger(__name__)

WIN_THRESHOLD = 400


class Game:
    """
    One play-through of the show.

    Usage:
        game = Game([Team(TeamId.BLUE), Team(TeamId.RED)], store)
        result = game.handle_player_answer("kot")
        applier.apply(result.effects)
    """

    def __init__(
        self,
        teams: Iterable[Team],
        question_store: QuestionStore,
        rng: random.Random | None = None,
        capture_presentation: Callable[[], Any] | None = None,
    ):
        teams = list(teams)
        if sorted(t.team_id.value for t in teams) != sorted(t.value for t in TeamId):
            raise ConfigurationError("A game needs exactly one blue and one red team")

        self._teams: dict[TeamId, Team] = {t.team_id: t for t in teams}
        self.question_store = question_store
        self._rng = rng or random.Random()
        self.capture_presentation = capture_presentation

        question = self.question_store.next_question()
        if question is None:
            raise ConfigurationError("Question store is empty")

        self.round = Round(question)
        self.round_count = 1
        self.pending_next_round = False
        self.winner: TeamId | None = None
        self.current_team_id: TeamId | None = None
        self._undo_stack: list[GameSnapshot] = []

        self._choose_random_team()

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def teams(self) -> list[Team]:
        return [self._teams[TeamId.BLUE], self._teams[TeamId.RED]]

    def get_team(self, team_id: TeamId) -> Team:
        return self._teams[team_id]

    @property
    def current_team(self) -> Team | None:
        if self.current_team_id is None:
            return None
        return self._teams[self.current_team_id]

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def answer_words(self) -> list[str]:
        """Answer texts of the current question, for the speech grammar."""
        return self.round.question.answer_words()

    def snapshot(self) -> GameSnapshot:
        """Value copy of the full mutable state."""
        return GameSnapshot(
            round_count=self.round_count,
            pending_next_round=self.pending_next_round,
            current_team=self.current_team_id,
            winner=self.winner,
            store_cursor=self.question_store.cursor,
            question=self.round.question,
            round_status=self.round.status,
            round_points=self.round.points,
            round_right=self.round.right,
            revealed=frozenset(self.round.revealed),
            teams=tuple(TeamState(t.team_id, t.points, t.errors) for t in self.teams),
        )

    def opening_effects(self) -> list[Effect]:
        """Effects that draw the whole board from scratch."""
        effects = [Effect.clear_board()]
        effects.extend(self.round.opening_effects())
        for answer in sorted(self.round.question.answers, key=lambda a: a.rank):
            if self.round.is_revealed(answer.rank):
                effects.append(Effect.set_answer(answer))
        for team in self.teams:
            effects.append(Effect.set_points(team.team_id, team.points))
            effects.append(Effect.set_errors(team.team_id, team.errors))
        effects.append(Effect.set_active_team(self.current_team_id))
        if self.winner is not None:
            effects.append(Effect.finish_game(self.winner))
        return effects

    # =========================================================================
    # Player events
    # =========================================================================

    def handle_player_answer(self, player_answer: str) -> ActionResult:
        """
        Resolve a spoken or typed guess.

        Match + active team -> reveal with points
        Match + no team     -> reveal without points
        Miss + active team  -> error for that team
        Miss + no team      -> nothing
        """
        if self.is_over:
            return self._game_over()

        answer = match_answer(player_answer, self.round.question.answers)
        team = self.current_team

        if answer is None and team is not None and self.pending_next_round:
            return self._round_finished()

        self._push_undo_snapshot()

        if answer is not None:
            return self._reveal(answer)
        if team is not None:
            return self._record_error(team)

        logger.debug("Unmatched answer %r with no active team ignored", player_answer)
        return ActionResult.ok(changes=[f"No match for {player_answer!r}"])

    def reveal_answer_by_number(self, rank: int) -> ActionResult:
        """Reveal an answer by its board position, with the same dispatch as a guess."""
        if self.is_over:
            return self._game_over()

        answer = self.round.question.get_answer(rank)
        if answer is None:
            return ActionResult.failure(
                f"Answer {rank} not in current question", error_code=ErrorCode.NOT_FOUND
            )

        self._push_undo_snapshot()
        return self._reveal(answer)

    def add_error_for_selected_team(self) -> ActionResult:
        """Manual error entry for the active team."""
        if self.is_over:
            return self._game_over()

        team = self.current_team
        if team is None:
            return ActionResult.failure("No team selected", error_code=ErrorCode.NO_ACTIVE_TEAM)
        if self.pending_next_round:
            return self._round_finished()

        self._push_undo_snapshot()
        return self._record_error(team)

    def set_current_team(self, team_id: TeamId | None) -> ActionResult:
        """Select the answering team, or None to deselect."""
        if self.is_over:
            return self._game_over()

        self._push_undo_snapshot()
        self.current_team_id = team_id
        logger.debug("Active team set to %s", team_id.value if team_id else None)
        return ActionResult.ok(
            effects=[Effect.set_active_team(team_id)],
            changes=[f"Active team: {team_id.value if team_id else 'none'}"],
        )

    def advance_to_next_round(self) -> ActionResult:
        """Start the next round, if the current one has been decided."""
        if self.is_over:
            return self._game_over()
        if not self.pending_next_round:
            return ActionResult.failure(
                "Current round is still in play", error_code=ErrorCode.NO_PENDING_ROUND
            )

        self._push_undo_snapshot()
        self.pending_next_round = False
        for team in self.teams:
            team.reset_errors()
        self.round_count += 1
        # The store is non-empty (checked at construction) so this never returns None
        self.round = Round(self.question_store.next_question())
        self._choose_random_team()

        logger.info("Round %d: %s", self.round_count, self.round.question.text)

        effects = [Effect.clear_board()]
        effects.extend(self.round.opening_effects())
        effects.extend(Effect.set_errors(t.team_id, 0) for t in self.teams)
        effects.append(Effect.set_active_team(self.current_team_id))
        return ActionResult.ok(effects=effects, changes=[f"Round {self.round_count} started"])

    # =========================================================================
    # Undo
    # =========================================================================

    def undo(self) -> ActionResult:
        """
        Restore the state from before the last accepted operation.

        Never pushes a snapshot itself: there is no redo.
        """
        if not self._undo_stack:
            return ActionResult.failure("Nothing to undo", error_code=ErrorCode.EMPTY_UNDO)

        snapshot = self._undo_stack.pop()
        self._restore(snapshot)
        logger.debug("Undo restored round %d (depth now %d)", self.round_count, self.undo_depth)

        effects = self.opening_effects()
        if snapshot.presentation is not None:
            effects.append(Effect.restore_presentation(snapshot.presentation))
        return ActionResult.ok(effects=effects, changes=["Undo"])

    def _push_undo_snapshot(self):
        snapshot = self.snapshot()
        if self.capture_presentation is not None:
            snapshot = replace(snapshot, presentation=self.capture_presentation())
        self._undo_stack.append(snapshot)

    def _restore(self, snapshot: GameSnapshot):
        self.round_count = snapshot.round_count
        self.pending_next_round = snapshot.pending_next_round
        self.winner = snapshot.winner
        self.current_team_id = snapshot.current_team
        self.question_store.set_cursor(snapshot.store_cursor)

        for state in snapshot.teams:
            team = self._teams.get(state.team_id)
            if team is None:
                continue
            team.set_points(state.points)
            team.set_errors(state.errors)

        self.round = Round(
            snapshot.question,
            status=snapshot.round_status,
            points=snapshot.round_points,
            right=snapshot.round_right,
            revealed=snapshot.revealed,
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def _reveal(self, answer: Answer) -> ActionResult:
        team = self.current_team
        awarding = team is not None and not self.pending_next_round

        update = self.round.reveal(answer, awarding)
        if update.event == RoundEvent.NO_CHANGE:
            return ActionResult.ok(changes=[f"Answer {answer.rank} already revealed"])

        effects = list(update.effects)
        changes = [f"Revealed {answer.rank}. {answer.text} ({answer.points})"]

        if awarding and update.event in (RoundEvent.ROUND_COMPLETE, RoundEvent.STEAL_SUCCEEDED):
            effects.extend(self._close_round(earner=team, next_team=team.team_id.opponent))
            changes.append(f"Round won by {team.team_id.value}")
        elif update.event == RoundEvent.ROUND_COMPLETE:
            self.pending_next_round = True

        return ActionResult.ok(effects=effects, changes=changes)

    def _record_error(self, team: Team) -> ActionResult:
        update = self.round.record_error(team)
        effects = list(update.effects)
        changes = [f"Error for {team.team_id.value} ({team.errors})"]

        if update.event == RoundEvent.STEAL_STARTED:
            self.current_team_id = team.team_id.opponent
            effects.append(Effect.set_active_team(self.current_team_id))
            changes.append(f"{self.current_team_id.value} may steal")
            logger.debug("Steal opened for %s", self.current_team_id.value)
        elif update.event == RoundEvent.STEAL_FAILED:
            earner = self._teams[team.team_id.opponent]
            effects.extend(self._close_round(earner=earner, next_team=earner.team_id))
            changes.append(f"Steal failed, round goes to {earner.team_id.value}")

        return ActionResult.ok(effects=effects, changes=changes)

    def _close_round(self, earner: Team, next_team: TeamId) -> list[Effect]:
        """Credit the round's points and either end the game or hand over."""
        gained = self.round.award(self.round_count)
        earner.add_points(gained)
        effects = [Effect.set_points(earner.team_id, earner.points)]
        logger.info(
            "Round %d: %s gains %d (total %d)",
            self.round_count, earner.team_id.value, gained, earner.points,
        )

        if earner.points >= WIN_THRESHOLD:
            self.winner = earner.team_id
            logger.info("Game won by %s with %d points", earner.team_id.value, earner.points)
            effects.append(Effect.finish_game(earner.team_id))
            return effects

        self.current_team_id = next_team
        self.pending_next_round = True
        effects.append(Effect.set_active_team(next_team))
        return effects

    def _choose_random_team(self):
        self.current_team_id = self._rng.choice([TeamId.BLUE, TeamId.RED])

    def _game_over(self) -> ActionResult:
        return ActionResult.failure(
            f"Game over, {self.winner.value} won", error_code=ErrorCode.GAME_OVER
        )

    def _round_finished(self) -> ActionResult:
        return ActionResult.failure(
            "Round already decided, advance to the next round",
            error_code=ErrorCode.ROUND_FINISHED,
        )
