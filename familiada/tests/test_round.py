"""
Tests for the Round state machine.
"""

from ..engine_core.action import EffectType
from ..engine_core.round import Round, RoundEvent, round_multiplier
from ..engine_core.state import Answer, Question, RoundStatus, Team, TeamId


def make_round():
    return Round(Question("Q", (Answer("kot", 1, 40), Answer("pies", 2, 30))))


class TestRoundMultiplier:
    def test_multipliers(self):
        assert [round_multiplier(n) for n in range(1, 7)] == [1, 1, 1, 2, 3, 1]


class TestReveal:
    def test_reveal_accumulates_points(self):
        rnd = make_round()

        update = rnd.reveal(Answer("kot", 1, 40), awarding=True)

        assert update.event == RoundEvent.REVEALED
        assert rnd.points == 40
        assert rnd.right == 1
        assert [e.effect_type for e in update.effects] == [
            EffectType.SET_ANSWER, EffectType.PLAY_REVEAL,
        ]

    def test_reveal_is_idempotent(self):
        """Revealing the same rank twice changes nothing the second time."""
        rnd = make_round()
        rnd.reveal(Answer("kot", 1, 40), awarding=True)

        update = rnd.reveal(Answer("kot", 1, 40), awarding=True)

        assert update.event == RoundEvent.NO_CHANGE
        assert update.effects == []
        assert rnd.points == 40
        assert rnd.right == 1

    def test_non_awarding_reveal_counts_but_scores_nothing(self):
        rnd = make_round()

        rnd.reveal(Answer("kot", 1, 40), awarding=False)

        assert rnd.right == 1
        assert rnd.points == 0

    def test_last_reveal_completes_round(self):
        rnd = make_round()
        rnd.reveal(Answer("kot", 1, 40), awarding=True)

        update = rnd.reveal(Answer("pies", 2, 30), awarding=True)

        assert update.event == RoundEvent.ROUND_COMPLETE
        assert rnd.is_complete
        assert rnd.award(1) == 70
        assert rnd.award(5) == 210

    def test_awarding_reveal_while_stolen(self):
        rnd = make_round()
        rnd.status = RoundStatus.STOLEN

        update = rnd.reveal(Answer("pies", 2, 30), awarding=True)

        assert update.event == RoundEvent.STEAL_SUCCEEDED


class TestErrors:
    def test_third_error_opens_steal(self):
        rnd = make_round()
        team = Team(TeamId.BLUE)

        events = [rnd.record_error(team).event for _ in range(3)]

        assert events == [RoundEvent.ERROR, RoundEvent.ERROR, RoundEvent.STEAL_STARTED]
        assert rnd.status == RoundStatus.STOLEN
        assert team.errors == 3

    def test_error_while_stolen_fails_steal(self):
        rnd = make_round()
        rnd.status = RoundStatus.STOLEN
        team = Team(TeamId.RED)

        update = rnd.record_error(team)

        assert update.event == RoundEvent.STEAL_FAILED
        assert team.errors == 1

    def test_error_effects(self):
        rnd = make_round()
        team = Team(TeamId.RED)

        update = rnd.record_error(team)

        assert update.effects[0].effect_type == EffectType.SET_ERRORS
        assert update.effects[0].team_id == TeamId.RED
        assert update.effects[0].value == 1
        assert update.effects[1].effect_type == EffectType.PLAY_WRONG
