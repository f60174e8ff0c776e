"""
Pytest fixtures for Familiada tests.
"""

import random

import pytest

from ..dataset import QuestionDataset
from ..engine_core.game import Game
from ..engine_core.question_store import QuestionStore
from ..engine_core.state import Team, TeamId
from ..presentation.adapter import EffectApplier
from ..presentation.audio import SilentAudio
from ..presentation.board import TextBoard
from ..presentation.speech import ScriptedRecognizer
from ..session.controller import HostController


RAW_QUESTIONS = {
    "Ulubione zwierzę domowe": [
        {"lp": 1, "ans": "kot", "points": 40},
        {"lp": 2, "ans": "pies", "points": 30},
    ],
    "Co pływa w stawie?": [
        {"lp": 1, "ans": "żółw", "points": 50},
        {"lp": 2, "ans": "łabędź", "points": 25},
        {"lp": 3, "ans": "kaczka", "points": 15},
        None,
    ],
}


@pytest.fixture
def raw_questions() -> dict:
    """Two questions, the second one with diacritics and a null record."""
    return RAW_QUESTIONS


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store(raw_questions) -> QuestionStore:
    """Sequential store over the two test questions."""
    return QuestionStore(raw_questions)


@pytest.fixture
def make_game(raw_questions, rng):
    """
    Factory for games with a chosen starting team.

    The active team is set directly so the undo stack starts empty.
    """
    def factory(team=TeamId.BLUE, questions=None):
        game = Game(
            [Team(TeamId.BLUE), Team(TeamId.RED)],
            QuestionStore(questions or raw_questions),
            rng=rng,
        )
        game.current_team_id = team
        return game
    return factory


@pytest.fixture
def game(make_game) -> Game:
    """Game on the kot/pies question with blue active."""
    return make_game()


@pytest.fixture
def dataset(raw_questions) -> QuestionDataset:
    return QuestionDataset.model_validate({"random": False, "questions": raw_questions})


@pytest.fixture
def board() -> TextBoard:
    return TextBoard()


@pytest.fixture
def audio() -> SilentAudio:
    return SilentAudio()


@pytest.fixture
def recognizer() -> ScriptedRecognizer:
    return ScriptedRecognizer()


@pytest.fixture
def controller(game, board, audio, recognizer) -> HostController:
    """Controller wired to a text board, silent audio and scripted speech."""
    controller = HostController(game, EffectApplier(board, audio), recognizer)
    controller.start()
    return controller
