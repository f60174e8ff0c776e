"""
Question Store - Ordered questions with a circular cursor.
"""

from __future__ import annotations
import logging
import random
from typing import Any, Iterable, Mapping

from .state import Answer, Question

logger = logging.getLogger(__name__)


class QuestionStore:
    """
    Stores the questions for a session.

    Questions are served in dataset order, or in an order shuffled once at
    construction. The cursor wraps around, so the store never runs dry.
    """

    def __init__(
        self,
        raw_questions: Mapping[str, Iterable[Any]],
        randomize: bool = False,
        rng: random.Random | None = None,
    ):
        self.randomize = randomize is True
        self._rng = rng or random.Random()
        self._questions = self._parse_questions(raw_questions)
        self._cursor = 0

        if self.randomize:
            self._questions = self._shuffle(self._questions)

        logger.debug(
            "Loaded %d questions (randomize=%s)", len(self._questions), self.randomize
        )

    @staticmethod
    def _parse_questions(raw_questions: Mapping[str, Iterable[Any]]) -> list[Question]:
        questions = []
        for text, records in raw_questions.items():
            answers = [Answer.from_record(r) for r in records if r]
            questions.append(Question(text=text, answers=tuple(answers)))
        return questions

    def _shuffle(self, questions: list[Question]) -> list[Question]:
        """Fisher-Yates shuffle into a new list."""
        shuffled = questions.copy()
        for i in range(len(shuffled) - 1, 0, -1):
            j = self._rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def __len__(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> list[Question]:
        return list(self._questions)

    @property
    def cursor(self) -> int:
        """Index of the question the next call to next_question() returns."""
        return self._cursor

    def next_question(self) -> Question | None:
        """Return the question at the cursor and advance, wrapping at the end."""
        if not self._questions:
            return None
        question = self._questions[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._questions)
        return question

    def set_cursor(self, index: int):
        """Set the cursor (used by undo). Any integer is wrapped into range."""
        if not self._questions:
            self._cursor = 0
            return
        # Python's modulo is already non-negative for a positive divisor
        self._cursor = index % len(self._questions)

    def random_index(self) -> int | None:
        """Uniformly random index, independent of the cursor. None when empty."""
        if not self._questions:
            return None
        return self._rng.randrange(len(self._questions))

    def random_question(self) -> Question | None:
        index = self.random_index()
        if index is None:
            return None
        return self._questions[index]
