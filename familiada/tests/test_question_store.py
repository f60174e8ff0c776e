"""
Tests for QuestionStore and answer matching.
"""

import random

import pytest

from ..engine_core.matching import match_answer, normalize_answer
from ..engine_core.question_store import QuestionStore
from ..engine_core.state import Answer, Question


def numbered_questions(count):
    return {
        f"Pytanie {n}": [{"lp": 1, "ans": f"odp {n}", "points": 10}]
        for n in range(count)
    }


class TestQuestionStore:
    """Cursor and ordering behavior."""

    def test_sequential_order(self, store):
        """Questions come out in dataset order."""
        assert store.next_question().text == "Ulubione zwierzę domowe"
        assert store.next_question().text == "Co pływa w stawie?"

    def test_wraps_after_n_plus_one_calls(self):
        """N questions: call N+1 returns the first question again."""
        store = QuestionStore(numbered_questions(4))
        seen = [store.next_question().text for _ in range(5)]

        assert seen[:4] == ["Pytanie 0", "Pytanie 1", "Pytanie 2", "Pytanie 3"]
        assert seen[4] == "Pytanie 0"

    def test_null_records_dropped(self, store):
        """Null answer records are skipped when loading."""
        store.next_question()
        question = store.next_question()

        assert question.answer_count == 3
        assert question.ranks == frozenset({1, 2, 3})

    def test_set_cursor_wraps_any_integer(self):
        store = QuestionStore(numbered_questions(3))

        store.set_cursor(-1)
        assert store.cursor == 2
        assert store.next_question().text == "Pytanie 2"

        store.set_cursor(7)
        assert store.cursor == 1

    def test_empty_store(self):
        """An empty store serves nothing and keeps the cursor at zero."""
        store = QuestionStore({})

        assert len(store) == 0
        assert store.next_question() is None
        store.set_cursor(5)
        assert store.cursor == 0
        assert store.random_index() is None
        assert store.random_question() is None

    def test_shuffle_is_deterministic_for_a_seed(self):
        raw = numbered_questions(10)
        first = QuestionStore(raw, randomize=True, rng=random.Random(7))
        second = QuestionStore(raw, randomize=True, rng=random.Random(7))

        assert [q.text for q in first.questions] == [q.text for q in second.questions]

    def test_shuffle_keeps_every_question(self):
        raw = numbered_questions(10)
        store = QuestionStore(raw, randomize=True, rng=random.Random(3))

        assert sorted(q.text for q in store.questions) == sorted(raw)

    def test_randomize_requires_true(self):
        """Only a real True turns shuffling on."""
        store = QuestionStore(numbered_questions(3), randomize="yes")

        assert store.randomize is False
        assert [q.text for q in store.questions] == ["Pytanie 0", "Pytanie 1", "Pytanie 2"]

    def test_random_question_does_not_move_cursor(self):
        store = QuestionStore(numbered_questions(5), rng=random.Random(11))
        store.next_question()

        question = store.random_question()

        assert question.text in numbered_questions(5)
        assert store.cursor == 1


class TestQuestion:
    def test_duplicate_ranks_rejected(self):
        with pytest.raises(ValueError):
            Question("Q", (Answer("a", 1, 10), Answer("b", 1, 5)))

    def test_from_record_accepts_both_key_styles(self):
        short = Answer.from_record({"lp": 2, "ans": "kot", "points": 30})
        long = Answer.from_record({"rank": 2, "text": "kot", "points": 30})

        assert short == long == Answer("kot", 2, 30)


class TestMatching:
    """Answer normalization."""

    @pytest.mark.parametrize("guess", ["Żółw", "zolw", "  ŻÓŁW ", "zółw"])
    def test_diacritics_and_case_folded(self, guess):
        answers = [Answer("żółw", 1, 50), Answer("kaczka", 2, 15)]

        assert match_answer(guess, answers) == answers[0]

    def test_whitespace_collapsed(self):
        assert normalize_answer("myję   zęby") == "myje zeby"

    def test_empty_guess_matches_nothing(self):
        answers = [Answer("kot", 1, 40)]

        assert match_answer("", answers) is None
        assert match_answer("   ", answers) is None

    def test_no_partial_matches(self):
        assert match_answer("ko", [Answer("kot", 1, 40)]) is None
