"""
Tests for dataset loading, configuration helpers and the CLI listing.
"""

import json
import logging

import pytest

from ..cli import main
from ..config import configure_logging, parse_flag
from ..dataset import QuestionDataset, load_dataset, parse_dataset
from ..errors import DatasetError


class TestBundledDataset:
    def test_loads(self):
        dataset = load_dataset()

        assert dataset.random is False
        assert "Co zabierasz na plażę?" in dataset.questions

    def test_every_question_fits_the_board(self):
        dataset = load_dataset()

        for answers in dataset.questions.values():
            records = [a for a in answers if a is not None]
            assert 1 <= len(records) <= 6

    def test_builds_store_without_nulls(self):
        store = load_dataset().build_store()

        first = store.next_question()
        assert first.text == "Co zabierasz na plażę?"
        assert first.answer_count == 5


class TestValidation:
    def test_duplicate_numbers_rejected(self):
        with pytest.raises(DatasetError):
            parse_dataset({"questions": {"Q": [
                {"lp": 1, "ans": "a", "points": 5},
                {"lp": 1, "ans": "b", "points": 3},
            ]}})

    def test_question_without_answers_rejected(self):
        with pytest.raises(DatasetError):
            parse_dataset({"questions": {"Q": [None]}})

    def test_negative_points_rejected(self):
        with pytest.raises(DatasetError):
            parse_dataset({"questions": {"Q": [{"lp": 1, "ans": "a", "points": -1}]}})

    def test_more_answers_than_board_rows_rejected(self):
        """The board has six rows; a seventh answer number is refused."""
        answers = [{"lp": n, "ans": f"odp {n}", "points": 10} for n in range(1, 8)]

        with pytest.raises(DatasetError):
            parse_dataset({"questions": {"Q": answers}})

    def test_random_flag_drives_store(self, raw_questions):
        dataset = QuestionDataset.model_validate({"random": True, "questions": raw_questions})

        assert dataset.build_store().randomize is True
        assert dataset.build_store(randomize=False).randomize is False


class TestLoadFromPath:
    def test_load_from_file(self, tmp_path, raw_questions):
        path = tmp_path / "pytania.json"
        path.write_text(json.dumps({"questions": raw_questions}), encoding="utf-8")

        dataset = load_dataset(path)

        assert list(dataset.questions) == list(raw_questions)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError):
            load_dataset(tmp_path / "brak.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "zle.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DatasetError):
            load_dataset(path)


class TestConfig:
    @pytest.mark.parametrize("value,expected", [
        ("1", True), ("TRUE", True), (" on ", True),
        ("0", False), ("no", False),
        ("maybe", None), (None, None),
    ])
    def test_parse_flag(self, value, expected):
        assert parse_flag(value) is expected

    def test_configure_logging_accepts_names(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        configure_logging("debug")
        configure_logging("nonsense")

        assert calls[0]["level"] == logging.DEBUG
        assert calls[1]["level"] == logging.WARNING


class TestCLI:
    def test_questions_listing(self, capsys, monkeypatch):
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)

        main(["questions"])

        out = capsys.readouterr().out
        assert "1. Co zabierasz na plażę?" in out
        assert "   1. ręcznik (38)" in out

    def test_bad_dataset_exits(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)

        with pytest.raises(SystemExit):
            main(["questions", "--data", str(tmp_path / "brak.json")])

        assert "Error:" in capsys.readouterr().out

    def test_play_session(self, monkeypatch, capsys):
        """Scripted console game: select blue, guess, reveal, quit."""
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)
        lines = iter(["q", "a ręcznik", "9", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        main(["play", "--sequential", "--seed", "1", "--mute"])

        out = capsys.readouterr().out
        assert "Revealed 1. ręcznik (38)" in out
        assert "! Answer 9 not in current question" in out

    def test_listen_is_skipped_under_score_overlay(self, monkeypatch, capsys):
        """R under the overlay does not prompt, so the next R hears the next line."""
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)
        lines = iter(["q", "s", "r", "s", "r", "ręcznik", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        main(["play", "--sequential", "--seed", "1", "--mute"])

        out = capsys.readouterr().out
        assert "- Score overlay visible, key ignored" in out
        assert "Revealed 1. ręcznik (38)" in out
