"""
Dataset - Loading and validating question files.

A dataset is a JSON document:

    {
        "random": false,
        "questions": {
            "Question text": [
                {"lp": 1, "ans": "answer", "points": 40},
                ...
            ]
        }
    }

Null entries in an answer list are allowed and skipped.
"""

from __future__ import annotations
import json
import logging
import random
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .engine_core.question_store import QuestionStore
from .presentation.board import MAX_ANSWER_ROWS
from .errors import DatasetError

logger = logging.getLogger(__name__)

DEFAULT_DATASET = "questions.json"


class AnswerRecord(BaseModel):
    """One answer as stored in the dataset."""
    lp: int = Field(ge=1, le=MAX_ANSWER_ROWS, description="Board position, 1-based")
    ans: str = Field(min_length=1)
    points: int = Field(ge=0)


class QuestionDataset(BaseModel):
    """A full question file."""
    random: bool = False
    questions: dict[str, list[Optional[AnswerRecord]]] = Field(default_factory=dict)

    @field_validator("questions")
    @classmethod
    def check_ranks(cls, questions: dict[str, list[Optional[AnswerRecord]]]):
        for text, answers in questions.items():
            ranks = [a.lp for a in answers if a is not None]
            if len(ranks) != len(set(ranks)):
                raise ValueError(f"duplicate answer numbers in {text!r}")
            if not ranks:
                raise ValueError(f"question {text!r} has no answers")
        return questions

    def raw_questions(self) -> dict[str, list[dict]]:
        """Question mapping in the plain form QuestionStore accepts."""
        return {
            text: [a.model_dump() for a in answers if a is not None]
            for text, answers in self.questions.items()
        }

    def build_store(
        self,
        randomize: bool | None = None,
        rng: random.Random | None = None,
    ) -> QuestionStore:
        """Create a QuestionStore; `randomize` overrides the file's flag."""
        if randomize is None:
            randomize = self.random
        return QuestionStore(self.raw_questions(), randomize=randomize, rng=rng)


def parse_dataset(data: dict) -> QuestionDataset:
    try:
        return QuestionDataset.model_validate(data)
    except ValidationError as e:
        raise DatasetError(f"Invalid question dataset: {e}") from e


def load_dataset(path: str | Path | None = None) -> QuestionDataset:
    """
    Load a dataset from a JSON file.

    If path is None, loads the sample bundled with the package.
    """
    try:
        if path is None:
            text = resource_files("familiada.data").joinpath(DEFAULT_DATASET).read_text(
                encoding="utf-8"
            )
            logger.debug("Loaded bundled dataset")
        else:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
            logger.debug("Loaded dataset from path: %s", path)
    except OSError as e:
        raise DatasetError(f"Cannot read dataset {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset is not valid JSON: {e}") from e

    dataset = parse_dataset(data)
    logger.info("Dataset has %d questions (random=%s)", len(dataset.questions), dataset.random)
    return dataset
