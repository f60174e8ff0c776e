"""
Answer matching - normalizes spoken or typed guesses.

Guesses and answer texts are compared after case folding and diacritic
folding, so "Żółw" matches "zolw".
"""

from __future__ import annotations
import re
import unicodedata
from typing import Iterable

from .state import Answer

# NFKD does not decompose the Polish ł
_SPECIAL_FOLDS = str.maketrans({"ł": "l", "Ł": "l"})
_WHITESPACE = re.compile(r"\s+")


def normalize_answer(text: str) -> str:
    """Fold case, strip diacritics and collapse whitespace."""
    text = text.translate(_SPECIAL_FOLDS)
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.casefold()
    return _WHITESPACE.sub(" ", text).strip()


def match_answer(guess: str, answers: Iterable[Answer]) -> Answer | None:
    """Return the answer whose normalized text equals the guess, if any."""
    normalized = normalize_answer(guess or "")
    if not normalized:
        return None
    for answer in answers:
        if normalize_answer(answer.text) == normalized:
            return answer
    return None
