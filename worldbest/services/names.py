"""Display name helpers."""

from __future__ import annotations

import random
import re
import string
from typing import Optional

_LETTERS = re.compile("[A-Z]+")
MAX_NAME_LENGTH = 3


def normalize_name(raw: Optional[str]) -> str:
    """Keep up to three uppercase ASCII letters from user input."""

    letters = "".join(_LETTERS.findall((raw or "").upper()))
    return letters[:MAX_NAME_LENGTH]


def suggest_name(rng: Optional[random.Random] = None) -> str:
    """Pick a placeholder such as ``QQQ`` for players who gave no name."""

    letter = (rng or random).choice(string.ascii_uppercase)
    return letter * MAX_NAME_LENGTH


def display_name(raw: Optional[str], rng: Optional[random.Random] = None) -> str:
    return normalize_name(raw) or suggest_name(rng)


__all__ = ["MAX_NAME_LENGTH", "display_name", "normalize_name", "suggest_name"]
