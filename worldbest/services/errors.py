"""Typed failures raised by the champion service."""

from __future__ import annotations


class ChampionError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = 500


class InvalidInput(ChampionError):
    status_code = 400


class NotHigherScore(ChampionError):
    """The submitted score does not beat the live champion."""

    # Clients have always seen a server error here.
    status_code = 500

    def __init__(self, score: int, prev_score: int) -> None:
        super().__init__(f"score {score} is not higher than prev score {prev_score}")
        self.score = score
        self.prev_score = prev_score


class NotAuthorized(ChampionError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("not authorized")


class StorageFailure(ChampionError):
    """The database could not complete a query or transaction."""


__all__ = [
    "ChampionError",
    "InvalidInput",
    "NotAuthorized",
    "NotHigherScore",
    "StorageFailure",
]
