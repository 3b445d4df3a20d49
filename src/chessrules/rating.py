"""Elo rating update for a finished game.

Stateless and independent of the board rules; matchmaking layers call it
with the two pre-game ratings and the result from one player's point of view.
"""

from __future__ import annotations

import math
from enum import Enum

DEFAULT_K_FACTOR = 32


class GameScore(float, Enum):
    """Result of a game for the rated player."""

    LOSS = 0.0
    DRAW = 0.5
    WIN = 1.0


def expected_score(rating: float, opponent: float) -> float:
    """Logistic expectation of *rating* against *opponent* (0..1)."""
    return 1 / (1 + 10 ** ((opponent - rating) / 400))


def elo_delta(
    rating: float,
    opponent: float,
    result: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> int:
    """Rating change, rounded to the nearest integer (halves round up)."""
    try:
        score = GameScore(result)
    except ValueError:
        raise ValueError(f"Result must be 0, 0.5 or 1, got {result!r}") from None
    delta = k_factor * (score.value - expected_score(rating, opponent))
    return math.floor(delta + 0.5)


def calculate_elo(
    rating: float,
    opponent: float,
    result: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> float:
    """New rating of the player rated *rating* after scoring *result*."""
    return rating + elo_delta(rating, opponent, result, k_factor)
