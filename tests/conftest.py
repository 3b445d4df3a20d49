"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import pytest

from chessrules.core.board import Board
from chessrules.core.engine import RulesEngine
from chessrules.core.enums import Color
from chessrules.core.status import Status

EngineFactory = Callable[..., RulesEngine]


@pytest.fixture
def engine() -> RulesEngine:
    """Engine on the standard starting position."""
    return RulesEngine()


@pytest.fixture
def make_engine() -> EngineFactory:
    """Build an engine from an 8-line diagram (rank 8 first).

    Keyword ``turn`` sets the side to move; ``status`` overrides the whole
    status object.
    """

    def _make(
        rows: Sequence[str],
        turn: Color = Color.WHITE,
        status: Status | None = None,
    ) -> RulesEngine:
        if status is None:
            status = Status(current_turn=turn)
        return RulesEngine(Board.from_rows(rows), status)

    return _make


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture everything the package logs at DEBUG and above."""
    caplog.set_level(logging.DEBUG, logger="chessrules")
    return caplog
