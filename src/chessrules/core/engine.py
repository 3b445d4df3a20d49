"""RulesEngine — the public entry point for one game.

Quick start::

    from chessrules import RulesEngine, E2, E4

    engine = RulesEngine()
    result = engine.make_move(E2, E4)
    assert result.ok and result.captured is None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveError
from chessrules.core.heatmap import HeatMap, heat_at, moves_to_heatmap
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.status import Status
from chessrules.core.types import Square, is_valid_square, square_name

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of :meth:`RulesEngine.make_move`.

    Three cases: refused (``ok`` false, ``error`` set), played without a
    capture (``captured is None``), played with a capture.
    """

    ok: bool
    captured: Piece | None = None
    error: MoveError | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def refused(cls, error: MoveError) -> MoveResult:
        return cls(ok=False, error=error)


class RulesEngine:
    """Validates and applies moves on one exclusively owned position.

    Not thread-safe: legality filtering temporarily mutates the live board.
    Use one engine per game and serialise access to it.
    """

    __slots__ = ("_pos", "_gen")

    def __init__(self, board: Board | None = None, status: Status | None = None) -> None:
        self._pos = Position(board, status)
        self._gen = MoveGenerator(self._pos)

    # ── Owned state ──────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """A copy of the current board."""
        return self._pos.board.copy()

    @board.setter
    def board(self, board: Board) -> None:
        self._pos.board = board

    @property
    def status(self) -> Status:
        """A copy of the current status."""
        return self._pos.status.copy()

    @status.setter
    def status(self, status: Status) -> None:
        self._pos.status = status

    @property
    def current_turn(self) -> Color:
        return self._pos.side_to_move

    # ── Move generation ──────────────────────────────────────────────────

    def get_moves(
        self,
        sq: Square,
        allow_special_moves: bool = True,
        prevent_check: bool = True,
    ) -> list[Square]:
        return self._gen.get_moves(sq, allow_special_moves, prevent_check)

    def get_all_moves(
        self,
        color: Color,
        allow_special_moves: bool = True,
        prevent_check: bool = True,
    ) -> list[Square]:
        return self._gen.get_all_moves(color, allow_special_moves, prevent_check)

    def legal_move_count(self, color: Color) -> int:
        return len(self._gen.get_all_moves(color))

    def attack_map(self, color: Color) -> HeatMap:
        """Squares attacked by *color*, as a fresh heat map."""
        return [row.copy() for row in self._gen.attack_map(color)]

    # ── Move application ─────────────────────────────────────────────────

    def make_move(
        self, start: Square, end: Square, enforce_turns: bool = True
    ) -> MoveResult:
        """Validate and play *start* → *end*.

        Invalid moves are reported through the result, never raised.
        """
        piece = self.piece_at(start)
        if piece is None:
            _LOGGER.debug("Rejected move from empty square %s", _name(start))
            return MoveResult.refused(MoveError.NO_PIECE)

        if enforce_turns and piece.color != self._pos.side_to_move:
            _LOGGER.debug(
                "Rejected %s move %s-%s: %s to move",
                piece.color,
                _name(start),
                _name(end),
                self._pos.side_to_move,
            )
            return MoveResult.refused(MoveError.WRONG_TURN)

        heatmap = moves_to_heatmap(self._gen.get_moves(start))
        if not is_valid_square(end) or not heat_at(heatmap, end):
            _LOGGER.debug("Rejected illegal move %s-%s", _name(start), _name(end))
            return MoveResult.refused(MoveError.ILLEGAL_MOVE)

        captured = self._pos.apply_move(start, end)
        Rules.update_after_move(self._pos, piece.color, self._gen)
        return MoveResult(ok=True, captured=captured)

    # ── Queries ──────────────────────────────────────────────────────────

    def evaluate_check(self, color: Color) -> bool:
        """Is *color*'s king attacked right now?"""
        return Rules.evaluate_check(self._pos, color, self._gen)

    def find(self, piece: Piece, find_all: bool = False) -> list[Square]:
        return self._pos.board.find(piece, find_all)

    def piece_at(self, sq: Square) -> Piece | None:
        if not is_valid_square(sq):
            return None
        return self._pos.board[sq]

    def winner(self) -> Color | None:
        return Rules.winner(self._pos.status)

    # ── Static helpers ───────────────────────────────────────────────────

    moves_to_heatmap = staticmethod(moves_to_heatmap)
    square_name = staticmethod(square_name)

    def __repr__(self) -> str:
        return f"{self._pos.board!r}\n{self._pos.side_to_move} to move"


def _name(sq: Square) -> str:
    return square_name(sq) if is_valid_square(sq) else str(sq)
