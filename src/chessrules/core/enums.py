"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class SideFlag(IntFlag):
    """One-way history bits that gate castling for one side.

    Bits are only ever added; a set bit is never cleared again.
    """

    NONE = 0
    KING_MOVED = auto()
    LONG_ROOK_MOVED = auto()
    SHORT_ROOK_MOVED = auto()


class MoveError(IntEnum):
    """Why :meth:`RulesEngine.make_move` refused a move."""

    NO_PIECE = 1
    WRONG_TURN = 2
    ILLEGAL_MOVE = 3
