"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from itertools import count

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square

# Shared across all boards so a version number never repeats between two
# different Board objects.
_VERSIONS = count(1)


class InvalidPositionError(ValueError):
    """Board violates a precondition of the rules (e.g. king count)."""


_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board.

    Every write stamps the board with a new :attr:`version`, which lets
    callers cache data derived from the placement (attack maps) and notice
    when it goes stale.
    """

    __slots__ = ("_squares", "_version")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self._version = next(_VERSIONS)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece
        self._version = next(_VERSIONS)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    @property
    def version(self) -> int:
        """Stamp that changes on every mutation."""
        return self._version

    # -- Query helpers ------------------------------------------------------

    def find(self, piece: Piece, find_all: bool = False) -> list[Square]:
        """Squares holding *piece*, scanned a1, b1, ..., h8.

        Only the first match is returned unless *find_all* is set.
        """
        found: list[Square] = []
        for sq, occupant in enumerate(self._squares):
            if occupant == piece:
                found.append(sq)
                if not find_all:
                    break
        return found

    def count(self, piece: Piece) -> int:
        return self._squares.count(piece)

    def king_square(self, color: Color) -> Square:
        """Return the (first) king square for *color*."""
        found = self.find(Piece(color, PieceType.KING))
        if not found:
            raise InvalidPositionError(f"No {color.name} king on board")
        return found[0]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in scan order."""
        return [
            sq
            for sq, occupant in enumerate(self._squares)
            if occupant is not None and occupant.color == color
        ]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._version = next(_VERSIONS)

    @contextmanager
    def trial_move(
        self, from_sq: Square, to_sq: Square, capture_sq: Square | None = None
    ) -> Iterator[None]:
        """Temporarily move the piece on *from_sq* to *to_sq*.

        *capture_sq* names an extra square to empty for the duration (the
        pawn taken en passant). On exit every touched square, and the
        version stamp, is put back exactly as it was, whatever happened
        inside the block.
        """
        saved_version = self._version
        touched: dict[Square, Piece | None] = {
            from_sq: self._squares[from_sq],
            to_sq: self._squares[to_sq],
        }
        if capture_sq is not None:
            touched[capture_sq] = self._squares[capture_sq]
        try:
            piece = self._squares[from_sq]
            if capture_sq is not None:
                self[capture_sq] = None
            self[from_sq] = None
            self[to_sq] = piece
            yield
        finally:
            for sq, occupant in touched.items():
                self._squares[sq] = occupant
            self._version = saved_version

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from an 8-line diagram, rank 8 first.

        Each line holds 8 characters: a piece letter (``"K"``, ``"p"``, ...)
        or ``"."`` for an empty square. Whitespace is ignored.
        """
        if len(rows) != 8:
            raise ValueError(f"Expected 8 rows, got {len(rows)}")
        b = cls()
        for i, row in enumerate(rows):
            cells = "".join(row.split())
            if len(cells) != 8:
                raise ValueError(f"Row {i + 1} must have 8 squares: {row!r}")
            rank = 7 - i
            for f, ch in enumerate(cells):
                if ch != ".":
                    b[make_square(f, rank)] = Piece.from_char(ch)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
