"""Position — board + status, and the move executor that mutates them."""

from __future__ import annotations

import logging

from chessrules.core.board import Board, InvalidPositionError
from chessrules.core.enums import Color, PieceType, SideFlag
from chessrules.core.piece import Piece
from chessrules.core.status import Status
from chessrules.core.types import Square, file_of, make_square, rank_of

_LOGGER = logging.getLogger(__name__)

# Home corner of each rook that can still castle, and the flag it gates.
_ROOK_CORNERS: dict[tuple[Color, Square], SideFlag] = {
    (Color.WHITE, make_square(0, 0)): SideFlag.LONG_ROOK_MOVED,
    (Color.WHITE, make_square(7, 0)): SideFlag.SHORT_ROOK_MOVED,
    (Color.BLACK, make_square(0, 7)): SideFlag.LONG_ROOK_MOVED,
    (Color.BLACK, make_square(7, 7)): SideFlag.SHORT_ROOK_MOVED,
}

# King landing file -> (rook from file, rook to file, flag)
_CASTLE_ROOK_HOPS: dict[int, tuple[int, int, SideFlag]] = {
    6: (7, 5, SideFlag.SHORT_ROOK_MOVED),
    2: (0, 3, SideFlag.LONG_ROOK_MOVED),
}


def _validate(board: Board) -> None:
    for color in Color:
        kings = board.count(Piece(color, PieceType.KING))
        if kings != 1:
            raise InvalidPositionError(
                f"Expected exactly one {color.name} king, found {kings}"
            )


class Position:
    """Full rules state: board + per-side status + turn.

    The position owns its board and status. Anything handed in, through the
    constructor or the setters, is copied first so the caller keeps no
    handle on the live objects.
    """

    __slots__ = ("_board", "_status")

    def __init__(self, board: Board | None = None, status: Status | None = None) -> None:
        self._board = Board.initial()
        self._status = Status.initial()
        if board is not None:
            self.board = board
        if status is not None:
            self.status = status

    # ── Owned state ──────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @board.setter
    def board(self, board: Board) -> None:
        _validate(board)
        self._board = board.copy()

    @property
    def status(self) -> Status:
        return self._status

    @status.setter
    def status(self, status: Status) -> None:
        self._status = status.copy()

    # ── Move executor ────────────────────────────────────────────────────

    def apply_move(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Play an already validated move and return the captured piece.

        Handles the castling rook, castling history, en-passant flags and
        capture, and promotion. Check, terminal state and turn are left to
        :meth:`Rules.update_after_move`.
        """
        board = self._board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        captured = board[to_sq]

        color = piece.color
        opponent = color.opposite
        own = self._status.side(color)
        their = self._status.side(opponent)
        own.clear_en_passant()

        board[to_sq] = piece
        board[from_sq] = None

        if piece.piece_type == PieceType.KING:
            if (
                not own.has_king_moved
                and rank_of(from_sq) == rank_of(to_sq)
                and abs(file_of(to_sq) - file_of(from_sq)) == 2
            ):
                self._hop_castling_rook(color, to_sq)
            own.mark(SideFlag.KING_MOVED)
        elif piece.piece_type == PieceType.ROOK:
            flag = _ROOK_CORNERS.get((color, from_sq))
            if flag is not None:
                own.mark(flag)

        if captured is not None and captured.is_a(opponent, PieceType.ROOK):
            flag = _ROOK_CORNERS.get((opponent, to_sq))
            if flag is not None:
                their.mark(flag)

        if piece.piece_type == PieceType.PAWN:
            captured = self._pawn_side_effects(piece, from_sq, to_sq, captured)

        # The opponent's en-passant window closes once we have moved.
        their.clear_en_passant()
        return captured

    def _hop_castling_rook(self, color: Color, king_to: Square) -> None:
        board = self._board
        rank = rank_of(king_to)
        rook_from_file, rook_to_file, flag = _CASTLE_ROOK_HOPS[file_of(king_to)]
        rook_from = make_square(rook_from_file, rank)
        rook_to = make_square(rook_to_file, rank)
        board[rook_to] = board[rook_from]
        board[rook_from] = None
        self._status.side(color).mark(flag)
        _LOGGER.debug("%s castles, rook %d -> %d", color, rook_from, rook_to)

    def _pawn_side_effects(
        self,
        pawn: Piece,
        from_sq: Square,
        to_sq: Square,
        captured: Piece | None,
    ) -> Piece | None:
        board = self._board
        color = pawn.color
        opponent = color.opposite
        direction = 1 if color == Color.WHITE else -1
        home_rank = 1 if color == Color.WHITE else 6
        last_rank = 7 if color == Color.WHITE else 0
        from_rank = rank_of(from_sq)
        to_file = file_of(to_sq)

        own = self._status.side(color)
        own.en_passant[file_of(from_sq)] = (
            from_rank == home_rank and rank_of(to_sq) == from_rank + 2 * direction
        )

        if (
            captured is None
            and rank_of(to_sq) == from_rank + direction
            and abs(to_file - file_of(from_sq)) == 1
            and self._status.side(opponent).en_passant[to_file]
        ):
            victim_sq = make_square(to_file, from_rank)
            victim = board[victim_sq]
            if victim is not None and victim.is_a(opponent, PieceType.PAWN):
                board[victim_sq] = None
                captured = victim
                _LOGGER.debug("%s captures en passant on file %d", color, to_file)

        if rank_of(to_sq) == last_rank:
            board[to_sq] = Piece(color, PieceType.QUEEN)
            _LOGGER.debug("%s pawn promotes to queen on %d", color, to_sq)

        return captured

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent deep copy."""
        return Position(board=self._board, status=self._status)

    @property
    def side_to_move(self) -> Color:
        return self._status.current_turn
