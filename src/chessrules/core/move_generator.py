"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.heatmap import HeatMap, heat_at, moves_to_heatmap
from chessrules.core.piece import Piece
from chessrules.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    on_board,
    rank_of,
)

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Per color: (push direction, double-push rank, en-passant rank, back rank).
_PAWN_GEOMETRY: dict[Color, tuple[int, int, int, int]] = {
    Color.WHITE: (1, 1, 4, 0),
    Color.BLACK: (-1, 6, 3, 7),
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if on_board(af, ar):
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates moves for the pieces of a :class:`Position`.

    Moves are destination squares. The legality filter tries each candidate
    on the live board via :meth:`Board.trial_move`, which always restores
    the board before the next candidate is looked at.

    Attack maps are cached per side and invalidated by the board's version
    stamp, so repeated check tests against an unchanged board are free.
    """

    __slots__ = ("_pos", "_attack_cache")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._attack_cache: dict[Color, tuple[int, HeatMap]] = {}

    @property
    def _board(self) -> Board:
        # Re-read on every access: the position may be handed a new board.
        return self._pos.board

    # -- Public API ---------------------------------------------------------

    def get_moves(
        self,
        sq: Square,
        allow_special_moves: bool = True,
        prevent_check: bool = True,
    ) -> list[Square]:
        """Destinations for the piece on *sq*, ignoring turn order.

        Empty or off-board squares give an empty list.
        """
        if not is_valid_square(sq):
            return []
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Square] = []
        self._gen_piece(sq, piece, moves, allow_special_moves, attacks_only=False)

        if prevent_check:
            moves = [to_sq for to_sq in moves if self._is_safe(sq, to_sq, piece)]
        return moves

    def get_all_moves(
        self,
        color: Color,
        allow_special_moves: bool = True,
        prevent_check: bool = True,
    ) -> list[Square]:
        """Concatenated :meth:`get_moves` of every *color* piece, a1 to h8."""
        moves: list[Square] = []
        for sq in self._board.all_pieces(color):
            moves.extend(self.get_moves(sq, allow_special_moves, prevent_check))
        return moves

    def has_legal_moves(self, color: Color) -> bool:
        return any(self.get_moves(sq) for sq in self._board.all_pieces(color))

    # -- Attack detection (public) -----------------------------------------

    def attack_map(self, color: Color) -> HeatMap:
        """How many *color* pieces attack each square.

        Pawns attack their two forward diagonals and nothing else; squares
        held by *color*'s own pieces are never counted.
        """
        board = self._board
        cached = self._attack_cache.get(color)
        if cached is not None and cached[0] == board.version:
            return cached[1]

        targets: list[Square] = []
        for sq in board.all_pieces(color):
            piece = board[sq]
            assert piece is not None
            self._gen_piece(sq, piece, targets, False, attacks_only=True)
        heatmap = moves_to_heatmap(targets)
        self._attack_cache[color] = (board.version, heatmap)
        return heatmap

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return heat_at(self.attack_map(by_color), sq) > 0

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    # -- Legality filter ----------------------------------------------------

    def _is_safe(self, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
        board = self._board
        target = board[to_sq]
        if target is not None and target.piece_type == PieceType.KING:
            # Only reachable from an already illegal position.
            return False

        capture_sq: Square | None = None
        if (
            piece.piece_type == PieceType.PAWN
            and target is None
            and file_of(to_sq) != file_of(from_sq)
        ):
            capture_sq = make_square(file_of(to_sq), rank_of(from_sq))

        with board.trial_move(from_sq, to_sq, capture_sq):
            return not self.is_in_check(piece.color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(
        self,
        sq: Square,
        piece: Piece,
        moves: list[Square],
        allow_special_moves: bool,
        attacks_only: bool,
    ) -> None:
        piece_type = piece.piece_type
        if piece_type == PieceType.PAWN:
            if attacks_only:
                self._gen_pawn_attacks(sq, piece.color, moves)
            else:
                self._gen_pawn(sq, piece.color, moves, allow_special_moves)
        elif piece_type == PieceType.KNIGHT:
            self._gen_step(sq, piece.color, _KNIGHT_TARGETS[sq], moves)
        elif piece_type == PieceType.KING:
            self._gen_step(sq, piece.color, _KING_TARGETS[sq], moves)
            if allow_special_moves:
                self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[piece_type][sq], moves)

    def _gen_step(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break

    def _gen_pawn(
        self,
        sq: Square,
        color: Color,
        moves: list[Square],
        allow_special_moves: bool,
    ) -> None:
        board = self._board
        status = self._pos.status
        direction, double_rank, ep_rank, _ = _PAWN_GEOMETRY[color]
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        next_rank = rank_idx + direction
        if not 0 <= next_rank < 8:
            return

        one_step = make_square(file_idx, next_rank)
        if board.is_empty(one_step):
            moves.append(one_step)
            if rank_idx == double_rank:
                two_step = make_square(file_idx, next_rank + direction)
                if board.is_empty(two_step):
                    moves.append(two_step)

        for df in (1, -1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, next_rank)
            target = board[cap_sq]
            if target is not None and target.color != color:
                moves.append(cap_sq)

        if not allow_special_moves or rank_idx != ep_rank:
            return

        opponent = color.opposite
        their_en_passant = status.side(opponent).en_passant
        for df in (1, -1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8 or not their_en_passant[cap_file]:
                continue
            beside = board[make_square(cap_file, rank_idx)]
            if beside is not None and beside.is_a(opponent, PieceType.PAWN):
                cap_sq = make_square(cap_file, next_rank)
                if board.is_empty(cap_sq):
                    moves.append(cap_sq)

    def _gen_pawn_attacks(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        direction = _PAWN_GEOMETRY[color][0]
        next_rank = rank_of(sq) + direction
        if not 0 <= next_rank < 8:
            return
        for df in (1, -1):
            cap_file = file_of(sq) + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, next_rank)
            target = board[cap_sq]
            if target is None or target.color != color:
                moves.append(cap_sq)

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Square]) -> None:
        """Castling destinations for an unmoved king on its home square.

        Safety is read from the opponent's attack map, so pawn pushes never
        block castling. The king's square and the squares it crosses must be
        unattacked; on the long side b1/b8 only has to be empty.
        """
        side = self._pos.status.side(color)
        if side.has_king_moved:
            return

        back_rank = _PAWN_GEOMETRY[color][3]
        if king_sq != make_square(4, back_rank):
            return

        board = self._board
        attacks = self.attack_map(color.opposite)
        if heat_at(attacks, king_sq):
            return

        rook = Piece(color, PieceType.ROOK)

        def clear(*files: int) -> bool:
            return all(board.is_empty(make_square(f, back_rank)) for f in files)

        def safe(*files: int) -> bool:
            return not any(heat_at(attacks, make_square(f, back_rank)) for f in files)

        if (
            not side.has_short_rook_moved
            and board[make_square(7, back_rank)] == rook
            and clear(5, 6)
            and safe(5, 6)
        ):
            moves.append(make_square(6, back_rank))

        if (
            not side.has_long_rook_moved
            and board[make_square(0, back_rank)] == rook
            and clear(1, 2, 3)
            and safe(2, 3)
        ):
            moves.append(make_square(2, back_rank))
