"""Tests for pseudo-legal generation, the legality filter and attack maps."""

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType, SideFlag
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.status import Status
from chessrules.core.types import (
    A3, A8, B1, C1, C3, D1, D2, D3, D4, D5, D6, E1, E2, E3, E4, E5, E6, E7,
    F1, F2, G1, H8,
)  # fmt: skip


def _gen(rows: list[str], status: Status | None = None) -> MoveGenerator:
    return MoveGenerator(Position(Board.from_rows(rows), status))


def _initial_gen() -> MoveGenerator:
    return MoveGenerator(Position())


class TestEmptyAndBounds:
    def test_empty_squares_have_no_moves(self) -> None:
        gen = _initial_gen()
        board = Board.initial()
        for sq in range(64):
            if board[sq] is None:
                assert gen.get_moves(sq) == []

    def test_off_board_square(self) -> None:
        gen = _initial_gen()
        assert gen.get_moves(-1) == []
        assert gen.get_moves(64) == []


class TestOpening:
    def test_twenty_moves_each(self) -> None:
        gen = _initial_gen()
        assert len(gen.get_all_moves(Color.WHITE)) == 20
        assert len(gen.get_all_moves(Color.BLACK)) == 20

    def test_knight_moves(self) -> None:
        gen = _initial_gen()
        assert set(gen.get_moves(B1)) == {A3, C3}

    def test_pawn_single_and_double_push(self) -> None:
        gen = _initial_gen()
        assert sorted(gen.get_moves(E2)) == [E3, E4]

    def test_deterministic(self) -> None:
        gen = _initial_gen()
        assert gen.get_all_moves(Color.WHITE) == gen.get_all_moves(Color.WHITE)


class TestSliders:
    def test_rook_on_open_board(self) -> None:
        gen = _gen(
            [
                "....k...",
                "........",
                "........",
                "........",
                "...R....",
                "........",
                "........",
                "K.......",
            ]
        )
        assert len(gen.get_moves(D4)) == 14

    def test_rook_stops_at_own_and_captures_enemy(self) -> None:
        gen = _gen(
            [
                "....k...",
                "........",
                "...P....",
                "........",
                "...R....",
                "........",
                "...p....",
                "K.......",
            ]
        )
        moves = gen.get_moves(D4)
        assert D5 in moves
        assert D6 not in moves  # own pawn
        assert D3 in moves
        assert D2 in moves  # capture
        assert D1 not in moves  # behind the captured pawn

    def test_queen_on_open_board(self) -> None:
        gen = _gen(
            [
                "k.......",
                "........",
                "........",
                "........",
                "...Q....",
                "........",
                "........",
                ".......K",
            ]
        )
        assert len(gen.get_moves(D4)) == 27

    def test_bishop_on_open_board(self) -> None:
        gen = _gen(
            [
                "k.......",
                "........",
                "........",
                "........",
                "...B....",
                "........",
                "........",
                ".......K",
            ]
        )
        assert len(gen.get_moves(D4)) == 13


class TestPawns:
    def test_blocked_pawn(self) -> None:
        gen = _gen(
            [
                "....k...",
                "........",
                "........",
                "........",
                "........",
                "....n...",
                "....P...",
                "....K...",
            ]
        )
        assert gen.get_moves(E2) == []

    def test_double_push_blocked_on_landing_square(self) -> None:
        gen = _gen(
            [
                "....k...",
                "........",
                "........",
                "........",
                "....n...",
                "........",
                "....P...",
                "K.......",
            ]
        )
        assert gen.get_moves(E2) == [E3]

    def test_diagonal_only_when_capturing(self) -> None:
        gen = _gen(
            [
                "....k...",
                "........",
                "........",
                "...p.P..",
                "....P...",
                "........",
                "........",
                "K.......",
            ]
        )
        # d5 black pawn capturable, f5 own pawn not
        assert set(gen.get_moves(E4)) == {E5, D5}

    def test_black_pawn_moves_down(self) -> None:
        gen = _initial_gen()
        assert set(gen.get_moves(E7)) == {E6, E5}


class TestEnPassant:
    ROWS = [
        "....k...",
        "........",
        "........",
        "...pP...",
        "........",
        "........",
        "........",
        "....K...",
    ]

    def test_available_when_flag_set(self) -> None:
        status = Status()
        status.black.en_passant[3] = True
        gen = _gen(self.ROWS, status)
        assert set(gen.get_moves(E5)) == {D6, E6}

    def test_not_available_without_flag(self) -> None:
        gen = _gen(self.ROWS)
        assert gen.get_moves(E5) == [E6]

    def test_not_available_without_special_moves(self) -> None:
        status = Status()
        status.black.en_passant[3] = True
        gen = _gen(self.ROWS, status)
        assert gen.get_moves(E5, allow_special_moves=False) == [E6]


class TestCastling:
    OPEN = [
        "....k...",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        "R...K..R",
    ]

    def test_both_sides_available(self) -> None:
        gen = _gen(self.OPEN)
        moves = gen.get_moves(E1)
        assert G1 in moves
        assert C1 in moves

    def test_not_generated_without_special_moves(self) -> None:
        gen = _gen(self.OPEN)
        moves = gen.get_moves(E1, allow_special_moves=False)
        assert G1 not in moves
        assert C1 not in moves

    def test_blocked_by_piece(self) -> None:
        rows = self.OPEN[:-1] + ["RN..K.NR"]
        gen = _gen(rows)
        moves = gen.get_moves(E1)
        assert G1 not in moves
        assert C1 not in moves

    def test_transit_square_attacked(self) -> None:
        rows = [".....rk."] + self.OPEN[1:]
        gen = _gen(rows)
        moves = gen.get_moves(E1)
        assert G1 not in moves
        assert F1 not in moves
        assert C1 in moves

    def test_rook_side_square_may_be_attacked(self) -> None:
        # b1 is attacked but the king never crosses it
        rows = [".r..k..."] + self.OPEN[1:]
        gen = _gen(rows)
        assert C1 in gen.get_moves(E1)

    def test_not_out_of_check(self) -> None:
        rows = ["k...r..."] + self.OPEN[1:]
        gen = _gen(rows)
        moves = gen.get_moves(E1)
        assert G1 not in moves
        assert C1 not in moves

    def test_flags_disable(self) -> None:
        status = Status()
        status.white.mark(SideFlag.SHORT_ROOK_MOVED)
        gen = _gen(self.OPEN, status)
        moves = gen.get_moves(E1)
        assert G1 not in moves
        assert C1 in moves

    def test_missing_rook(self) -> None:
        rows = self.OPEN[:-1] + ["R...K..."]
        gen = _gen(rows)
        assert G1 not in gen.get_moves(E1)


class TestLegalityFilter:
    PINNED = [
        "k...r...",
        "........",
        "........",
        "........",
        "........",
        "........",
        "....B...",
        "....K...",
    ]

    def test_pinned_piece_cannot_move(self) -> None:
        gen = _gen(self.PINNED)
        assert gen.get_moves(E2) == []
        assert gen.get_moves(E2, prevent_check=False) != []

    def test_king_avoids_attacked_squares(self) -> None:
        gen = _gen(
            [
                "k....r..",
                "........",
                "........",
                "........",
                "........",
                "........",
                "........",
                "....K...",
            ]
        )
        moves = gen.get_moves(E1)
        assert F1 not in moves
        assert F2 not in moves
        assert D1 in moves

    def test_board_restored_after_filtering(self) -> None:
        pos = Position(Board.from_rows(self.PINNED))
        gen = MoveGenerator(pos)
        snapshot = pos.board.copy()
        version = pos.board.version
        gen.get_all_moves(Color.WHITE)
        gen.get_all_moves(Color.BLACK)
        assert pos.board == snapshot
        assert pos.board.version == version

    def test_en_passant_discovered_check_filtered(self) -> None:
        # Taking d5 en passant would empty the 5th rank between rook and king.
        status = Status()
        status.black.en_passant[3] = True
        gen = _gen(
            [
                "....k...",
                "........",
                "........",
                "K..pP..r",
                "........",
                "........",
                "........",
                "........",
            ],
            status,
        )
        assert gen.get_moves(E5) == [E6]


class TestAttackMap:
    def test_pawn_attacks_diagonals_not_pushes(self) -> None:
        gen = _initial_gen()
        heat = gen.attack_map(Color.WHITE)
        assert heat[2][3] == 2  # d3 covered by c2 and e2 pawns
        assert heat[3][4] == 0  # e4 is a push, not an attack

    def test_in_check(self) -> None:
        pos = Position(Board.from_rows(TestLegalityFilter.PINNED))
        gen = MoveGenerator(pos)
        assert not gen.is_in_check(Color.WHITE)
        pos.board[E2] = None
        assert gen.is_in_check(Color.WHITE)

    def test_cached_until_board_changes(self) -> None:
        pos = Position()
        gen = MoveGenerator(pos)
        first = gen.attack_map(Color.BLACK)
        assert gen.attack_map(Color.BLACK) is first
        pos.board[E4] = Piece(Color.WHITE, PieceType.PAWN)
        assert gen.attack_map(Color.BLACK) is not first

    def test_counts_and_corners(self) -> None:
        gen = _gen(
            [
                ".......k",
                "........",
                "........",
                "........",
                "........",
                "........",
                "........",
                "R......K",
            ]
        )
        assert gen.is_square_attacked(A8, Color.WHITE)
        assert not gen.is_square_attacked(H8, Color.WHITE)
        # g1 is covered by both the rook and the king
        assert gen.attack_map(Color.WHITE)[0][6] == 2
