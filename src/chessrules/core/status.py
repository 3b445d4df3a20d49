"""Per-side and game-wide status flags that live next to the board."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.enums import Color, SideFlag


def _no_en_passant() -> list[bool]:
    return [False] * 8


@dataclass(slots=True)
class SideStatus:
    """Status of one side.

    ``en_passant[f]`` is true iff this side's pawn on file *f* advanced two
    squares on the previous move and may be captured en passant right now.
    ``moved`` only gains bits (see :meth:`mark`).
    """

    is_check: bool = False
    en_passant: list[bool] = field(default_factory=_no_en_passant)
    moved: SideFlag = SideFlag.NONE

    def __post_init__(self) -> None:
        if len(self.en_passant) != 8:
            raise ValueError("en_passant must have exactly 8 entries")

    # ── Castling history ─────────────────────────────────────────────────

    def mark(self, flag: SideFlag) -> None:
        """Record that the king or a rook has moved (irreversible)."""
        self.moved |= flag

    @property
    def has_king_moved(self) -> bool:
        return bool(self.moved & SideFlag.KING_MOVED)

    @property
    def has_long_rook_moved(self) -> bool:
        return bool(self.moved & SideFlag.LONG_ROOK_MOVED)

    @property
    def has_short_rook_moved(self) -> bool:
        return bool(self.moved & SideFlag.SHORT_ROOK_MOVED)

    # ── En passant ───────────────────────────────────────────────────────

    def clear_en_passant(self) -> None:
        self.en_passant[:] = _no_en_passant()

    def copy(self) -> SideStatus:
        return SideStatus(
            is_check=self.is_check,
            en_passant=self.en_passant.copy(),
            moved=self.moved,
        )


@dataclass(slots=True)
class Status:
    """Game-wide status: both sides plus terminal flags and turn."""

    white: SideStatus = field(default_factory=SideStatus)
    black: SideStatus = field(default_factory=SideStatus)
    is_checkmate: bool = False
    is_stalemate: bool = False
    current_turn: Color = Color.WHITE

    @classmethod
    def initial(cls) -> Status:
        """Fresh status for the standard starting position."""
        return cls()

    def side(self, color: Color) -> SideStatus:
        return self.white if color == Color.WHITE else self.black

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate

    def copy(self) -> Status:
        return Status(
            white=self.white.copy(),
            black=self.black.copy(),
            is_checkmate=self.is_checkmate,
            is_stalemate=self.is_stalemate,
            current_turn=self.current_turn,
        )
