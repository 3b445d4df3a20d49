"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType

# FEN-style letter ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

# Display letters understood by the common chess fonts (one glyph per letter).
_DISPLAY: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.ROOK): "r",
    (Color.WHITE, PieceType.KNIGHT): "h",
    (Color.WHITE, PieceType.BISHOP): "b",
    (Color.WHITE, PieceType.KING): "k",
    (Color.WHITE, PieceType.QUEEN): "q",
    (Color.WHITE, PieceType.PAWN): "p",
    (Color.BLACK, PieceType.ROOK): "t",
    (Color.BLACK, PieceType.KNIGHT): "j",
    (Color.BLACK, PieceType.BISHOP): "n",
    (Color.BLACK, PieceType.KING): "l",
    (Color.BLACK, PieceType.QUEEN): "w",
    (Color.BLACK, PieceType.PAWN): "o",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN-style letter (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN-style letter, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Single ASCII display letter for chess-font renderers, e.g. 'j'."""
        return _DISPLAY[(self.color, self.piece_type)]

    def is_a(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type
