"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import RulesEngine, Color

    engine = RulesEngine()
    assert engine.legal_move_count(Color.WHITE) == 20
"""

from chessrules.core.board import Board, InvalidPositionError
from chessrules.core.engine import MoveResult, RulesEngine
from chessrules.core.enums import Color, MoveError, PieceType, SideFlag
from chessrules.core.heatmap import HeatMap, blank_heatmap, heat_at, moves_to_heatmap
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.status import SideStatus, Status
from chessrules.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "Color",
    "MoveError",
    "PieceType",
    "SideFlag",
    # Types / helpers
    "HeatMap",
    "Square",
    "blank_heatmap",
    "file_of",
    "heat_at",
    "is_valid_square",
    "make_square",
    "moves_to_heatmap",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "InvalidPositionError",
    "MoveGenerator",
    "MoveResult",
    "Piece",
    "Position",
    "Rules",
    "RulesEngine",
    "SideStatus",
    "Status",
]
