"""High-level chess rules: check, checkmate, stalemate, winner."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessrules.core.enums import Color
from chessrules.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessrules.core.position import Position
    from chessrules.core.status import Status

_LOGGER = logging.getLogger(__name__)


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every method accepts an optional :class:`MoveGenerator` bound to the same
    position so a long-lived caller can reuse its attack-map cache.
    """

    @staticmethod
    def evaluate_check(
        position: Position, color: Color, gen: MoveGenerator | None = None
    ) -> bool:
        gen = gen or MoveGenerator(position)
        return gen.is_in_check(color)

    @staticmethod
    def has_legal_moves(
        position: Position, color: Color, gen: MoveGenerator | None = None
    ) -> bool:
        gen = gen or MoveGenerator(position)
        return gen.has_legal_moves(color)

    @staticmethod
    def update_after_move(
        position: Position, mover: Color, gen: MoveGenerator | None = None
    ) -> None:
        """Refresh check / terminal flags once *mover* has moved, then pass the turn.

        The opponent is mated when it has no legal reply while attacked,
        stalemated when it has none while safe.
        """
        gen = gen or MoveGenerator(position)
        status = position.status
        opponent = mover.opposite
        their = status.side(opponent)

        in_check = gen.is_in_check(opponent)
        if not gen.has_legal_moves(opponent):
            # Exactly one terminal flag describes the latest position.
            status.is_checkmate = in_check
            status.is_stalemate = not in_check
            if in_check:
                _LOGGER.info("Checkmate: %s wins", mover)
            else:
                _LOGGER.info("Stalemate: %s has no legal move", opponent)
        their.is_check = in_check

        status.side(mover).is_check = False
        status.current_turn = opponent

    @staticmethod
    def winner(status: Status) -> Color | None:
        """The mating side, or ``None`` while the game is open or drawn."""
        if not status.is_checkmate:
            return None
        return Color.WHITE if status.black.is_check else Color.BLACK
