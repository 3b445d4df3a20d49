"""Heat maps: per-square occurrence counts of a list of squares."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeAlias

from chessrules.core.types import Square, file_of, rank_of

HeatMap: TypeAlias = list[list[int]]  # [rank][file] -> count


def blank_heatmap() -> HeatMap:
    return [[0] * 8 for _ in range(8)]


def moves_to_heatmap(squares: Iterable[Square]) -> HeatMap:
    """Count how often each square occurs in *squares*.

    A square reached by two different pieces scores 2, not 1.
    """
    heatmap = blank_heatmap()
    for sq in squares:
        heatmap[rank_of(sq)][file_of(sq)] += 1
    return heatmap


def heat_at(heatmap: HeatMap, sq: Square) -> int:
    return heatmap[rank_of(sq)][file_of(sq)]
