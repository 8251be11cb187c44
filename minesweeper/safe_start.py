"""First-click safety by rejection sampling.

A board is requested for the first revealed position; if the delivered
minefield has a bomb there, the same target is requested again with fresh
randomness. Each attempt is a separate request so the caller decides how
to schedule it.
"""
from dataclasses import replace
from typing import Optional

from minesweeper.grid import Grid
from minesweeper.types import BoardRequest, Bomb, Cell, GameConfig


def first_request(config: GameConfig, row: int, col: int, seed: Optional[int] = None) -> BoardRequest:
    """Build the first-attempt board request for a click at (row, col)."""
    return BoardRequest(
        height=config.height,
        width=config.width,
        bomb_count=config.bomb_count,
        row=row,
        col=col,
        seed=seed,
    )


def is_safe_start(minefield: Grid[Cell], row: int, col: int) -> bool:
    """Whether the clicked cell of a minefield is free of bombs."""
    return not isinstance(minefield.get(row, col), Bomb)


def retry(request: BoardRequest) -> BoardRequest:
    """Same target, next attempt."""
    return replace(request, attempt=request.attempt + 1)


def matches(request: BoardRequest, minefield: Grid[Cell]) -> bool:
    """Whether a delivered minefield has the dimensions that were asked for."""
    return minefield.rows == request.height and minefield.columns == request.width
