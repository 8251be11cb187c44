"""Minefield generation and the compact layout used to ship boards between processes."""
import random
from typing import List, Optional

from minesweeper.grid import Grid
from minesweeper.types import (
    Board, BoardRequest, Bomb, BombNeighbor, Cell, Empty, MinefieldLayout, Unrevealed,
)

BOMB_CHAR = '*'
EMPTY_CHAR = '.'


def count_neighbor_bombs(markers: Grid[bool], row: int, col: int) -> int:
    """Count the bomb markers around (row, col)."""
    count = 0
    for neighbor_row, neighbor_col in markers.neighbors(row, col):
        if markers.get(neighbor_row, neighbor_col):
            count += 1
    return count


def _classify(markers: Grid[bool], row: int, col: int, is_bomb: bool) -> Cell:
    if is_bomb:
        return Bomb()
    count = count_neighbor_bombs(markers, row, col)
    if count == 0:
        return Empty()
    return BombNeighbor(count)


def generate_minefield(height: int, width: int, bomb_count: int,
                       rng: Optional[random.Random] = None) -> Grid[Cell]:
    """Create a minefield with `bomb_count` bombs placed uniformly at random.

    Args:
        height: Number of rows.
        width: Number of columns.
        bomb_count: Bombs to place, between 0 and height * width.
        rng: Randomness source. A fresh system-seeded one is used when omitted.

    Raises:
        ValueError: If the dimensions or bomb count are out of range.
    """
    if height < 1 or width < 1:
        raise ValueError("Board dimensions must be positive")
    total_cells = height * width
    if bomb_count < 0 or bomb_count > total_cells:
        raise ValueError(f"Bomb count must be between 0 and {total_cells}")

    rng = rng or random.Random()

    # Place bombs using Fisher-Yates shuffle
    markers = [True] * bomb_count + [False] * (total_cells - bomb_count)
    rng.shuffle(markers)

    layout = Grid.from_flat(markers, width)
    return layout.indexed_map(lambda row, col, is_bomb: _classify(layout, row, col, is_bomb))


def new_board(minefield: Grid[Cell]) -> Board:
    """Wrap a minefield into a playable board with every cell unrevealed."""
    return minefield.map(Unrevealed)


def request_rng(request: BoardRequest) -> random.Random:
    """Randomness source for one generation attempt.

    Seeded requests are reproducible per attempt; unseeded ones draw from
    system entropy.
    """
    if request.seed is None:
        return random.Random()
    return random.Random(f"{request.seed}:{request.attempt}")


def _cell_char(cell: Cell) -> str:
    match cell:
        case Bomb():
            return BOMB_CHAR
        case BombNeighbor(count=count):
            return str(count)
        case Empty():
            return EMPTY_CHAR
        case _:
            raise TypeError(f"Unknown cell: {cell!r}")


def _char_cell(char: str) -> Cell:
    if char == BOMB_CHAR:
        return Bomb()
    if char == EMPTY_CHAR:
        return Empty()
    if char in '12345678':
        return BombNeighbor(int(char))
    raise ValueError(f"Unknown minefield character: {char!r}")


def encode_minefield(minefield: Grid[Cell]) -> MinefieldLayout:
    """Encode a minefield as one string per row for the activity payload."""
    rows: List[str] = [''.join(_cell_char(cell) for cell in row) for row in minefield.cells]
    return MinefieldLayout(height=minefield.rows, width=minefield.columns, rows=rows)


def decode_minefield(layout: MinefieldLayout) -> Grid[Cell]:
    """Rebuild a minefield from its layout strings.

    Raises:
        ValueError: On unknown characters or rows that do not match the
            declared dimensions.
    """
    if len(layout.rows) != layout.height or any(len(row) != layout.width for row in layout.rows):
        raise ValueError(f"Layout does not match {layout.height}x{layout.width}")
    return Grid.from_rows([_char_cell(char) for char in row] for row in layout.rows)
