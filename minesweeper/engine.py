"""Reveal and flag transitions on a board, plus the stats used for win detection.

Every function takes a board and returns a new one; positions outside the
board leave it unchanged.
"""
from collections import deque
from typing import Dict, Optional, Set, Tuple

from minesweeper.grid import Position
from minesweeper.types import (
    Board, BoardStats, Bomb, Cell, Empty, Flagged, GameCell, Revealed, Unrevealed,
)


def cell_of(game_cell: GameCell) -> Cell:
    """The mine-layer cell under a visibility wrapper."""
    match game_cell:
        case Unrevealed(cell=cell) | Flagged(cell=cell) | Revealed(cell=cell):
            return cell
        case _:
            raise TypeError(f"Unknown game cell: {game_cell!r}")


def reveal(board: Board, row: int, col: int) -> Tuple[Optional[Cell], Board]:
    """Reveal a single cell, flagged or not.

    Returns:
        The revealed cell (None if out of range) and the updated board.
    """
    game_cell = board.get(row, col)
    if game_cell is None:
        return None, board
    cell = cell_of(game_cell)
    if isinstance(game_cell, Revealed):
        return cell, board
    return cell, board.set(row, col, Revealed(cell))


def flag(board: Board, row: int, col: int) -> Board:
    """Toggle the flag on an unrevealed cell."""
    match board.get(row, col):
        case Unrevealed(cell=cell):
            return board.set(row, col, Flagged(cell))
        case Flagged(cell=cell):
            return board.set(row, col, Unrevealed(cell))
        case _:
            return board


def cascade_reveal(board: Board, row: int, col: int) -> Board:
    """Reveal a cell and flood through the empty region around it.

    Neighbors of every empty cell are revealed; empty neighbors keep the
    expansion going, numbered ones stop it. Flags do not block the flood.
    """
    cell, board = reveal(board, row, col)
    if not isinstance(cell, Empty):
        return board

    changes: Dict[Position, GameCell] = {}
    visited: Set[Position] = {(row, col)}
    frontier = deque([(row, col)])
    while frontier:
        current = frontier.popleft()
        for neighbor in board.neighbors(*current):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            game_cell = board.get(*neighbor)
            if isinstance(game_cell, Revealed):
                continue
            neighbor_cell = cell_of(game_cell)
            if isinstance(neighbor_cell, Bomb):
                continue
            changes[neighbor] = Revealed(neighbor_cell)
            if isinstance(neighbor_cell, Empty):
                frontier.append(neighbor)

    return board.update(changes)


def reveal_all(board: Board) -> Board:
    """Disclose every cell, e.g. at game over."""
    return board.map(lambda game_cell: Revealed(cell_of(game_cell)))


def mark_exploded(board: Board, row: int, col: int) -> Board:
    """Flag the bomb at (row, col) as the one that ended the game."""
    game_cell = board.get(row, col)
    if game_cell is None or not isinstance(cell_of(game_cell), Bomb):
        return board
    return board.set(row, col, type(game_cell)(Bomb(exploded=True)))


def stats(board: Board) -> BoardStats:
    """Count bombs and unrevealed cells on a board."""
    bombs_count = 0
    unrevealed_cells_count = 0
    for game_cell in board.values():
        if isinstance(cell_of(game_cell), Bomb):
            bombs_count += 1
        if not isinstance(game_cell, Revealed):
            unrevealed_cells_count += 1
    return BoardStats(
        cells_count=board.size,
        bombs_count=bombs_count,
        unrevealed_cells_count=unrevealed_cells_count,
    )


def is_won(board: Board) -> bool:
    """Whether every cell left unrevealed on the board is a bomb."""
    return stats(board).is_complete
