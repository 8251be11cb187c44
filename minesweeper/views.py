"""Read-only snapshots of a game for whatever renders it."""
from dataclasses import dataclass
from typing import List, Optional

from minesweeper import engine
from minesweeper.game import board_of, status_of
from minesweeper.types import (
    BoardStats, Bomb, BombNeighbor, Empty, Flagged, GameCell, GameState, GameStatus, NotStarted,
    Revealed, Unrevealed,
)

UNREVEALED = '#'
FLAGGED = 'F'
EMPTY = '.'
BOMB = '*'
EXPLODED = 'X'


@dataclass
class GameView:
    """Snapshot of a game, one symbol per cell."""
    id: str
    status: GameStatus
    height: int
    width: int
    cells: List[str]
    stats: Optional[BoardStats] = None


def cell_symbol(game_cell: GameCell) -> str:
    match game_cell:
        case Unrevealed():
            return UNREVEALED
        case Flagged():
            return FLAGGED
        case Revealed(cell=Bomb(exploded=True)):
            return EXPLODED
        case Revealed(cell=Bomb()):
            return BOMB
        case Revealed(cell=BombNeighbor(count=count)):
            return str(count)
        case Revealed(cell=Empty()):
            return EMPTY
        case _:
            raise TypeError(f"Unknown game cell: {game_cell!r}")


def to_view(game_id: str, state: GameState, closed: bool = False) -> GameView:
    """Convert game state to a renderer-friendly snapshot."""
    status = GameStatus.CLOSED if closed else status_of(state)
    if isinstance(state, NotStarted):
        return GameView(
            id=game_id,
            status=status,
            height=state.height,
            width=state.width,
            cells=[UNREVEALED * state.width for _ in range(state.height)],
        )

    board = board_of(state)
    return GameView(
        id=game_id,
        status=status,
        height=board.rows,
        width=board.columns,
        cells=[''.join(cell_symbol(game_cell) for game_cell in row) for row in board.cells],
        stats=engine.stats(board),
    )
