"""Type definitions for Temporal Minesweeper."""
from dataclasses import dataclass
from typing import List, Optional, Union
from enum import Enum

from minesweeper.grid import Grid


# Mine layer: what is actually under each position.

@dataclass(frozen=True)
class Bomb:
    """A mine. `exploded` marks the one bomb whose reveal ended the game."""
    exploded: bool = False


@dataclass(frozen=True)
class BombNeighbor:
    """A safe cell touching `count` bombs (1-8)."""
    count: int


@dataclass(frozen=True)
class Empty:
    """A safe cell with no adjacent bombs."""


Cell = Union[Bomb, BombNeighbor, Empty]


# Visibility layer: what the player has uncovered.

@dataclass(frozen=True)
class Unrevealed:
    cell: Cell


@dataclass(frozen=True)
class Flagged:
    cell: Cell


@dataclass(frozen=True)
class Revealed:
    cell: Cell


GameCell = Union[Unrevealed, Flagged, Revealed]

Board = Grid[GameCell]


@dataclass(frozen=True)
class BoardStats:
    """Aggregate counts over a board snapshot."""
    cells_count: int
    bombs_count: int
    unrevealed_cells_count: int

    @property
    def is_complete(self) -> bool:
        """True once only bombs are left unrevealed."""
        return self.bombs_count == self.unrevealed_cells_count


@dataclass
class GameConfig:
    """Configuration for creating a new game."""
    height: int
    width: int
    bomb_count: int

    def __post_init__(self) -> None:
        if self.height < 1 or self.width < 1:
            raise ValueError("Board dimensions must be positive")
        if self.bomb_count < 0:
            raise ValueError("Number of bombs cannot be negative")
        max_bombs = self.height * self.width - 1
        if self.bomb_count > max_bombs:
            raise ValueError(f"Too many bombs (max {max_bombs})")


class Difficulty(str, Enum):
    """Selectable difficulty presets."""
    EASY = 'EASY'
    MEDIUM = 'MEDIUM'
    HARD = 'HARD'

    @property
    def config(self) -> GameConfig:
        height, width, bomb_count = _PRESETS[self]
        return GameConfig(height=height, width=width, bomb_count=bomb_count)


_PRESETS = {
    Difficulty.EASY: (9, 9, 10),
    Difficulty.MEDIUM: (16, 16, 40),
    Difficulty.HARD: (16, 30, 99),
}


# Session states. Boards are replaced wholesale on every transition.

@dataclass(frozen=True)
class NotStarted:
    """A pending game; the board is generated on the first reveal."""
    height: int
    width: int
    bomb_count: int


@dataclass(frozen=True)
class Playing:
    board: Board


@dataclass(frozen=True)
class GameOver:
    board: Board


@dataclass(frozen=True)
class Completed:
    board: Board


GameState = Union[NotStarted, Playing, GameOver, Completed]


class GameStatus(str, Enum):
    """Possible game states, as reported to clients."""
    NOT_STARTED = 'NOT_STARTED'
    PLAYING = 'PLAYING'
    GAME_OVER = 'GAME_OVER'
    COMPLETED = 'COMPLETED'
    CLOSED = 'CLOSED'


# Temporal payloads. These carry primitives only so the default data
# converter can round-trip them.

@dataclass
class BoardRequest:
    """Request to generate a minefield whose (row, col) is not a bomb."""
    height: int
    width: int
    bomb_count: int
    row: int
    col: int
    attempt: int = 1
    seed: Optional[int] = None


@dataclass
class MinefieldLayout:
    """A generated minefield, one string per row."""
    height: int
    width: int
    rows: List[str]


@dataclass
class MoveRequest:
    """Request to make a move."""
    row: int
    col: int
    action: str  # 'reveal', 'flag'
