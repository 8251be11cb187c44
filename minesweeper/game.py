"""Game session lifecycle: NotStarted -> Playing -> GameOver | Completed.

Transitions are pure functions from one GameState to the next. The only
effect, generating a minefield, is returned to the caller as a
BoardRequest inside a Step; the caller fulfils it and feeds the minefield
back through board_generated().
"""
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from minesweeper import engine, safe_start
from minesweeper.grid import Grid
from minesweeper.minefield import new_board
from minesweeper.types import (
    Board, BoardRequest, Bomb, BombNeighbor, Cell, Completed, Difficulty, Empty, GameConfig,
    GameOver, GameState, GameStatus, NotStarted, Playing, Revealed,
)


@dataclass(frozen=True)
class Step:
    """The state after a transition and the board request it is waiting on, if any."""
    state: GameState
    request: Optional[BoardRequest] = None


def not_started(config: GameConfig) -> NotStarted:
    """A game waiting for its first reveal, sized by the config."""
    return NotStarted(height=config.height, width=config.width, bomb_count=config.bomb_count)


def new_game(difficulty: Difficulty) -> NotStarted:
    """A fresh game at one of the preset difficulties."""
    return not_started(difficulty.config)


def _settle(board: Board) -> GameState:
    if engine.is_won(board):
        return Completed(board)
    return Playing(board)


def reveal(state: GameState, row: int, col: int, seed: Optional[int] = None) -> Step:
    """Reveal (row, col).

    On a NotStarted game this only asks for a board; the reveal is applied
    once board_generated() receives a safe one. Out-of-range or already
    revealed positions and finished games are left unchanged.
    """
    match state:
        case NotStarted(height=height, width=width, bomb_count=bomb_count):
            if not (0 <= row < height and 0 <= col < width):
                return Step(state)
            config = GameConfig(height=height, width=width, bomb_count=bomb_count)
            return Step(state, safe_start.first_request(config, row, col, seed))
        case Playing(board=board):
            return Step(_reveal_playing(board, row, col))
        case GameOver() | Completed():
            return Step(state)
        case _:
            raise TypeError(f"Unknown game state: {state!r}")


def _reveal_playing(board: Board, row: int, col: int) -> GameState:
    game_cell = board.get(row, col)
    if game_cell is None or isinstance(game_cell, Revealed):
        return Playing(board)

    cell: Cell = engine.cell_of(game_cell)
    match cell:
        case Bomb():
            board = engine.reveal_all(engine.mark_exploded(board, row, col))
            return GameOver(board)
        case Empty():
            board = engine.cascade_reveal(board, row, col)
        case BombNeighbor():
            _, board = engine.reveal(board, row, col)
        case _:
            raise TypeError(f"Unknown cell: {cell!r}")
    return _settle(board)


def board_generated(state: GameState, request: BoardRequest, minefield: Grid[Cell]) -> Step:
    """Apply a delivered minefield to the game that asked for it.

    An unsafe minefield (bomb under the first click) yields a retry request
    for the same target. Deliveries that no longer match the pending game
    are stale and leave the state unchanged.
    """
    if not isinstance(state, NotStarted) or not _is_pending(state, request, minefield):
        return Step(state)
    if not safe_start.is_safe_start(minefield, request.row, request.col):
        return Step(state, safe_start.retry(request))

    board = engine.cascade_reveal(new_board(minefield), request.row, request.col)
    return Step(_settle(board))


def _is_pending(state: NotStarted, request: BoardRequest, minefield: Grid[Cell]) -> bool:
    return (
        (state.height, state.width, state.bomb_count)
        == (request.height, request.width, request.bomb_count)
        and safe_start.matches(request, minefield)
    )


def flag(state: GameState, row: int, col: int) -> GameState:
    """Toggle a flag; only a game in progress accepts flags."""
    if isinstance(state, Playing):
        return Playing(engine.flag(state.board, row, col))
    return state


async def resolve(step: Step, generate: Callable[[BoardRequest], Awaitable[Grid[Cell]]]) -> GameState:
    """Fulfil a step's board requests one at a time until none is pending.

    `generate` is awaited once per attempt, so a first click that lands on
    a bomb costs one more round trip rather than a blocking loop.
    """
    state, request = step.state, step.request
    while request is not None:
        minefield = await generate(request)
        step = board_generated(state, request, minefield)
        state, request = step.state, step.request
    return state


def status_of(state: GameState) -> GameStatus:
    """The status reported for a game state."""
    match state:
        case NotStarted():
            return GameStatus.NOT_STARTED
        case Playing():
            return GameStatus.PLAYING
        case GameOver():
            return GameStatus.GAME_OVER
        case Completed():
            return GameStatus.COMPLETED
        case _:
            raise TypeError(f"Unknown game state: {state!r}")


def board_of(state: GameState) -> Optional[Board]:
    """The board of a started game, or None before the first reveal."""
    if isinstance(state, (Playing, GameOver, Completed)):
        return state.board
    return None
