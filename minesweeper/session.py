"""One game session: its current state and the rules for changing it.

The workflow owns a GameSession and hands it the Temporal clock, logger and
board generator; the session itself has no Temporal dependency beyond the
activity failure type, so its lifecycle can be exercised with plain asyncio.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Awaitable, Callable, Optional, Union

from temporalio.exceptions import ActivityError

from minesweeper import game
from minesweeper.grid import Grid
from minesweeper.types import BoardRequest, Cell, Difficulty, GameState, MoveRequest
from minesweeper.views import GameView, to_view

MOVE_ACTIONS = ('reveal', 'flag')

# Auto-close sessions after 24 hours of inactivity
INACTIVITY_TIMEOUT = timedelta(hours=24)

BoardGenerator = Callable[[BoardRequest], Awaitable[Grid[Cell]]]


class GameSession:
    """Owns one game's state and applies requests to it one at a time.

    A reveal waiting on board generation holds the lock, so later moves and
    new-game requests apply after it, in the order they arrived. Closed
    sessions ignore every request.
    """

    def __init__(self, game_id: str, difficulty: Difficulty, now: float,
                 generate: BoardGenerator,
                 logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
                 idle_timeout: timedelta = INACTIVITY_TIMEOUT):
        self.game_id = game_id
        self.state: GameState = game.new_game(Difficulty(difficulty))
        self.last_activity_time = now
        self.closed = False
        self.generate = generate
        self.logger = logger or logging.getLogger(__name__)
        self.idle_timeout = idle_timeout
        self.lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """Whether a request is being applied."""
        return self.lock.locked()

    def idle_remaining(self, now: float) -> float:
        """Seconds left before the session counts as abandoned."""
        return self.idle_timeout.total_seconds() - (now - self.last_activity_time)

    def close(self) -> None:
        """Stop accepting requests."""
        self.closed = True

    async def make_move(self, move_request: MoveRequest, now: float) -> None:
        """Apply a reveal or flag; a failed board generation leaves the state as it was."""
        async with self.lock:
            if self.closed:
                return

            self.last_activity_time = now
            row, col, action = move_request.row, move_request.col, move_request.action

            try:
                if action == 'reveal':
                    step = game.reveal(self.state, row, col)
                    self.state = await game.resolve(step, self.generate)
                elif action == 'flag':
                    self.state = game.flag(self.state, row, col)
                else:
                    self.logger.warning(f"Ignoring unknown move action: {action}")
            except (ActivityError, ValueError) as error:
                self.logger.error(f"Error processing move: {error}")

    async def new_game(self, difficulty: Difficulty, now: float) -> None:
        """Start over with a fresh board of the given difficulty."""
        async with self.lock:
            if self.closed:
                return  # Cannot restart closed games

            self.last_activity_time = now
            self.state = game.new_game(Difficulty(difficulty))

    def view(self) -> GameView:
        """Render the session for clients."""
        return to_view(self.game_id, self.state, closed=self.closed)
