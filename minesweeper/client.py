"""Client-side handle on a running game session."""
import asyncio
import logging
import uuid
from typing import Optional

from temporalio.client import Client, WorkflowHandle

from minesweeper.config import settings
from minesweeper.types import Difficulty, MoveRequest
from minesweeper.views import GameView
from minesweeper.workflows import MinesweeperWorkflow

logger = logging.getLogger(__name__)


async def query_with_retry(handle: WorkflowHandle, max_retries: int = 5) -> GameView:
    """Query with retry logic for workflow initialization."""
    for i in range(max_retries):
        try:
            return await handle.query(MinesweeperWorkflow.get_game_state_query)
        except Exception as error:
            if i < max_retries - 1:
                logger.info(f"Query not ready yet, retrying in {(i + 1) * 100}ms...")
                await asyncio.sleep((i + 1) * 0.1)
                continue
            raise error


class GameClient:
    """Procedural interface to one game: reveal, flag, start over, look."""

    def __init__(self, handle: WorkflowHandle):
        self.handle = handle

    @property
    def game_id(self) -> str:
        return self.handle.id

    @classmethod
    async def start(cls, client: Client, difficulty: Difficulty = Difficulty.EASY,
                    game_id: Optional[str] = None, task_queue: Optional[str] = None) -> "GameClient":
        """Start a new game session and wait until it answers queries."""
        game_id = game_id or str(uuid.uuid4())
        handle = await client.start_workflow(
            MinesweeperWorkflow.run,
            args=[game_id, difficulty],
            id=game_id,
            task_queue=task_queue or settings.task_queue,
        )
        await query_with_retry(handle)
        logger.info(f"Started {difficulty.value} game {game_id}")
        return cls(handle)

    @classmethod
    def attach(cls, client: Client, game_id: str) -> "GameClient":
        return cls(client.get_workflow_handle(game_id))

    async def reveal(self, row: int, col: int) -> GameView:
        return await self._move(MoveRequest(row=row, col=col, action='reveal'))

    async def flag(self, row: int, col: int) -> GameView:
        return await self._move(MoveRequest(row=row, col=col, action='flag'))

    async def _move(self, move_request: MoveRequest) -> GameView:
        return await self.handle.execute_update(MinesweeperWorkflow.make_move_update, move_request)

    async def new_game(self, difficulty: Difficulty) -> GameView:
        return await self.handle.execute_update(MinesweeperWorkflow.new_game_update, difficulty)

    async def state(self) -> GameView:
        return await query_with_retry(self.handle)

    async def close(self) -> None:
        await self.handle.signal(MinesweeperWorkflow.close_game_signal)
