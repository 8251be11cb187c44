"""Temporal workflows for Minesweeper game."""
import asyncio
from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from minesweeper.activities import generate_board
    from minesweeper.config import settings
    from minesweeper.grid import Grid
    from minesweeper.minefield import decode_minefield
    from minesweeper.session import MOVE_ACTIONS, GameSession
    from minesweeper.types import BoardRequest, Cell, Difficulty, GameStatus, MoveRequest
    from minesweeper.views import GameView


@workflow.defn
class MinesweeperWorkflow:
    """Workflow that owns a single Minesweeper session."""

    def __init__(self):
        self.game_id: str = ""
        self.session: GameSession | None = None
        self.close_requested: bool = False

    @workflow.run
    async def run(self, game_id: str, difficulty: Difficulty) -> None:
        """Main workflow entry point."""
        self.game_id = game_id
        session = GameSession(
            game_id,
            difficulty,
            now=workflow.time(),
            generate=self._generate_board,
            logger=workflow.logger,
        )
        if self.close_requested:
            session.close()
        self.session = session

        while not session.closed:
            remaining = session.idle_remaining(workflow.time())
            if remaining <= 0:
                workflow.logger.info(f"Game {game_id} auto-closing due to 24 hours of inactivity")
                session.close()
                break
            try:
                await workflow.wait_condition(lambda: session.closed, timeout=remaining)
            except asyncio.TimeoutError:
                # Re-check: a request may have arrived while waiting
                continue

        # Let in-flight moves finish before the session closes
        await workflow.wait_condition(lambda: not session.busy)

        workflow.logger.info(f"Minesweeper workflow {game_id} completed")

    async def _generate_board(self, request: BoardRequest) -> Grid[Cell]:
        """Run one generation attempt as an activity and decode its layout."""
        if request.attempt > 1:
            workflow.logger.info(
                f"First click ({request.row}, {request.col}) landed on a bomb, "
                f"regenerating board (attempt {request.attempt})"
            )
        layout = await workflow.execute_activity(
            generate_board,
            request,
            start_to_close_timeout=settings.activity_timeout,
            retry_policy=RetryPolicy(maximum_attempts=settings.activity_max_attempts),
        )
        return decode_minefield(layout)

    @workflow.signal
    async def make_move_signal(self, move_request: MoveRequest) -> None:
        """Signal to make a move (fire-and-forget)."""
        if move_request.action not in MOVE_ACTIONS:
            workflow.logger.warning(f"Ignoring unknown move action: {move_request.action}")
            return
        if self.session:
            await self.session.make_move(move_request, workflow.time())

    @workflow.update
    async def make_move_update(self, move_request: MoveRequest) -> GameView:
        """Update to make a move and return the updated state."""
        if self.session:
            await self.session.make_move(move_request, workflow.time())
        return self.get_game_state_query()

    @make_move_update.validator
    def validate_move(self, move_request: MoveRequest) -> None:
        """Reject unknown actions before they reach the history."""
        if move_request.action not in MOVE_ACTIONS:
            raise ValueError(f"Unknown move action: {move_request.action}")

    @workflow.signal
    async def new_game_signal(self, difficulty: Difficulty) -> None:
        """Signal to start over with a new board."""
        try:
            difficulty = Difficulty(difficulty)
        except ValueError:
            workflow.logger.warning(f"Ignoring unknown difficulty: {difficulty}")
            return
        if self.session:
            await self.session.new_game(difficulty, workflow.time())

    @workflow.update
    async def new_game_update(self, difficulty: Difficulty) -> GameView:
        """Update to start over and return the new state."""
        if self.session:
            await self.session.new_game(difficulty, workflow.time())
        return self.get_game_state_query()

    @new_game_update.validator
    def validate_new_game(self, difficulty: Difficulty) -> None:
        """Reject difficulties that are not presets."""
        Difficulty(difficulty)

    @workflow.signal
    def close_game_signal(self) -> None:
        """Signal to close the game."""
        self.close_requested = True
        if self.session:
            self.session.close()

    @workflow.query
    def get_game_state_query(self) -> GameView:
        """Query to get the current game state."""
        if self.session is None:
            # Return a minimal valid view while initializing
            return GameView(
                id=self.game_id,
                status=GameStatus.CLOSED if self.close_requested else GameStatus.NOT_STARTED,
                height=0,
                width=0,
                cells=[],
            )
        return self.session.view()
