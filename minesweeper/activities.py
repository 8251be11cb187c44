"""Temporal activities for game logic.

Board generation is the only part of a game that needs randomness, so it
is the only part that runs outside the workflow.
"""
from temporalio import activity

from minesweeper.minefield import encode_minefield, generate_minefield, request_rng
from minesweeper.types import BoardRequest, MinefieldLayout


@activity.defn
async def generate_board(request: BoardRequest) -> MinefieldLayout:
    """Create a new minefield with randomly placed bombs."""
    minefield = generate_minefield(
        request.height,
        request.width,
        request.bomb_count,
        request_rng(request),
    )
    activity.logger.info(
        f"Generated {request.height}x{request.width} board with {request.bomb_count} bombs "
        f"for first click ({request.row}, {request.col}), attempt {request.attempt}"
    )
    return encode_minefield(minefield)
