"""
Pytest configuration and shared fixtures.

Fixed minefields are written one string per row:
'*' bomb, '.' empty, '1'-'8' neighbor count.
"""
import random
from typing import Callable

import pytest

from minesweeper.grid import Grid
from minesweeper.minefield import decode_minefield, generate_minefield, new_board, request_rng
from minesweeper.types import Board, BoardRequest, Cell, MinefieldLayout


def build_minefield(*rows: str) -> Grid[Cell]:
    return decode_minefield(MinefieldLayout(height=len(rows), width=len(rows[0]), rows=list(rows)))


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def make_minefield() -> Callable[..., Grid[Cell]]:
    """Factory building a minefield from row strings."""
    return build_minefield


@pytest.fixture
def corner_minefield() -> Grid[Cell]:
    """5x5 with a single bomb in the bottom-right corner."""
    return build_minefield(
        ".....",
        ".....",
        ".....",
        "...11",
        "...1*",
    )


@pytest.fixture
def wall_minefield() -> Grid[Cell]:
    """4x5 split in two by a column of bombs."""
    return build_minefield(
        ".2*2.",
        ".3*3.",
        ".3*3.",
        ".2*2.",
    )


@pytest.fixture
def wall_board(wall_minefield: Grid[Cell]) -> Board:
    return new_board(wall_minefield)


@pytest.fixture
def single_bomb_minefield() -> Grid[Cell]:
    """3x3 with a bomb in the top-left corner."""
    return build_minefield(
        "*1.",
        "11.",
        "...",
    )


# ============================================================================
# Randomness Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def seeded_generator() -> Callable:
    """Async board generator fulfilling requests from their own seeds."""
    async def generate(request: BoardRequest) -> Grid[Cell]:
        return generate_minefield(
            request.height, request.width, request.bomb_count, request_rng(request)
        )
    return generate
