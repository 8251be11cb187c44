"""
Unit tests for the game state machine.

Covers the session lifecycle, first-click handling, win and loss detection,
and the end-to-end scenarios on fixed boards.
"""
import asyncio
import random
from typing import Callable

import pytest

from minesweeper import engine, game
from minesweeper.grid import Grid
from minesweeper.minefield import generate_minefield
from minesweeper.types import (
    Board, BoardRequest, Bomb, BombNeighbor, Cell, Completed, Difficulty, Empty, Flagged,
    GameConfig, GameOver, GameStatus, NotStarted, Playing, Revealed, Unrevealed,
)


def deliver(state, row: int, col: int, minefield: Grid[Cell]):
    """Reveal on a NotStarted game and hand it a fixed minefield."""
    step = game.reveal(state, row, col)
    assert step.request is not None
    return game.board_generated(step.state, step.request, minefield)


def revealed_count(board: Board) -> int:
    return sum(1 for game_cell in board.values() if isinstance(game_cell, Revealed))


# ============================================================================
# New Game Tests
# ============================================================================

class TestNewGame:
    """Test starting and restarting."""

    @pytest.mark.parametrize("difficulty, expected", [
        (Difficulty.EASY, NotStarted(9, 9, 10)),
        (Difficulty.MEDIUM, NotStarted(16, 16, 40)),
        (Difficulty.HARD, NotStarted(16, 30, 99)),
    ])
    def test_presets(self, difficulty: Difficulty, expected: NotStarted) -> None:
        assert game.new_game(difficulty) == expected

    @pytest.mark.parametrize("height, width, bombs, message", [
        (0, 9, 1, "dimensions must be positive"),
        (9, 9, -1, "cannot be negative"),
        (3, 3, 9, "Too many bombs"),
    ])
    def test_invalid_config_raises_error(self, height: int, width: int, bombs: int, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            GameConfig(height, width, bombs)


# ============================================================================
# First Reveal Tests
# ============================================================================

class TestFirstReveal:
    """Test reveals against a NotStarted game."""

    def test_first_reveal_requests_board(self) -> None:
        state = game.new_game(Difficulty.EASY)
        step = game.reveal(state, 4, 4, seed=3)
        assert step.state == state
        assert step.request == BoardRequest(
            height=9, width=9, bomb_count=10, row=4, col=4, attempt=1, seed=3,
        )

    def test_first_reveal_out_of_range_is_noop(self) -> None:
        state = game.new_game(Difficulty.EASY)
        step = game.reveal(state, 9, 0)
        assert step.state == state
        assert step.request is None

    def test_flag_before_start_is_noop(self) -> None:
        state = game.new_game(Difficulty.EASY)
        assert game.flag(state, 0, 0) == state

    def test_safe_board_cascades_from_target(self, corner_minefield: Grid[Cell]) -> None:
        step = deliver(NotStarted(5, 5, 1), 0, 0, corner_minefield)
        assert step.request is None
        assert isinstance(step.state, Completed)

    def test_stale_delivery_is_ignored(self, corner_minefield: Grid[Cell]) -> None:
        request = game.reveal(NotStarted(5, 5, 1), 0, 0).request
        easy = game.new_game(Difficulty.EASY)
        step = game.board_generated(easy, request, corner_minefield)
        assert step == game.Step(easy)

    def test_delivery_after_start_is_ignored(self, wall_board: Board, wall_minefield: Grid[Cell]) -> None:
        state = Playing(wall_board)
        request = BoardRequest(height=4, width=5, bomb_count=4, row=0, col=0)
        assert game.board_generated(state, request, wall_minefield).state == state

    def test_resolve_with_seeded_generator(self, seeded_generator: Callable) -> None:
        state = game.new_game(Difficulty.EASY)
        result = asyncio.run(game.resolve(game.reveal(state, 4, 4, seed=11), seeded_generator))
        assert isinstance(result, (Playing, Completed))
        assert isinstance(result.board.get(4, 4), Revealed)
        assert engine.stats(result.board).bombs_count == 10


# ============================================================================
# Playing Tests
# ============================================================================

class TestPlaying:
    """Test reveal and flag while playing."""

    def test_reveal_numbered_cell(self, wall_board: Board) -> None:
        state = game.reveal(Playing(wall_board), 1, 1).state
        assert isinstance(state, Playing)
        assert revealed_count(state.board) == 1

    def test_reveal_empty_cell_cascades(self, wall_board: Board) -> None:
        state = game.reveal(Playing(wall_board), 0, 0).state
        assert isinstance(state, Playing)
        assert revealed_count(state.board) == 8

    def test_reveal_last_safe_region_completes(self, wall_board: Board) -> None:
        state = game.reveal(Playing(wall_board), 0, 0).state
        state = game.reveal(state, 3, 4).state
        assert isinstance(state, Completed)
        assert engine.stats(state.board).is_complete

    def test_reveal_already_revealed_is_noop(self, wall_board: Board) -> None:
        state = game.reveal(Playing(wall_board), 1, 1).state
        assert game.reveal(state, 1, 1).state == state

    def test_reveal_out_of_range_is_noop(self, wall_board: Board) -> None:
        state = Playing(wall_board)
        assert game.reveal(state, -1, 3).state == state

    def test_flag_toggles(self, wall_board: Board) -> None:
        state = game.flag(Playing(wall_board), 0, 2)
        assert state.board.get(0, 2) == Flagged(Bomb())
        state = game.flag(state, 0, 2)
        assert state == Playing(wall_board)

    def test_flag_out_of_range_is_noop(self, wall_board: Board) -> None:
        state = Playing(wall_board)
        assert game.flag(state, 7, 7) == state


# ============================================================================
# Game Over Tests
# ============================================================================

class TestGameOver:
    """Test losing and terminal states."""

    def test_reveal_bomb_ends_game(self, wall_board: Board) -> None:
        state = game.reveal(Playing(wall_board), 2, 2).state
        assert isinstance(state, GameOver)
        assert game.status_of(state) == GameStatus.GAME_OVER

    def test_finished_games_ignore_moves(self, wall_board: Board) -> None:
        over = game.reveal(Playing(wall_board), 2, 2).state
        assert game.reveal(over, 0, 0).state == over
        assert game.flag(over, 0, 0) == over

        won = Completed(engine.reveal_all(wall_board))
        assert game.reveal(won, 0, 0).state == won
        assert game.flag(won, 0, 0) == won


# ============================================================================
# Scenarios
# ============================================================================

class TestScenarios:
    """End-to-end sequences on small and preset boards."""

    def test_single_empty_cell_completes_on_first_reveal(self, seeded_generator: Callable) -> None:
        state = game.not_started(GameConfig(1, 1, 0))
        result = asyncio.run(game.resolve(game.reveal(state, 0, 0, seed=1), seeded_generator))
        assert result == Completed(Grid.from_rows([[Revealed(Empty())]]))

    def test_two_by_two_corner_is_revealed_alone(self, make_minefield: Callable) -> None:
        minefield = make_minefield("*1", "11")
        step = deliver(NotStarted(2, 2, 1), 1, 1, minefield)
        assert isinstance(step.state, Playing)
        board = step.state.board
        assert board.get(1, 1) == Revealed(BombNeighbor(1))
        assert revealed_count(board) == 1
        assert engine.stats(board).unrevealed_cells_count == 3

    def test_easy_corner_cascade_reveals_region(self) -> None:
        state = game.new_game(Difficulty.EASY)
        for seed in range(100):
            minefield = generate_minefield(9, 9, 10, random.Random(seed))
            if minefield.get(0, 0) == Empty():
                break
        else:
            pytest.fail("No seed produced an empty corner")

        step = deliver(state, 0, 0, minefield)
        assert isinstance(step.state, (Playing, Completed))
        assert revealed_count(step.state.board) > 1

    def test_bomb_reveal_discloses_board(self, wall_board: Board) -> None:
        state = game.reveal(Playing(wall_board), 1, 1).state
        state = game.reveal(state, 3, 2).state
        assert isinstance(state, GameOver)
        board = state.board
        assert all(isinstance(game_cell, Revealed) for game_cell in board.values())
        bombs = {
            pos: engine.cell_of(board.get(*pos))
            for pos in board.positions()
            if isinstance(engine.cell_of(board.get(*pos)), Bomb)
        }
        assert bombs.pop((3, 2)) == Bomb(exploded=True)
        assert all(bomb == Bomb(exploded=False) for bomb in bombs.values())

    def test_flag_does_not_block_reveal(self, wall_board: Board) -> None:
        state = game.flag(Playing(wall_board), 1, 3)
        assert state.board.get(1, 3) == Flagged(BombNeighbor(3))
        state = game.reveal(state, 1, 3).state
        assert state.board.get(1, 3) == Revealed(BombNeighbor(3))

    def test_flagged_cell_in_unrevealed_game(self, wall_board: Board) -> None:
        state = game.flag(Playing(wall_board), 0, 0)
        assert state.board.get(0, 1) == Unrevealed(BombNeighbor(2))
