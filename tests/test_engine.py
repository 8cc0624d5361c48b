"""Tests for the engine driver."""

import pytest

from sudoku_engine.core.board import GridModel
from sudoku_engine.core.givens import DEFAULT_DEGREE, DEFAULT_GIVENS
from sudoku_engine.core.moves import InitiateGuess, SetDigit
from sudoku_engine.core.validator import check_invariants, validate_solution
from sudoku_engine.engine import Engine, Status
from sudoku_engine.strategies import BoxLineStrategy, GuessStrategy, ObviousStrategy


# A known solvable puzzle (medium difficulty)
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

# The solution to the test puzzle
TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class TestStep:
    """Tests for single steps."""

    def test_step_applies_one_move(self):
        board = GridModel.from_string(TEST_PUZZLE)
        engine = Engine(board)
        filled = board.count_filled()

        result = engine.step()

        assert result.status == Status.MOVED
        assert result.made_progress
        assert result.strategy == "Obvious"
        assert isinstance(result.move, SetDigit)
        assert board.count_filled() == filled + 1
        assert board.get(result.move.row, result.move.col) == result.move.digit

    def test_step_on_solved_board(self):
        board = GridModel.from_string(TEST_SOLUTION)
        engine = Engine(board)
        events = []
        board.subscribe("test", events.append)

        result = engine.step()

        assert result.status == Status.SOLVED
        assert not result.made_progress
        assert result.move is None
        assert events == []

    def test_priority_order(self):
        """Strategies are consulted in the order given."""
        board = GridModel(degree=2)
        board.remove_possibility(3, 3, 1)
        engine = Engine(board, strategies=[GuessStrategy(), ObviousStrategy()])

        result = engine.step()

        assert result.strategy == "Guess"
        assert isinstance(result.move, InitiateGuess)
        assert (result.move.row, result.move.col, result.move.digit) == (0, 0, 1)

    def test_stuck_without_guessing(self):
        engine = Engine(GridModel(), strategies=[ObviousStrategy(), BoxLineStrategy()])
        result = engine.step()
        assert result.status == Status.STUCK
        assert not result.made_progress

    def test_unsolvable_givens(self):
        """Conflicting givens are reported, not swallowed."""
        board = GridModel.from_string("55" + "0" * 79)
        assert board.contradiction == (0, 1)

        engine = Engine(board)

        assert engine.step().status == Status.UNSOLVABLE
        assert engine.step().status == Status.UNSOLVABLE


class TestRun:
    """Tests for running to completion."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        board = GridModel.from_string(TEST_PUZZLE)
        puzzle = board.copy()
        engine = Engine(board)

        stats = engine.run()

        assert stats.solved
        assert stats.status == Status.SOLVED
        assert board.to_string() == TEST_SOLUTION
        assert validate_solution(puzzle, board)
        assert stats.steps >= puzzle.count_empty()

    def test_solve_default_game(self):
        board = GridModel.from_givens(DEFAULT_DEGREE, DEFAULT_GIVENS)
        puzzle = board.copy()

        stats = Engine(board).run()

        assert stats.solved
        assert validate_solution(puzzle, board)
        assert check_invariants(board)

    def test_solve_empty_4x4_needs_guesses(self):
        board = GridModel(degree=2)
        stats = Engine(board).run()

        assert stats.solved
        assert stats.guesses > 0
        assert stats.moves_by_strategy["Guess"] == stats.guesses

    def test_invariants_hold_after_every_step(self):
        board = GridModel(degree=2)
        board.set_digit(0, 0, 2)
        engine = Engine(board)

        for _ in range(500):
            result = engine.step()
            assert board.is_valid()
            assert check_invariants(board)
            if not result.made_progress:
                break

        assert board.is_solved()

    def test_max_steps(self):
        board = GridModel.from_string(TEST_PUZZLE)
        stats = Engine(board).run(max_steps=3)

        assert stats.steps == 3
        assert stats.status == Status.MOVED
        assert not stats.solved

    def test_stats(self):
        board = GridModel.from_string(TEST_PUZZLE)
        stats = Engine(board).run()

        data = stats.to_dict()
        assert data["status"] == "solved"
        assert data["events_by_kind"]["set_digit"] >= 51
        assert data["time_seconds"] > 0
        assert sum(data["moves_by_strategy"].values()) == data["steps"]

    def test_unsolvable_run(self):
        board = GridModel.from_string("55" + "0" * 79)
        stats = Engine(board).run()

        assert stats.status == Status.UNSOLVABLE
        assert not stats.solved
        assert stats.steps == 0

    def test_zero_steps_reports_current_state(self):
        stats = Engine(GridModel(degree=2)).run(max_steps=0)
        assert stats.status == Status.MOVED
        assert stats.steps == 0

        solved = Engine(GridModel.from_string(TEST_SOLUTION)).run(max_steps=0)
        assert solved.status == Status.SOLVED
        assert solved.solved

    def test_max_depth_is_per_run(self):
        board = GridModel(degree=2)
        engine = Engine(board)
        first = engine.run()
        assert first.max_depth >= 1
        assert first.max_depth == engine.controller.max_depth

        engine.controller.stack.clear()
        second = engine.run()

        assert second.status == Status.SOLVED
        assert second.max_depth == 0
        assert second.guesses == 0
        assert engine.controller.max_depth == first.max_depth


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
