"""Tests for guess checkpoints and backtracking."""

import pytest

from sudoku_engine.core.board import GridModel
from sudoku_engine.core.moves import ChangeGuess, MoveKind, RemovePossibility, SetDigit
from sudoku_engine.engine import GuessController, Status


def remove_all_but(board, row, col, keep):
    for digit in board.iter_digits():
        if digit not in keep:
            board.remove_possibility(row, col, digit)


def guess_board():
    """(0, 0) can be 3 or 5; (0, 1) can only be 3, so guessing 3 fails."""
    board = GridModel()
    remove_all_but(board, 0, 0, {3, 5})
    remove_all_but(board, 0, 1, {3})
    return board


class TestInitiateGuess:
    """Tests for starting a guess."""

    def test_guess_without_contradiction(self):
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        controller = GuessController(board)

        status = controller.initiate_guess(0, 0, 3)

        assert status == Status.MOVED
        assert board.get(0, 0) == 3
        assert controller.depth == 1
        assert controller.top.remaining_digits == [5]
        assert controller.top.snapshot.val[0, 0] == 0

    def test_guess_events(self):
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        events = []
        board.subscribe("test", events.append)

        GuessController(board).initiate_guess(0, 0, 5, help="try 5")

        assert events[0].kind == MoveKind.INITIATE_GUESS
        assert events[1] == SetDigit(0, 0, 5, "try 5")

    def test_rejects_set_cell(self):
        board = GridModel()
        board.set_digit(0, 0, 1)
        with pytest.raises(ValueError):
            GuessController(board).initiate_guess(0, 0, 2)

    def test_rejects_single_candidate(self):
        board = GridModel()
        remove_all_but(board, 0, 0, {4})
        with pytest.raises(ValueError):
            GuessController(board).initiate_guess(0, 0, 4)

    def test_rejects_non_candidate(self):
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        with pytest.raises(ValueError):
            GuessController(board).initiate_guess(0, 0, 4)


class TestChangeGuess:
    """Tests for retracting guesses."""

    def test_contradiction_restores_snapshot_and_tries_next(self):
        """Guess 3 fails, so the pre-guess state plus 5 at (0, 0) remains."""
        board = guess_board()
        expected = guess_board()
        expected.set_digit(0, 0, 5)
        controller = GuessController(board)
        events = []
        board.subscribe("test", events.append)

        status = controller.initiate_guess(0, 0, 3)

        assert status == Status.BACKTRACKED
        assert board == expected
        assert board.contradiction is None
        assert controller.depth == 1
        assert controller.top.guessed_digit == 5
        assert controller.top.remaining_digits == []
        assert events[0].kind == MoveKind.INITIATE_GUESS
        assert isinstance(events[-1], ChangeGuess)
        assert "trying 5" in events[-1].help

    def test_exhausted_single_checkpoint(self):
        """Both alternatives fail and there is nothing older to fall back to."""
        board = guess_board()
        remove_all_but(board, 1, 0, {5})
        controller = GuessController(board)

        status = controller.initiate_guess(0, 0, 3)

        assert status == Status.EXHAUSTED
        assert controller.depth == 0
        assert controller.exhausted
        assert controller.resolve() == Status.EXHAUSTED

    def test_cascades_to_older_checkpoint(self):
        """An exhausted guess is dropped and the older guess advances."""
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        remove_all_but(board, 4, 4, {1, 2})
        remove_all_but(board, 4, 5, {1})
        remove_all_but(board, 5, 4, {2})
        controller = GuessController(board)

        assert controller.initiate_guess(0, 0, 3) == Status.MOVED
        status = controller.initiate_guess(4, 4, 1)

        assert status == Status.BACKTRACKED
        assert controller.depth == 1
        assert controller.top.row == 0
        assert controller.top.guessed_digit == 5
        assert board.get(0, 0) == 5
        assert board.get(4, 4) == 0
        assert controller.backtracks == 3

    def test_without_cascade_stops_at_first_exhausted_level(self):
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        remove_all_but(board, 4, 4, {1, 2})
        remove_all_but(board, 4, 5, {1})
        remove_all_but(board, 5, 4, {2})
        controller = GuessController(board, cascade=False)

        controller.initiate_guess(0, 0, 3)
        status = controller.initiate_guess(4, 4, 1)

        assert status == Status.EXHAUSTED
        assert controller.depth == 1
        assert controller.top.guessed_digit == 3

    def test_change_guess_without_guess(self):
        with pytest.raises(ValueError):
            GuessController(GridModel()).change_guess()

    def test_apply_change_guess_move(self):
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        controller = GuessController(board)
        controller.initiate_guess(0, 0, 3)

        status = controller.apply(ChangeGuess("user asked"))

        assert status == Status.BACKTRACKED
        assert board.get(0, 0) == 5


class TestResolve:
    """Tests for contradiction handling."""

    def test_nothing_to_resolve(self):
        assert GuessController(GridModel()).resolve() == Status.MOVED

    def test_contradiction_without_guess_is_unsolvable(self):
        board = GridModel(degree=2)
        remove_all_but(board, 2, 2, set())
        controller = GuessController(board)

        assert controller.resolve() == Status.UNSOLVABLE
        assert board.contradiction == (2, 2)

    def test_apply_set_digit_triggers_backtracking(self):
        """A deduction made under a guess can expose the contradiction."""
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        remove_all_but(board, 0, 1, {3, 4})
        remove_all_but(board, 1, 1, {4})
        controller = GuessController(board)
        assert controller.initiate_guess(0, 0, 3) == Status.MOVED

        # (0, 1) is now forced to 4, which empties (1, 1)
        status = controller.apply(SetDigit(0, 1, 4))

        assert status == Status.BACKTRACKED
        assert board.get(0, 0) == 5
        assert board.get(0, 1) == 0

    def test_apply_remove_possibility_triggers_backtracking(self):
        """An elimination made under a guess can empty a cell."""
        board = GridModel()
        remove_all_but(board, 0, 0, {3, 5})
        remove_all_but(board, 1, 1, {3, 4})
        controller = GuessController(board)
        assert controller.initiate_guess(0, 0, 3) == Status.MOVED
        assert board.candidates(1, 1) == [4]

        status = controller.apply(RemovePossibility(1, 1, 4))

        assert status == Status.BACKTRACKED
        assert board.get(0, 0) == 5
        assert board.candidates(1, 1) == [3, 4]
        assert board.contradiction is None

    def test_held_views_show_backtracked_state(self):
        board = guess_board()
        values = board.values
        possibilities = board.possibilities

        GuessController(board).initiate_guess(0, 0, 3)

        assert board.get(0, 0) == 5
        assert values[0, 0] == 5
        assert possibilities[0, 1, 3]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
