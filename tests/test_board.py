import pytest

from tictactoe_server.board import BOARD_CELLS, WIN_COMBINATIONS, Board, Symbol


def test_new_board_is_empty():
    board = Board()
    assert board.is_empty()
    assert not board.is_full()
    assert board.winner() is None
    assert all(board.is_free(pos) for pos in range(BOARD_CELLS))


def test_place_and_reset():
    board = Board()
    board.place(4, Symbol.X)
    assert board[4] is Symbol.X
    assert not board.is_free(4)
    board.reset()
    assert board.is_empty()
    assert board.cells() == (None,) * BOARD_CELLS


@pytest.mark.parametrize('pos', [-1, 9, 100, -100, '3', None, 2.0, True])
def test_out_of_range_or_non_int_is_not_free(pos):
    assert Board().is_free(pos) is False


def test_place_on_taken_cell_raises_and_keeps_cell():
    board = Board()
    board.place(0, Symbol.X)
    with pytest.raises(ValueError):
        board.place(0, Symbol.O)
    assert board[0] is Symbol.X


def test_place_out_of_range_raises():
    with pytest.raises(ValueError):
        Board().place(9, Symbol.X)


@pytest.mark.parametrize('line', WIN_COMBINATIONS)
def test_every_winning_line(line):
    board = Board()
    for pos in line:
        board.place(pos, Symbol.O)
    assert board.winner() is Symbol.O


def test_mixed_line_is_not_a_win():
    board = Board()
    board.place(0, Symbol.X)
    board.place(1, Symbol.X)
    board.place(2, Symbol.O)
    assert board.winner() is None


def test_winner_uses_first_matching_line():
    board = Board()
    for pos in (3, 4, 5):
        board.place(pos, Symbol.O)
    for pos in (0, 1, 2):
        board.place(pos, Symbol.X)
    assert board.winner() is Symbol.X


def test_full_board_without_winner():
    board = Board()
    layout = "XOXXOOOXX"
    for pos, mark in enumerate(layout):
        board.place(pos, Symbol(mark))
    assert board.is_full()
    assert board.winner() is None


def test_symbol_helpers():
    assert Symbol.X.opposite() is Symbol.O
    assert Symbol.O.opposite() is Symbol.X
    assert Symbol.for_seat(0) is Symbol.X
    assert Symbol.for_seat(1) is Symbol.O
