from falling_block.game import Board, clear_full_rows
from tests.helpers import fill_row


def test_no_full_rows_is_a_no_op():
    board = Board(10, 20)
    fill_row(board, 19, skip={0})
    calls = []
    assert clear_full_rows(board, calls.append) == 0
    assert calls == []
    assert board.occupied_count() == 9


def test_adjacent_full_rows_cleared_bottom_to_top():
    board = Board(10, 20)
    fill_row(board, 19)
    fill_row(board, 18)
    board.set_cell(4, 17, 3)
    calls = []
    assert clear_full_rows(board, calls.append) == 2
    # the same index is examined again after each removal
    assert calls == [19, 19]
    assert board.occupied_count() == 1
    assert board.cell(4, 19) == 3


def test_separated_full_rows_and_shift_distance():
    board = Board(10, 20)
    fill_row(board, 19)
    fill_row(board, 18, skip={2})
    fill_row(board, 17)
    board.set_cell(6, 16, 5)
    before = board.occupied_count()
    calls = []
    cleared = clear_full_rows(board, calls.append)
    assert cleared == 2
    assert calls == [19, 18]
    assert board.occupied_count() == before - 2 * board.cols
    # partial row had one full row below it, the lone cell had two
    assert not board.is_row_full(19)
    assert board.cell(2, 19) == 0 and board.cell(0, 19) != 0
    assert board.cell(6, 18) == 5
    assert board.grid.shape == (20, 10)


def test_callback_is_optional():
    board = Board(10, 20)
    fill_row(board, 0)
    assert clear_full_rows(board) == 1
    assert board.occupied_count() == 0


def _notify_while_full(board, seen):
    def on_line_cleared(row):
        # the row is still on the board when the notification arrives
        assert board.is_row_full(row)
        seen.append(row)
    return on_line_cleared


def test_notification_precedes_removal_for_single_row():
    board = Board(10, 20)
    fill_row(board, 19)
    board.set_cell(0, 18, 2)
    seen = []
    assert clear_full_rows(board, _notify_while_full(board, seen)) == 1
    assert seen == [19]
    assert board.cell(0, 19) == 2


def test_notification_precedes_removal_for_adjacent_rows():
    board = Board(10, 20)
    fill_row(board, 19)
    fill_row(board, 18)
    seen = []
    assert clear_full_rows(board, _notify_while_full(board, seen)) == 2
    assert seen == [19, 19]
    assert board.occupied_count() == 0
