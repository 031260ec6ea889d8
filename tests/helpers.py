from falling_block.game import Board, ShapeKind


def fill_row(board: Board, row: int, skip=(), color: int = int(ShapeKind.I)) -> None:
    """Occupy every cell of `row` except the columns in `skip`."""
    for x in range(board.cols):
        if x not in skip:
            board.set_cell(x, row, color)


class RecordingAdapter:
    """Stands in for a render/input adapter and records what the core reports."""

    def __init__(self):
        self.frames = []
        self.cleared_rows = []

    def render(self, board, piece):
        self.frames.append((board.copy(), piece))

    def on_line_cleared(self, row):
        self.cleared_rows.append(row)
