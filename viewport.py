import math
from dataclasses import dataclass

HEADER_ROWS = 1
ROW_HEADER_WIDTH = 3


@dataclass(frozen=True)
class ViewportWindow:
    """Inclusive range of rendered addresses: [min_row, max_row] x [min_col, max_col]."""

    min_row: int = 1
    max_row: int = 1
    min_col: int = 1
    max_col: int = 1

    def contains(self, row: int, col: int) -> bool:
        return self.min_row <= row <= self.max_row and self.min_col <= col <= self.max_col

    @property
    def rows(self) -> range:
        return range(self.min_row, self.max_row + 1)

    @property
    def columns(self) -> range:
        return range(self.min_col, self.max_col + 1)


def scroll_axis(selected: int, minimum: int, visible: int) -> tuple[int, int]:
    """Slide one axis just enough to reveal ``selected``.

    Returns the new (minimum, maximum). The window is anchored at ``minimum``
    and only moves when the selection falls outside it; it is never recentred.
    """
    maximum = minimum + visible - 1
    if selected >= maximum:
        maximum = selected
        minimum = maximum - visible + 1
    elif selected < minimum:
        minimum = selected
        maximum = minimum + visible - 1

    if minimum < 1:
        minimum = 1
        maximum = minimum + visible - 1
    return minimum, maximum


def compute_window(
    selected_row: int,
    selected_col: int,
    previous: ViewportWindow,
    visible_rows: int,
    visible_cols: int,
) -> ViewportWindow | None:
    """Window for this frame, or None when the grid has no room for a single cell."""
    if visible_rows < 1 or visible_cols < 1:
        return None
    min_row, max_row = scroll_axis(selected_row, previous.min_row, visible_rows)
    min_col, max_col = scroll_axis(selected_col, previous.min_col, visible_cols)
    return ViewportWindow(min_row, max_row, min_col, max_col)


def row_header_width(selected_row: int, previous: ViewportWindow, visible_rows: int) -> int:
    """Gutter width that fits every row number this frame can show."""
    largest = max(previous.min_row + max(visible_rows, 1) - 1, selected_row)
    return max(ROW_HEADER_WIDTH, len(str(largest)))


def visible_counts(
    grid_height: int,
    grid_width: int,
    column_width: int,
    header_width: int = ROW_HEADER_WIDTH,
) -> tuple[int, int]:
    """Rows and columns that fit in a grid area once the headers are drawn.

    A partially visible last column still counts, so the grid fills the width.
    """
    rows = grid_height - HEADER_ROWS
    body_width = grid_width - header_width
    if body_width <= 0 or column_width <= 0:
        return rows, 0
    return rows, math.ceil(body_width / column_width)
