import curses
from dataclasses import dataclass, field

from app_state import Mode
from status_bar import render_status, status_context
from viewport import ViewportWindow

CARET = "|"


@dataclass(frozen=True)
class CellView:
    text: str
    selected: bool = False


@dataclass
class Frame:
    """Everything one redraw shows; built without touching curses."""

    formula_bar: str
    sheets: list[CellView]
    window: ViewportWindow | None = None
    column_headers: list[CellView] = field(default_factory=list)
    row_headers: list[CellView] = field(default_factory=list)
    body: list[list[CellView]] = field(default_factory=list)
    column_width: int = 11
    row_header_width: int = 3


def formula_bar_text(state) -> str:
    wb = state.workbook
    if state.mode is Mode.INPUT:
        text = f"{state.edit_buffer}{CARET}"
    else:
        sheet, row, col = state.selected_sheet, state.selected_row, state.selected_col
        text = wb.get_formula(sheet, row, col)
        if text is None:
            text = wb.get_formatted_value(sheet, row, col)
    return f"{state.selected_label()}: {text}"


def build_frame(state, window, column_width=11, row_header_width=3) -> Frame:
    """Read-only projection of the state and workbook onto a window.

    ``window`` may be None when the terminal is too small for the grid; the
    frame then carries only the formula bar and sheet list.
    """
    wb = state.workbook
    sheets = [
        CellView(name, i == state.selected_sheet)
        for i, name in enumerate(state.sheet_names)
    ]
    frame = Frame(
        formula_bar=formula_bar_text(state),
        sheets=sheets,
        window=window,
        column_width=column_width,
        row_header_width=row_header_width,
    )
    if window is None:
        return frame

    sel_row, sel_col = state.selected_row, state.selected_col
    frame.column_headers = [
        CellView(wb.column_label(c), c == sel_col) for c in window.columns
    ]
    for r in window.rows:
        frame.row_headers.append(CellView(str(r), r == sel_row))
        frame.body.append(
            [
                CellView(
                    wb.get_formatted_value(state.selected_sheet, r, c),
                    r == sel_row and c == sel_col,
                )
                for c in window.columns
            ]
        )
    return frame


class GridRenderer:
    PAIR_HEADER = 1
    PAIR_HEADER_SELECTED = 2
    PAIR_CELL = 3
    PAIR_CELL_SELECTED = 4
    PAIR_SHEET_SELECTED = 5

    def __init__(self):
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_YELLOW, curses.COLOR_WHITE)
            curses.init_pair(
                self.PAIR_HEADER_SELECTED, curses.COLOR_WHITE, curses.COLOR_YELLOW
            )
            curses.init_pair(self.PAIR_CELL, curses.COLOR_WHITE, curses.COLOR_BLACK)
            curses.init_pair(
                self.PAIR_CELL_SELECTED, curses.COLOR_YELLOW, curses.COLOR_WHITE
            )
            curses.init_pair(
                self.PAIR_SHEET_SELECTED, curses.COLOR_MAGENTA, curses.COLOR_WHITE
            )
        except curses.error:
            pass

    @staticmethod
    def _attr(pair, fallback=curses.A_NORMAL):
        try:
            return curses.color_pair(pair)
        except curses.error:
            return fallback

    @staticmethod
    def _put(win, y, x, text, n, attr=curses.A_NORMAL):
        if n <= 0:
            return
        try:
            win.addnstr(y, x, text, n, attr)
        except curses.error:
            # writing the bottom-right cell of a window raises after drawing
            pass

    # ---------- panes ----------
    def draw(self, frame: Frame, layout, state):
        self.draw_sheets(frame, layout.sheets_win)
        self.draw_formula_bar(frame, layout.formula_win)
        self.draw_grid(frame, layout.grid_win)
        self.draw_status(state, layout.status_win)
        curses.doupdate()

    def draw_sheets(self, frame, win):
        if win is None:
            return
        win.erase()
        h, w = win.getmaxyx()
        try:
            win.box()
        except curses.error:
            pass
        self._put(win, 0, 2, "Sheets", w - 4)
        for i, sheet in enumerate(frame.sheets):
            y = i + 1
            if y >= h - 1:
                break
            attr = (
                self._attr(self.PAIR_SHEET_SELECTED, curses.A_REVERSE)
                if sheet.selected
                else curses.A_NORMAL
            )
            self._put(win, y, 1, sheet.text.ljust(w - 2), w - 2, attr)
        win.noutrefresh()

    def draw_formula_bar(self, frame, win):
        if win is None:
            return
        win.erase()
        _, w = win.getmaxyx()
        self._put(win, 0, 0, frame.formula_bar.ljust(w), w)
        win.noutrefresh()

    def draw_grid(self, frame, win):
        if win is None:
            return
        win.erase()
        h, w = win.getmaxyx()
        if frame.window is None:
            self._put(win, 0, 0, "Terminal too small", w)
            win.noutrefresh()
            return

        cw = frame.column_width
        rw = frame.row_header_width
        header = self._attr(self.PAIR_HEADER, curses.A_BOLD)
        header_sel = self._attr(self.PAIR_HEADER_SELECTED, curses.A_REVERSE)
        cell = self._attr(self.PAIR_CELL)
        cell_sel = self._attr(self.PAIR_CELL_SELECTED, curses.A_REVERSE)

        self._put(win, 0, 0, " " * rw, rw, header)
        x = rw
        for col in frame.column_headers:
            self._put(win, 0, x, col.text.center(cw), min(cw, w - x), header_sel if col.selected else header)
            x += cw

        for i, (row, cells) in enumerate(zip(frame.row_headers, frame.body)):
            y = i + 1
            if y >= h:
                break
            self._put(win, y, 0, row.text.rjust(rw), rw, header_sel if row.selected else header)
            x = rw
            for c in cells:
                text = c.text[:cw].ljust(cw)
                self._put(win, y, x, text, min(cw, w - x), cell_sel if c.selected else cell)
                x += cw
        win.noutrefresh()

    def draw_status(self, state, win):
        if win is None:
            return
        win.erase()
        _, w = win.getmaxyx()
        self._put(win, 0, 0, render_status(status_context(state), w), w, curses.A_REVERSE)
        win.noutrefresh()
