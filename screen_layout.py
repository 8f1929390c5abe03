import curses


def compute_regions(H, W, sheet_list_width=20):
    """Split an H x W terminal into (h, w, y, x) regions.

    layout: sheet list (left), formula bar (1 line) above the grid (right),
    status bar (1 line) across the bottom. Regions may come out empty on a
    tiny terminal; callers check ``grid`` before drawing.
    """
    status_h = 1 if H >= 1 else 0
    body_h = max(0, H - status_h)

    sheets_w = min(max(0, sheet_list_width), W)
    right_w = max(0, W - sheets_w)
    formula_h = 1 if body_h >= 1 else 0
    grid_h = max(0, body_h - formula_h)

    return {
        "sheets": (body_h, sheets_w, 0, 0),
        "formula": (formula_h, right_w, 0, sheets_w),
        "grid": (grid_h, right_w, formula_h, sheets_w),
        "status": (status_h, W, body_h, 0),
    }


class ScreenLayout:
    def __init__(self, stdscr, sheet_list_width=20):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()
        self.sheet_list_width = sheet_list_width
        self.regions = compute_regions(self.H, self.W, sheet_list_width)

        self.sheets_win = self._newwin("sheets")
        self.formula_win = self._newwin("formula")
        self.grid_win = self._newwin("grid")
        self.status_win = self._newwin("status")

    def _newwin(self, name):
        h, w, y, x = self.regions[name]
        if h <= 0 or w <= 0:
            return None
        try:
            win = curses.newwin(h, w, y, x)
        except curses.error:
            return None
        # panes never own the cursor
        win.leaveok(True)
        return win

    @property
    def grid_size(self):
        h, w, _, _ = self.regions["grid"]
        return h, w

    def is_stale(self):
        """True once the terminal has been resized since this layout was built."""
        return self.stdscr.getmaxyx() != (self.H, self.W)
