import curses
import selectors
import sys

from app_log import get_logger
from events import EventSource
from grid_renderer import GridRenderer, build_frame
from input_controller import InputController
from screen_layout import ScreenLayout
from viewport import compute_window, row_header_width, visible_counts

log = get_logger("orchestrator")


def window_for_frame(state, grid_h, grid_w, column_width):
    """Recompute ``state.window`` for a grid area of grid_h x grid_w.

    Returns (window, row_header_width). The window is None when not even one
    cell fits; ``state.window`` is then left as it was.
    """
    rows, _ = visible_counts(grid_h, grid_w, column_width)
    header_w = row_header_width(state.selected_row, state.window, rows)
    rows, cols = visible_counts(grid_h, grid_w, column_width, header_w)
    window = compute_window(
        state.selected_row, state.selected_col, state.window, rows, cols
    )
    if window is not None:
        state.window = window
    return window, header_w


class Orchestrator:
    def __init__(self, stdscr, app_state, config=None, event_source=None):
        self.stdscr = stdscr
        cfg = config or {}
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.keypad(True)
        # keys are read only after the event source reports pending input
        self.stdscr.nodelay(True)

        self.state = app_state
        self.column_width = cfg.get("COLUMN_WIDTH", 11)
        self.sheet_list_width = cfg.get("SHEET_LIST_WIDTH", 20)
        tick_interval = cfg.get("TICK_INTERVAL_MS", 200) / 1000.0

        self.layout = ScreenLayout(stdscr, self.sheet_list_width)
        self.renderer = GridRenderer()
        self.controller = InputController(page_size=cfg.get("PAGE_SIZE", 10))
        self._selector = None
        if event_source is None:
            self._selector = selectors.DefaultSelector()
            self._selector.register(sys.stdin, selectors.EVENT_READ)
            event_source = EventSource(self.wait_for_input, self.read_keys, tick_interval)
        self.events = event_source

    # ---------------- input ----------------

    def wait_for_input(self, timeout):
        """Runs on the event-source thread; watches stdin and never calls curses."""
        return bool(self._selector.select(timeout))

    def read_keys(self):
        keys = []
        while True:
            try:
                keys.append(self.stdscr.get_wch())
            except curses.error:
                # nothing left to read
                return keys

    # ---------------- UI ----------------

    def _refresh_layout(self):
        if not self.layout.is_stale():
            return
        curses.update_lines_cols()
        self.stdscr.clear()
        self.stdscr.noutrefresh()
        self.layout = ScreenLayout(self.stdscr, self.sheet_list_width)

    def redraw(self):
        self._refresh_layout()
        grid_h, grid_w = self.layout.grid_size
        window, header_w = window_for_frame(
            self.state, grid_h, grid_w, self.column_width
        )
        frame = build_frame(self.state, window, self.column_width, header_w)
        self.renderer.draw(frame, self.layout, self.state)

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.events.start()
        try:
            self.redraw()
            while self.state.running:
                event = self.events.get()
                self.controller.handle_event(self.state, event)
                if not self.state.running:
                    break
                self.redraw()
        finally:
            self.events.stop()
            if self._selector is not None:
                self._selector.close()
            log.info("frame loop stopped")
