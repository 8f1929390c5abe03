import curses

from app_log import get_logger
from app_state import Mode
from events import InputEvent

log = get_logger("input")

# get_wch delivers characters as str and special keys as int
KEY_ENTER_CODES = ("\n", "\r", curses.KEY_ENTER)
KEY_BACKSPACE_CODES = (curses.KEY_BACKSPACE, "\x7f", "\b")


class InputController:
    """Two-mode key handling: NAVIGATE moves the selection, INPUT edits a cell.

    Each mode has its own binding table mapping a key code to an action.
    Actions mutate the AppState passed in and talk to ``state.workbook``.
    """

    def __init__(self, page_size: int = 10):
        self.page_size = page_size

        self.navigate_bindings = {
            curses.KEY_UP: self.move_up,
            curses.KEY_DOWN: self.move_down,
            curses.KEY_LEFT: self.move_left,
            curses.KEY_RIGHT: self.move_right,
            curses.KEY_NPAGE: self.page_down,
            curses.KEY_PPAGE: self.page_up,
            "s": self.next_sheet,
            "a": self.previous_sheet,
            "e": self.start_edit,
            "+": self.new_sheet,
            "q": self.quit,
        }

        self.input_bindings = {}
        for code in KEY_ENTER_CODES:
            self.input_bindings[code] = self.commit
        for code in KEY_BACKSPACE_CODES:
            self.input_bindings[code] = self.backspace

    # ---------- public entrypoint ----------
    def handle_event(self, state, event) -> bool:
        """Apply one event. Returns True if a binding consumed it."""
        if not isinstance(event, InputEvent):
            # ticks only drive redraws
            return False
        return self.handle_key(state, event.key)

    def handle_key(self, state, ch: int | str) -> bool:
        if state.mode is Mode.INPUT:
            action = self.input_bindings.get(ch)
            if action is None:
                return self.insert_char(state, ch)
        else:
            action = self.navigate_bindings.get(ch)
            if action is None:
                return False
        action(state)
        return True

    # ---------- navigate ----------
    def move_up(self, state):
        if state.selected_row > 1:
            state.selected_row -= 1

    def move_down(self, state):
        if state.selected_row < state.workbook.max_row:
            state.selected_row += 1

    def move_left(self, state):
        if state.selected_col > 1:
            state.selected_col -= 1

    def move_right(self, state):
        if state.selected_col < state.workbook.max_column:
            state.selected_col += 1

    def page_down(self, state):
        state.selected_row = min(
            state.workbook.max_row, state.selected_row + self.page_size
        )

    def page_up(self, state):
        if state.selected_row > self.page_size:
            state.selected_row -= self.page_size
        else:
            state.selected_row = 1

    def next_sheet(self, state):
        state.selected_sheet += 1
        if state.selected_sheet >= len(state.sheet_names):
            state.selected_sheet = 0

    def previous_sheet(self, state):
        state.selected_sheet = max(0, state.selected_sheet - 1)

    def start_edit(self, state):
        formula = state.workbook.get_formula(
            state.selected_sheet, state.selected_row, state.selected_col
        )
        state.edit_buffer = formula or ""
        state.mode = Mode.INPUT

    def new_sheet(self, state):
        name = state.workbook.add_sheet()
        state.workbook.recalculate()
        state.refresh_sheet_names()
        log.info("added sheet %s", name)
        state.set_status(f"Added {name}")

    def quit(self, state):
        state.running = False

    # ---------- input ----------
    def insert_char(self, state, ch: int | str) -> bool:
        if not isinstance(ch, str) or len(ch) != 1 or not ch.isprintable():
            return False
        state.edit_buffer += ch
        return True

    def backspace(self, state):
        state.edit_buffer = state.edit_buffer[:-1]

    def commit(self, state):
        text = state.edit_buffer
        label = state.selected_label()
        state.workbook.set_cell_input(
            state.selected_sheet, state.selected_row, state.selected_col, text
        )
        state.workbook.recalculate()
        log.debug("set %s on sheet %d: %r", label, state.selected_sheet, text)
        state.edit_buffer = ""
        state.mode = Mode.NAVIGATE
        state.set_status(f"{label} updated")
