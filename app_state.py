import time
from enum import Enum

from viewport import ViewportWindow


class Mode(Enum):
    NAVIGATE = "navigate"
    INPUT = "input"


class AppState:
    """All mutable application state, owned by the frame loop."""

    def __init__(self, workbook, file_path=None):
        self.workbook = workbook
        self.file_path = file_path

        # selection
        self.selected_sheet = 0
        self.selected_row = 1
        self.selected_col = 1

        self.window = ViewportWindow()
        self.mode = Mode.NAVIGATE
        self.edit_buffer = ""
        self.sheet_names: list[str] = list(workbook.sheet_names())

        self.running = True

        # transient status message
        self.status_msg: str | None = None
        self.status_msg_until = 0.0

    def refresh_sheet_names(self):
        self.sheet_names = list(self.workbook.sheet_names())
        if self.selected_sheet >= len(self.sheet_names):
            self.selected_sheet = max(0, len(self.sheet_names) - 1)

    def selected_label(self) -> str:
        return f"{self.workbook.column_label(self.selected_col)}{self.selected_row}"

    def set_status(self, msg: str, seconds: float = 3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds
