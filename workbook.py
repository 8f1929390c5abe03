import ironcalc

from app_log import get_logger
from file_type_handler import FileTypeHandler, WorkbookLoadError

__all__ = ["Workbook", "WorkbookLoadError"]

log = get_logger("workbook")

# sheet limits of the xlsx format, enforced by the engine
MAX_ROW = 1048576
MAX_COLUMN = 16384


class Workbook:
    """Thin adapter over an ironcalc model.

    Sheets are addressed by 0-based index, cells by 1-based (row, col).
    Formulas are evaluated only by ``recalculate``.
    """

    max_row = MAX_ROW
    max_column = MAX_COLUMN

    def __init__(self, name: str, model, locale: str = "en", timezone: str = "UTC"):
        self.name = name
        self.model = model
        self.locale = locale
        self.timezone = timezone

    @classmethod
    def new_empty(cls, name: str, locale: str = "en", timezone: str = "UTC") -> "Workbook":
        try:
            model = ironcalc.create(name, locale, timezone)
        except ironcalc.WorkbookError as exc:
            raise WorkbookLoadError(f"Cannot create workbook: {exc}") from exc
        return cls(name, model, locale, timezone)

    @classmethod
    def load(cls, path: str, locale: str = "en", timezone: str = "UTC") -> "Workbook":
        """Open a workbook file. Raises WorkbookLoadError."""
        model = FileTypeHandler(path).load(locale, timezone)
        wb = cls(path, model, locale, timezone)
        wb.recalculate()
        log.info("loaded %s (%d sheets)", path, len(wb.sheet_names()))
        return wb

    # ---------- structure ----------

    def sheet_names(self) -> list[str]:
        return [props["name"] for props in self.model.get_worksheets_properties()]

    def add_sheet(self) -> str:
        self.model.new_sheet()
        return self.sheet_names()[-1]

    @staticmethod
    def column_label(index: int) -> str:
        return ironcalc.column_name_from_number(index)

    # ---------- cells ----------

    def get_formula(self, sheet: int, row: int, col: int) -> str | None:
        """Raw input of a cell (formula or literal), None when empty."""
        content = self.model.get_cell_content(sheet, row, col)
        return content or None

    def get_formatted_value(self, sheet: int, row: int, col: int) -> str:
        return self.model.get_formatted_cell_value(sheet, row, col)

    def set_cell_input(self, sheet: int, row: int, col: int, text: str):
        if text == "":
            self.model.clear_cell_contents(sheet, row, col)
        else:
            self.model.set_user_input(sheet, row, col, text)

    def recalculate(self):
        self.model.evaluate()
        log.debug("recalculated %d sheets", len(self.sheet_names()))
