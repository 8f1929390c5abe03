import os

import ironcalc
import pandas as pd

from app_log import get_logger

SUPPORTED_EXTENSIONS = {".xlsx", ".xlsm", ".csv"}

log = get_logger("file_type_handler")


class WorkbookLoadError(Exception):
    """The given path cannot be opened or parsed as a workbook."""


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED_EXTENSIONS:
            raise WorkbookLoadError(
                f"Unsupported file type '{self.ext or path}' (use .xlsx, .xlsm or .csv)"
            )

    def load(self, locale: str = "en", timezone: str = "UTC"):
        """Return an unevaluated ironcalc model holding the file's cells."""
        if not os.path.isfile(self.path):
            raise WorkbookLoadError(f"No such file: {self.path}")

        try:
            if self.ext == ".csv":
                return self._load_csv(locale, timezone)
            return ironcalc.load_from_xlsx(self.path, locale, timezone)
        except (OSError, ValueError, ironcalc.WorkbookError) as exc:
            raise WorkbookLoadError(f"{os.path.basename(self.path)}: {exc}") from exc

    # ---------- loaders ----------

    def _load_csv(self, locale, timezone):
        name = os.path.splitext(os.path.basename(self.path))[0] or "Sheet1"
        model = ironcalc.create(name, locale, timezone)
        try:
            model.rename_sheet(0, name)
        except ironcalc.WorkbookError as exc:
            # names with []:*?/\ or over 31 chars are not valid sheet names
            log.warning("keeping default sheet name for %s: %s", name, exc)

        try:
            df = pd.read_csv(
                self.path, header=None, dtype=str, keep_default_na=False
            )
        except pd.errors.EmptyDataError:
            return model

        for r, row in enumerate(df.itertuples(index=False, name=None), start=1):
            for c, value in enumerate(row, start=1):
                if isinstance(value, str) and value != "":
                    model.set_user_input(0, r, c, value)
        return model
