import curses
import os
import sys

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

from _version import __version__
from app_log import get_logger, setup_logger
from app_state import AppState
from config_paths import ensure_config_dirs, load_config
from orchestrator import Orchestrator
from workbook import Workbook, WorkbookLoadError

USAGE = (
    "gridcalc - terminal spreadsheet viewer/editor\n\n"
    "Usage:\n"
    "  gridcalc [path]      open .xlsx, .xlsm or .csv (empty workbook if omitted)\n"
    "  gridcalc -v | -V     print version\n"
    "  gridcalc -h | --help show this help\n"
)
DEFAULT_WORKBOOK_NAME = "model.xlsx"

log = get_logger()


def load_workbook(path, cfg):
    if path:
        return Workbook.load(path, cfg["LOCALE"], cfg["TIMEZONE"])
    return Workbook.new_empty(DEFAULT_WORKBOOK_NAME, cfg["LOCALE"], cfg["TIMEZONE"])


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args:
        print(USAGE)
        return 0

    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    try:
        ensure_config_dirs()
    except OSError:
        pass
    setup_logger()
    cfg = load_config()

    path = args[0] if args else None
    log.info("starting (path=%s)", path)
    try:
        workbook = load_workbook(path, cfg)
    except WorkbookLoadError as exc:
        log.error("load failed: %s", exc)
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    state = AppState(workbook, path)

    def curses_main(stdscr):
        Orchestrator(stdscr, state, cfg).run()

    try:
        curses.wrapper(curses_main)
    except curses.error as exc:
        log.error("terminal error: %s", exc)
        print(f"Terminal error: {exc}", file=sys.stderr)
        return 1
    log.info("exit")
    return 0


if __name__ == "__main__":
    sys.exit(main())
