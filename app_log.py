import logging
import os

from config_paths import LOG_PATH

LOGGER_NAME = "gridcalc"


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logger(log_file: str = LOG_PATH, level: int = logging.INFO) -> logging.Logger:
    """Attach a file handler to the application logger.

    curses owns the terminal, so nothing is ever written to stdout/stderr
    from here. If the log file cannot be opened the logger is left with a
    NullHandler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    try:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        f_handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        f_handler = logging.NullHandler()

    log_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    f_handler.setFormatter(log_format)
    logger.addHandler(f_handler)
    return logger
