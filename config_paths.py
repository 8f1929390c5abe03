import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridcalc")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "gridcalc.log")

# default settings
TICK_INTERVAL_MS_DEFAULT = 200
COLUMN_WIDTH_DEFAULT = 11
SHEET_LIST_WIDTH_DEFAULT = 20
PAGE_SIZE_DEFAULT = 10
LOCALE_DEFAULT = "en"
TIMEZONE_DEFAULT = "UTC"

# key -> (minimum accepted value)
_INT_SETTINGS = {
    "tick_interval_ms": ("TICK_INTERVAL_MS", 10),
    "column_width": ("COLUMN_WIDTH", 3),
    "sheet_list_width": ("SHEET_LIST_WIDTH", 0),
    "page_size": ("PAGE_SIZE", 1),
}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "TICK_INTERVAL_MS": TICK_INTERVAL_MS_DEFAULT,
        "COLUMN_WIDTH": COLUMN_WIDTH_DEFAULT,
        "SHEET_LIST_WIDTH": SHEET_LIST_WIDTH_DEFAULT,
        "PAGE_SIZE": PAGE_SIZE_DEFAULT,
        "LOCALE": LOCALE_DEFAULT,
        "TIMEZONE": TIMEZONE_DEFAULT,
    }

    if os.path.exists(CONFIG_JSON):
        try:
            import json

            with open(CONFIG_JSON, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                for key, (cfg_key, minimum) in _INT_SETTINGS.items():
                    value = data.get(key)
                    # bool is an int subclass; reject it explicitly
                    if isinstance(value, bool) or not isinstance(value, int):
                        continue
                    if value >= minimum:
                        cfg[cfg_key] = value

                locale = data.get("locale")
                if isinstance(locale, str) and locale.strip():
                    cfg["LOCALE"] = locale.strip()
                tz = data.get("timezone")
                if isinstance(tz, str) and tz.strip():
                    cfg["TIMEZONE"] = tz.strip()
        except (OSError, ValueError):
            pass

    return cfg
