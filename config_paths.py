import json
import os

from file_type_handler import parse_char_option

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tblview")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "tblview.log")

# default settings
COLUMN_PADDING_DEFAULT = 2
DEFAULT_DELIMITER_DEFAULT = None
DEFAULT_QUOTE_DEFAULT = '"'
LOG_LEVEL_DEFAULT = "WARNING"
ESC_DELAY_DEFAULT = 25

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _single_char(value):
    if not isinstance(value, str):
        return None
    try:
        return parse_char_option(value)
    except ValueError:
        return None


def load_config():
    cfg = {
        "COLUMN_PADDING": COLUMN_PADDING_DEFAULT,
        "DEFAULT_DELIMITER": DEFAULT_DELIMITER_DEFAULT,
        "DEFAULT_QUOTE": DEFAULT_QUOTE_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
        "ESC_DELAY": ESC_DELAY_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    padding = data.get("column_padding")
    if isinstance(padding, int) and not isinstance(padding, bool) and padding >= 0:
        cfg["COLUMN_PADDING"] = padding

    delimiter = _single_char(data.get("delimiter"))
    if delimiter is not None:
        cfg["DEFAULT_DELIMITER"] = delimiter

    quote = _single_char(data.get("quote"))
    if quote is not None:
        cfg["DEFAULT_QUOTE"] = quote

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    esc_delay = data.get("esc_delay")
    if isinstance(esc_delay, int) and not isinstance(esc_delay, bool) and esc_delay >= 0:
        cfg["ESC_DELAY"] = esc_delay

    return cfg
