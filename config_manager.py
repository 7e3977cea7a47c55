# config_manager.py
"""
Handles the tool's settings: built-in defaults, an optional JSON settings file,
and command line flags (flags win over the file, the file wins over defaults).
Validates count/frequency/max values before any text is decorated.
"""

import argparse
import json
import os

from decorator import AUTO, Category, SizeLimit, is_valid_amount
from errors import ConfigParseError
from unicode_marks import CATEGORY_NAMES

CONFIG_FILE = "clipboard_zalgo_config.json"

INPUT_MODES = ("clipboard", "stdin", "args")
OUTPUT_MODES = ("clipboard", "stdout")

DEFAULT_SETTINGS = {
    "max": AUTO,
    "above-count": "1",
    "below-count": "1",
    "above-frequency": "60%",
    "below-frequency": "60%",
    "overlay-count": "0",
    "overlay-frequency": "60%",
    "joiner-count": "0",
    "joiner-frequency": "60%",
    "interval": 0.5,
    "quiet": False,
}

AMOUNT_KEYS = tuple(
    f"{name.lower()}-{field}" for name in CATEGORY_NAMES for field in ("count", "frequency")
)

# --- Configuration Loading ---

def load_config(path=CONFIG_FILE, required=False):
    """Loads settings from the JSON settings file, merged over the defaults.

    A missing or unreadable file falls back to the defaults, unless `required`
    is set (the user named the file explicitly), in which case it is an error.
    """
    settings = dict(DEFAULT_SETTINGS)

    if not os.path.exists(path):
        if required:
            raise ConfigParseError("config", path, "file not found")
        return settings

    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        if required:
            raise ConfigParseError("config", path, str(e)) from e
        print(f"Error reading settings from {path}: {e}. Using defaults.")
        return settings

    if not isinstance(loaded_data, dict):
        if required:
            raise ConfigParseError("config", path, "not a JSON object")
        print(f"Error: Settings file {path} is not a JSON object. Using defaults.")
        return settings

    for key, value in loaded_data.items():
        if key not in DEFAULT_SETTINGS:
            print(f"Warning: Unknown setting '{key}' in {path}. Ignoring.")
            continue
        # JSON numbers are accepted for amounts; they are kept as strings internally
        if key in AMOUNT_KEYS or key == "max":
            if isinstance(value, int) and not isinstance(value, bool):
                value = str(value)
        settings[key] = value

    return settings

# --- Configuration Saving ---

def save_config(settings, path=CONFIG_FILE):
    """Writes the persistent subset of `settings` to the JSON settings file."""
    data_to_save = {key: settings.get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data_to_save, f, indent=4, ensure_ascii=False)
    return path

# --- Validation ---

def validate_settings(settings):
    """Raises ConfigParseError for the first malformed value in `settings`."""
    for key in AMOUNT_KEYS:
        if not is_valid_amount(settings[key]):
            raise ConfigParseError(key, settings[key], "expected an integer or a percentage like '60%'")

    # SizeLimit validates 'auto' / integer / percentage
    SizeLimit(settings["max"])

    if not isinstance(settings["quiet"], bool):
        raise ConfigParseError("quiet", settings["quiet"], "expected true or false")

    interval = settings["interval"]
    try:
        interval = float(interval)
    except (TypeError, ValueError):
        raise ConfigParseError("interval", settings["interval"], "expected a number of seconds") from None
    if not interval > 0:
        raise ConfigParseError("interval", settings["interval"], "must be positive")
    settings["interval"] = interval
    return settings


def build_categories(settings):
    """Returns the ordered category list (ABOVE, BELOW, OVERLAY, JOINER)."""
    return [
        Category(
            name,
            count=settings[f"{name.lower()}-count"],
            frequency=settings[f"{name.lower()}-frequency"],
        )
        for name in CATEGORY_NAMES
    ]


def build_limit(settings):
    return SizeLimit(settings["max"])

# --- Command Line ---

def build_parser():
    parser = argparse.ArgumentParser(
        prog="clipboard-zalgo",
        description="Watches the clipboard and decorates copied text with random combining marks.",
    )
    parser.add_argument("values", nargs="*", help="Text to decorate when using --input args")
    parser.add_argument("-m", "--max", help="Maximum output length: 'auto', an integer or N%% of the input")
    parser.add_argument("-a", "--above-count", help="Passes of marks above each character")
    parser.add_argument("-b", "--below-count", help="Passes of marks below each character")
    parser.add_argument("-A", "--above-frequency", help="Marks above per pass (integer or N%%)")
    parser.add_argument("-B", "--below-frequency", help="Marks below per pass (integer or N%%)")
    parser.add_argument("--overlay-count", help="Passes of overlay marks")
    parser.add_argument("--overlay-frequency", help="Overlay marks per pass (integer or N%%)")
    parser.add_argument("--joiner-count", help="Passes of joining marks")
    parser.add_argument("--joiner-frequency", help="Joining marks per pass (integer or N%%)")
    parser.add_argument("--interval", help="Clipboard polling interval in seconds")
    parser.add_argument("-q", "--quiet", action="store_true", default=None, help="Suppress non-essential output")
    parser.add_argument("-i", "--input", choices=INPUT_MODES, default="clipboard", help="Where the text comes from")
    parser.add_argument("-o", "--output", choices=OUTPUT_MODES, default=None,
                        help="Where the decorated text goes (defaults to the input side)")
    parser.add_argument("--once", action="store_true", help="Decorate the current clipboard once and exit")
    parser.add_argument("--list-categories", action="store_true", help="List the mark categories and exit")
    parser.add_argument("--tray", action="store_true", help="Show a system tray icon while watching")
    parser.add_argument("--config", default=None, help=f"Settings file (default: {CONFIG_FILE})")
    parser.add_argument("--save-config", action="store_true", help="Write the effective settings to the settings file")
    return parser


def parse_settings(argv=None):
    """Parses flags, merges them over the settings file and validates the result.

    Returns (settings, args). Raises ConfigParseError on malformed values.
    """
    args = build_parser().parse_args(argv)
    config_path = args.config or CONFIG_FILE
    settings = load_config(config_path, required=args.config is not None)

    for key in DEFAULT_SETTINGS:
        value = getattr(args, key.replace("-", "_"))
        if value is not None:
            settings[key] = value

    if args.output is None:
        args.output = "clipboard" if args.input == "clipboard" else "stdout"
    args.config_path = config_path

    return validate_settings(settings), args
