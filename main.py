# main.py
"""
Main entry point for Clipboard Zalgo.
Parses settings, builds the decorator, and either watches the clipboard or
decorates text from stdin / arguments once.
"""

import sys

from colorama import Fore, Style, init

import config_manager
import content_sources
import unicode_marks
from clipboard_handler import ClipboardHandler, read_clipboard_text, write_clipboard_text
from decorator import Decorator
from errors import ClipboardAccessError, ConfigParseError

YELLOW = Fore.YELLOW
CYAN = Fore.CYAN
RED = Fore.RED


def make_reporter(quiet):
    """Returns the on_transform callback that echoes the captured input to stderr."""
    def report(original, result):
        if quiet:
            return
        print(f"{YELLOW}Input:{Style.RESET_ALL}", file=sys.stderr)
        print(original, file=sys.stderr)
        print("\n", file=sys.stderr)
    return report


def list_categories():
    """Prints every mark category and how many marks it holds."""
    print(f"{CYAN}Categories:")
    for name in unicode_marks.CATEGORY_NAMES:
        print(f"{name:<16}-- {len(unicode_marks.charset_for(name))} marks")


def run_clipboard(decorator, settings, args):
    """Decorates clipboard text: once with --once, otherwise until interrupted."""
    quiet = settings["quiet"]
    report = make_reporter(quiet)

    if args.output == "stdout":
        text = read_clipboard_text()
        if not text:
            return 0
        result = decorator.transform(text)
        content_sources.write_stdout(result)
        report(text, result)
        return 0

    handler = ClipboardHandler(
        transform=decorator.transform,
        interval=settings["interval"],
        on_transform=report,
    )

    if args.once:
        handler.poll_once()
        return 0

    if not quiet:
        print(f"{CYAN}Watching the clipboard. Press Ctrl+C to stop.")

    if args.tray:
        # pystray picks a display backend at import time
        from tray_icon import TrayController
        TrayController(handler, quiet=quiet).run()
    else:
        handler.run()
    return 0


def run_text(decorator, settings, args):
    """Decorates stdin or the positional arguments once."""
    if args.input == "stdin":
        texts = [content_sources.read_stdin()]
    else:
        texts = list(content_sources.iter_arguments(args.values))

    report = make_reporter(settings["quiet"])
    for text in texts:
        result = decorator.transform(text)
        if args.output == "clipboard":
            write_clipboard_text(result)
        else:
            content_sources.write_stdout(result)
        report(text, result)
    return 0


def main(argv=None):
    init(autoreset=True)

    try:
        settings, args = config_manager.parse_settings(argv)
    except ConfigParseError as e:
        print(f"{RED}Configuration error: {e}", file=sys.stderr)
        return 2

    if args.save_config:
        path = config_manager.save_config(settings, args.config_path)
        if not settings["quiet"]:
            print(f"{CYAN}Settings saved to {path}", file=sys.stderr)

    if args.list_categories:
        list_categories()
        return 0

    decorator = Decorator(
        limit=config_manager.build_limit(settings),
        categories=config_manager.build_categories(settings),
    )

    try:
        if args.input == "clipboard":
            return run_clipboard(decorator, settings, args)
        return run_text(decorator, settings, args)
    except ClipboardAccessError as e:
        print(f"{RED}Clipboard error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        if not settings["quiet"]:
            print("\nStopped.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
