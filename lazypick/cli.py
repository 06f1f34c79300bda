"""Command-line front door for lazypick.

Reads candidate lines from a file or stdin, runs a picker on the controlling
terminal, and prints the chosen lines to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_session_defaults, save_session_defaults
from .errors import LazyPickError
from .options import SessionOptions
from .session import run_selection
from .terminal import open_tty
from .ui_theme import available_theme_names

EXIT_CHOSEN = 0
EXIT_NO_MATCH = 1
EXIT_CANCELLED = 130


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypick",
        description="Filter a list on the terminal and print the chosen lines.",
    )
    parser.add_argument("path", nargs="?", type=Path, default=None, help="File with one item per line. Defaults to stdin.")
    parser.add_argument("-m", "--multi", action="store_true", help="Allow marking several items with +/-.")
    parser.add_argument("--limit", type=_positive_int, default=None, help="Maximum number of marked items.")
    parser.add_argument("--header", default=None, help="Header line shown above the prompt.")
    parser.add_argument("--placeholder", default=None, help="Prompt text shown before typing.")
    parser.add_argument("--prompt", default=None, help="Prompt prefix (default: '> ').")
    parser.add_argument("-q", "--query", default="", help="Initial filter query.")
    parser.add_argument("--literal", action="store_true", help="Match the query literally, not as a regex.")
    parser.add_argument("--free-text", action="store_true", help="Accept any printable key as query text.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Maximum list rows to draw.")
    parser.add_argument(
        "--reverse",
        action="store_true",
        help="Anchor the picker to the bottom of the screen, list growing upwards.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}, plain).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--indicator", default=None, help="Cursor marker glyph.")
    parser.add_argument("--selected-prefix", default=None, help="Prefix for marked items.")
    parser.add_argument("--unselected-prefix", default=None, help="Prefix for unmarked items.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store the given glyph, prompt, and theme flags as future defaults.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def configure_logging(log_file: Path | None) -> logging.Handler | None:
    """Send package debug logs to ``log_file``; stderr belongs to the UI.

    Returns the attached handler so the caller can detach it when done.
    """
    if log_file is None:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    package_logger = logging.getLogger("lazypick")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def release_logging(handler: logging.Handler | None) -> None:
    if handler is None:
        return
    logging.getLogger("lazypick").removeHandler(handler)
    handler.close()


def read_items(path: Path | None) -> list[str]:
    """Return non-empty lines from ``path`` or stdin."""
    if path is None:
        text = sys.stdin.read()
    else:
        text = path.read_text(encoding="utf-8", errors="replace")
    return [line for line in text.splitlines() if line]


def options_from_args(args: argparse.Namespace) -> SessionOptions:
    """Merge persisted defaults under explicit command-line flags."""
    values: dict[str, object] = dict(load_session_defaults())
    explicit = {
        "header": args.header,
        "placeholder": args.placeholder,
        "prompt": args.prompt,
        "indicator": args.indicator,
        "selected_prefix": args.selected_prefix,
        "unselected_prefix": args.unselected_prefix,
        "theme": args.theme,
        "limit": args.limit,
        "height": args.height,
    }
    values.update({key: value for key, value in explicit.items() if value is not None})
    values.update(
        query=args.query,
        multi=args.multi,
        regex=not args.literal,
        free_text=args.free_text,
        reverse=args.reverse,
        no_color=args.no_color,
    )
    if not args.multi:
        values.update(limit=1, selected_prefix="", unselected_prefix="")
    return SessionOptions.from_mapping(values).validate()


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the picker, and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = configure_logging(args.log_file)
    try:
        return _run_picker(args)
    finally:
        release_logging(handler)


def _run_picker(args: argparse.Namespace) -> int:
    if args.path is not None and not args.path.exists():
        raise SystemExit(f"Path not found: {args.path}")

    try:
        options = options_from_args(args)
    except LazyPickError as exc:
        raise SystemExit(str(exc)) from exc

    if args.save_defaults:
        save_session_defaults(vars(args))

    items = read_items(args.path)
    if not items:
        return EXIT_NO_MATCH

    try:
        with open_tty() as tty_fd:
            outcome = run_selection(items, options, stdin_fd=tty_fd, stdout_fd=tty_fd)
    except LazyPickError as exc:
        raise SystemExit(str(exc)) from exc
    except OSError as exc:
        raise SystemExit(f"terminal error: {exc}") from exc

    if outcome.cancelled:
        return EXIT_CANCELLED
    if not outcome.items:
        return EXIT_NO_MATCH
    for item in outcome.items:
        sys.stdout.write(f"{item.text}\n")
    sys.stdout.flush()
    return EXIT_CHOSEN


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
