"""Command-line front door for rfd.

Parses CLI options, merges them over the config file, and either prints a
headless snapshot of the first screen or starts the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .errors import RfdError
from .filesystem import DEFAULT_TRASH_DIR
from .loop import SessionOptions, render_snapshot, run_browser
from .terminal import DEFAULT_SIZE
from .ui_theme import available_theme_names


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rfd", description="Browse a directory in the terminal.")
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for the file viewer.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--trash-dir", default=None, help=f"Directory deleted entries move to (default: {DEFAULT_TRASH_DIR}).")
    parser.add_argument("--render", action="store_true", help="Print the initial screen and exit.")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    return parser


def resolve_options(args: argparse.Namespace) -> SessionOptions:
    """Command-line values win over config values, which win over defaults."""
    trash_dir = Path(args.trash_dir) if args.trash_dir else config.load_trash_dir()
    return SessionOptions(
        theme=args.theme or config.load_theme_name(),
        style=args.style or config.load_style_name(),
        no_color=args.no_color,
        trash_dir=trash_dir if trash_dir is not None else DEFAULT_TRASH_DIR,
    )


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch rfd on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    _configure_logging(args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    options = resolve_options(args)
    try:
        if args.render:
            term = shutil.get_terminal_size(DEFAULT_SIZE)
            sys.stdout.write(render_snapshot(path, options, term.lines, term.columns))
            return
        status = run_browser(path, options)
    except RfdError as exc:
        raise SystemExit(f"rfd: {exc}") from exc
    raise SystemExit(status)


if __name__ == "__main__":
    main()
