import argparse
import curses
import locale
import logging
import os
import sys

import config_paths
from curses_renderer import CursesTableRenderer
from file_type_handler import FileTypeHandler, GridLoadError, parse_char_option
from orchestrator import Orchestrator, read_curses_key

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


logger = logging.getLogger("tblview")

DESCRIPTION = """\
Interactive table viewer for the command line.

Move between cells using the arrow keys or Vim's hjkl. Page up and down.
Jump to start via Home or gg. Jump to end via End or G. Sort by column
under cursor with a (ascending) or d (descending); return to original
order with o. Search for substring in column under cursor by typing /
followed by search term and Enter. Repeat last search starting from
current cursor position by typing Space. Exit with q or Ctrl-x.
"""


def _char_arg(text: str) -> str:
    try:
        return parse_char_option(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tblview",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", help="path to CSV/TSV file (default: stdin)")
    parser.add_argument(
        "-d",
        "--delimiter",
        type=_char_arg,
        help="field delimiter (default: tab for .tsv, comma otherwise)",
    )
    parser.add_argument("-q", "--quote", type=_char_arg, help='quote character (default: ")')
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(config_paths.LOG_LEVELS),
        help="log level for the log file in the config directory",
    )
    parser.add_argument("-V", "--version", action="version", version=__version__)
    return parser


def setup_logging(level: str):
    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    try:
        config_paths.ensure_config_dirs()
        logging.basicConfig(filename=config_paths.LOG_PATH, level=level, format=fmt)
    except OSError:
        # the terminal belongs to curses, so there is nowhere else to log
        logging.basicConfig(level=level, format=fmt, handlers=[logging.NullHandler()])


def attach_tty():
    """Point fd 0 at the controlling terminal once stdin has been consumed as data."""
    fd = os.open("/dev/tty", os.O_RDONLY)
    try:
        os.dup2(fd, 0)
    finally:
        os.close(fd)


def _curses_main(stdscr, grid, padding):
    # keys such as Ctrl-c and Ctrl-q must reach the viewer
    curses.raw()
    stdscr.keypad(True)
    renderer = CursesTableRenderer(stdscr)
    Orchestrator(renderer, grid, padding).run(lambda: read_curses_key(stdscr))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = config_paths.load_config()
    setup_logging(args.log_level or cfg["LOG_LEVEL"])

    delimiter = args.delimiter if args.delimiter is not None else cfg["DEFAULT_DELIMITER"]
    quote = args.quote if args.quote is not None else cfg["DEFAULT_QUOTE"]
    handler = FileTypeHandler(args.file, delimiter=delimiter, quote=quote)

    try:
        grid = handler.load()
    except GridLoadError as exc:
        if args.file:
            print(f"Error reading file '{args.file}': {exc.reason}", file=sys.stderr)
        else:
            print(f"Error reading from stdin: {exc.reason}", file=sys.stderr)
        return 1

    if args.file is None:
        try:
            attach_tty()
        except OSError as exc:
            print(f"Cannot open terminal for input: {exc}", file=sys.stderr)
            return 1

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("unsupported locale; falling back to C")
    # Make ESC snappy
    os.environ.setdefault("ESCDELAY", str(cfg["ESC_DELAY"]))

    try:
        curses.wrapper(_curses_main, grid, cfg["COLUMN_PADDING"])
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130
    except (OSError, curses.error) as exc:
        # curses.wrapper has already restored the terminal
        logger.exception("terminal I/O failed")
        print(f"tblview: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
