"""Command-line entry point: pick lines from stdin, print the result to stdout."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import Any

from . import __version__
from .config import configure_logging, environment_options, is_debug_enabled, load_config
from .errors import ConfigError
from .keys import Keymap
from .options import resolve_options
from .output import render_for_cli
from .session import Session
from .source import read_lines
from .styles import style_table

logger = logging.getLogger(__name__)

CONTROLS = """\
Controls:
  up/left/k, down/right/j   move the cursor
  0-9                       jump to a line number
  enter/s                   pick the line (toggle it with -m)
  S                         toggle from the last touched line to here (-m)
  c                         finish and print the selection
  u / d                     move the highlighted line up / down
  q, ctrl-c                 quit without output

Example:
  ls | seline -m --preserve-order | xargs rm
"""

# (flag(s), option name, help)
_OPTION_FLAGS: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("-i", "--output-index"), "output_index", "print the index instead of the line (locks lines)"),
    (("-m", "--multiline"), "multiline", "select several lines, print one per line"),
    (("--hide-numbers",), "hide_numbers", "do not print line numbers"),
    (("--preserve-order",), "preserve_order", "print selections in the order they were made"),
    (("-c", "--compact"), "compact", "pack lines side by side at tab stops"),
    (("--skip-blanks",), "skip_blanks", "the cursor skips empty lines"),
    (("--no-color",), "no_color", "use [ ]/[X] markers instead of color"),
    (("--lock-lines",), "lock_lines", "disable moving lines with u/d"),
)


def _pass_through_undecodable(*streams: object) -> None:
    """Carry bytes that are not valid UTF-8 from stdin to stdout unchanged."""
    for stream in streams:
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="surrogateescape")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="seline",
        description="Pick one or more lines of stdin interactively and print them to stdout.",
        epilog=CONTROLS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"seline {__version__}")
    for flags, dest, help_text in _OPTION_FLAGS:
        # None means "not given", so config file values are kept.
        parser.add_argument(*flags, dest=dest, action="store_true", default=None, help=help_text)
    parser.add_argument(
        "--skip-char",
        metavar="CHAR",
        help="the cursor skips lines starting with CHAR",
    )
    parser.add_argument("--config", metavar="PATH", help="config file (default: $SELINE_CONFIG or ~/.config/seline/config.yaml)")
    parser.add_argument("--debug", action="store_true", help="write a debug log to ~/.config/seline/debug.log")
    return parser


def cli_options(args: argparse.Namespace) -> dict[str, Any]:
    """Option overrides actually given on the command line."""
    overrides = {dest: True for _, dest, _ in _OPTION_FLAGS if getattr(args, dest) is not None}
    if args.skip_char is not None:
        overrides["skip_char"] = args.skip_char
    return overrides


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
        configure_logging(args.debug or is_debug_enabled(cfg))
        options = resolve_options(cfg["options"], environment_options(), cli_options(args))
        keymap = Keymap.from_config(cfg["keys"])
        styles = style_table(options.no_color, cfg["styles"])
    except ConfigError as e:
        print(f"seline: {e}", file=sys.stderr)
        sys.exit(2)

    logger.debug("Starting with argv %s", argv if argv is not None else sys.argv[1:])
    _pass_through_undecodable(sys.stdin, sys.stdout)
    session = Session(read_lines(sys.stdin), options, keymap=keymap, styles=styles)
    try:
        result = session.run()
    except KeyboardInterrupt:
        sys.exit(130)
    except OSError as e:
        print(f"seline: cannot open terminal: {e}", file=sys.stderr)
        sys.exit(1)

    output = render_for_cli(result)
    if output:
        print(output)


if __name__ == "__main__":
    main()
