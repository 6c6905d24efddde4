#!/usr/bin/env python3
"""
ACTION-FORMAT CLI
-----------------
Command-line front end: parses flags, loads configuration, hands the
selected workflow files to the FormatEngine and maps the outcome onto an
exit code.

Exit codes:
  0  success (or nothing to do)
  1  --check found files that would be reformatted
  2  a file, path or configuration error occurred

Author: Action-Format Team
Date: 2026-10-18
"""

import sys
import logging
import argparse
from enum import IntEnum
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from action_format.cli.formatter import ReportFormatter
from action_format.core.config import load_settings
from action_format.core.engine import FormatEngine, Mode, WORKFLOWS_DIR
from action_format.core.errors import ConfigError

VERSION = "0.1.0"


class ExitStatus(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Configures the command-line flags."""
    parser = argparse.ArgumentParser(
        prog="action-format",
        description="A fast GitHub Actions workflow formatter",
    )
    parser.add_argument("paths", nargs="*", type=Path, metavar="PATH",
                        help=f"Files or directories to format (default: {WORKFLOWS_DIR.as_posix()})")
    parser.add_argument("-c", "--check", action="store_true",
                        help="Check if files are formatted without modifying them")
    parser.add_argument("--diff", action="store_true",
                        help="Print the diff of formatting changes")
    parser.add_argument("--config", type=Path, metavar="FILE",
                        help="Path to a TOML configuration file")

    global_opts = parser.add_argument_group("Global options")
    global_opts.add_argument("-q", "--quiet", action="store_true",
                             help="Use quiet output (only show errors)")
    global_opts.add_argument("-v", "--verbose", action="store_true",
                             help="Enable debug logging")
    global_opts.add_argument("--color", choices=["auto", "always", "never"], default="auto",
                             metavar="WHEN", help="Control the use of color in output (auto, always, never)")
    global_opts.add_argument("--version", action="version", version=f"action-format {VERSION}")
    return parser


def make_console(color: str, stderr: bool = False) -> Console:
    if color == "always":
        return Console(stderr=stderr, force_terminal=True)
    if color == "never":
        return Console(stderr=stderr, color_system=None)
    return Console(stderr=stderr)


def run(args: argparse.Namespace, ui: ReportFormatter) -> ExitStatus:
    """Main processing loop."""
    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        ui.fatal(str(e))
        return ExitStatus.ERROR

    paths = list(args.paths)
    if not paths:
        if not WORKFLOWS_DIR.exists():
            ui.fatal(f"No {WORKFLOWS_DIR.as_posix()} directory found")
            return ExitStatus.ERROR
        paths = [WORKFLOWS_DIR]

    engine = FormatEngine(settings)
    try:
        targets = engine.discover(paths)
    except FileNotFoundError as e:
        ui.fatal(str(e))
        return ExitStatus.ERROR

    if args.check:
        mode = Mode.CHECK
    elif args.diff:
        mode = Mode.DIFF
    else:
        mode = Mode.WRITE

    reports = []
    for path in targets:
        report = engine.format_file(path, mode)
        reports.append(report)

        if report.error is not None:
            ui.error(report.path, report.error)
        elif not report.changed:
            continue
        elif mode is Mode.CHECK:
            ui.status("Would reformat", "yellow", report.path)
        elif mode is Mode.DIFF:
            ui.display_diff(report)
        else:
            ui.status("Reformatted", "green", report.path)

    ui.print_summary(engine.generate_summary(reports), check=mode is not Mode.WRITE)

    if any(r.error is not None for r in reports):
        return ExitStatus.ERROR
    if mode is Mode.CHECK and any(r.changed for r in reports):
        return ExitStatus.FAILURE
    return ExitStatus.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point with interrupt handling."""
    args = build_parser().parse_args(argv)
    out = make_console(args.color)
    err = make_console(args.color, stderr=True)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err, show_time=False, show_path=False)],
        force=True,
    )

    try:
        return int(run(args, ReportFormatter(out, err, quiet=args.quiet)))
    except KeyboardInterrupt:
        err.print("Terminated by user.", style="bold red")
        return int(ExitStatus.ERROR)


if __name__ == "__main__":
    sys.exit(main())
