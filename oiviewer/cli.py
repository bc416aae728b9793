#!/usr/bin/env python
"""
OIFITS viewer - command-line entry point.

Loads each given file, checks it and prints the selected description
(XML by default, TSV summary or check report).
"""

import argparse
import sys
from typing import List, NoReturn, Optional

from oifits_model import OIFitsLoadError

from . import COMMANDS, ViewerContext, log, set_log_level
from .viewer import EXIT_LOAD, EXIT_USAGE, OIFitsViewer


class ViewerArgumentParser(argparse.ArgumentParser):
    """Argument parser exiting with the usage status code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ViewerArgumentParser(
        prog="oifits-viewer",
        description="Describe and check OIFITS files",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("paths", nargs="+", metavar="path", help="OIFITS file(s) to process")
    parser.add_argument("--conf", default=None, help="Path to configuration YAML file")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides the config file)")
    parser.add_argument("-f", "--format", action="store_true", default=None,
                        help="beautify numbers")
    parser.add_argument("-v", "--verbose", action="store_true", default=None,
                        help="dump data rows of every table")
    parser.add_argument("--check-report", action="store_true", default=None,
                        help="append the check report to the XML output")

    # one flag group per registered output mode
    modes = parser.add_mutually_exclusive_group()
    for name, func in COMMANDS.items():
        modes.add_argument(*func.meta["flags"], dest="output", action="store_const",
                           const=name, default=None, help=func.meta["help"])
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point of the viewer CLI.

    Exit status is the highest of: 0 success, 1 SEVERE diagnostics,
    2 unreadable file, 3 usage or configuration error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        ctx = ViewerContext(args.conf).override(
            output=args.output,
            format=args.format,
            verbose=args.verbose,
            check_report=args.check_report,
            log_level=args.log_level,
        )
        set_log_level(ctx.log_level)
    except (OSError, ValueError, KeyError) as e:
        log.error(f"Invalid configuration: {e}")
        sys.exit(EXIT_USAGE)

    viewer = OIFitsViewer(ctx)
    for path in args.paths:
        try:
            sys.stdout.write(viewer.process(path))
        except OIFitsLoadError as e:
            log.error(str(e))
            viewer.fail(EXIT_LOAD)

    sys.exit(viewer.status)


if __name__ == "__main__":
    main()
