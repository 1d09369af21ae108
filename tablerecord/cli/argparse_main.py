##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Main CLI parser setup for the `tablerecord` command-line interface.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from tablerecord import VERSION
from tablerecord.cli.commands import ALL_COMMANDS


class HelpParser(ArgumentParser):
    """
    An `ArgumentParser` that shows the full usage text whenever the command
    line can't be parsed.
    """

    def error(self, message: str):
        """
        Print `message` and the help text, then exit with status 2.

        Args:
            message: What was wrong with the command line.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Build the `tablerecord` parser with the global options and one subparser
    per command in `ALL_COMMANDS`.

    Returns:
        An `ArgumentParser` object with every command registered.
    """
    parser = HelpParser(
        prog="tablerecord",
        description="Manage a TableRecord database.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See tablerecord <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=None,
        help="Set log level: DEBUG, INFO, WARNING, ERROR [Default: the level in app.yaml, else INFO]",
    )
    parser.add_argument(
        "-c",
        "--config-dir",
        type=str,
        default=None,
        help="Directory containing the app.yaml to use [Default: the current directory, then ~/.tablerecord]",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
