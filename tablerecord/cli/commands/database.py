##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
This module defines the `DatabaseCommand` class, which provides the `database`
CLI command and its `init` and `info` subcommands.
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from tablerecord.cli.commands.command_entry_point import CommandEntryPoint
from tablerecord.config import Config
from tablerecord.db_commands import database_info, database_init


class DatabaseCommand(CommandEntryPoint):
    """
    Handles `database` CLI commands.

    Methods:
        add_parser: Adds the `database` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `database` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `database` command parser will be added.
        """
        database: ArgumentParser = subparsers.add_parser(
            "database",
            help="Initialize or inspect the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        database.set_defaults(func=self.process_command)
        database_commands = database.add_subparsers(dest="commands", required=True)

        database_commands.add_parser(
            "init",
            help="Create the tables of every model.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        database_commands.add_parser(
            "info",
            help="Print information about the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )

    def process_command(self, args: Namespace, config: Config):
        """
        Process database commands by routing to the correct function.

        Args:
            args: Parsed CLI arguments from the user.
            config: The application configuration.
        """
        if args.commands == "init":
            database_init(config)
        elif args.commands == "info":
            database_info(config)
