##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
This module defines the `UsersCommand` class, which provides the `users` CLI
command with `list`, `add`, and `delete` subcommands.
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from tablerecord.cli.commands.command_entry_point import CommandEntryPoint
from tablerecord.config import Config
from tablerecord.db_commands import users_add, users_delete, users_list


class UsersCommand(CommandEntryPoint):
    """
    Handles `users` CLI commands.

    Methods:
        add_parser: Adds the `users` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `users` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `users` command parser will be added.
        """
        users: ArgumentParser = subparsers.add_parser(
            "users",
            help="List, add, or delete users.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        users.set_defaults(func=self.process_command)
        users_commands = users.add_subparsers(dest="commands", required=True)

        users_list_parser = users_commands.add_parser(
            "list",
            help="Print the stored users.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        users_list_parser.add_argument(
            "-l",
            "--lastname",
            type=str,
            default=None,
            help="Only list users with this last name.",
        )

        users_add_parser = users_commands.add_parser(
            "add",
            help="Save a new user and print its id.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        users_add_parser.add_argument("name", type=str, help="The user's first name.")
        users_add_parser.add_argument("lastname", type=str, help="The user's last name.")
        users_add_parser.add_argument("gender", type=str, help="The user's gender code.")

        users_delete_parser = users_commands.add_parser(
            "delete",
            help="Delete one or more users by id.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        users_delete_parser.add_argument(
            "ids",
            type=int,
            nargs="+",
            help="A space-delimited list of ids of users to delete.",
        )

    def process_command(self, args: Namespace, config: Config):
        """
        Process users commands by routing to the correct function.

        Args:
            args: Parsed CLI arguments from the user.
            config: The application configuration.
        """
        if args.commands == "list":
            users_list(config, args)
        elif args.commands == "add":
            users_add(config, args)
        elif args.commands == "delete":
            users_delete(config, args)
