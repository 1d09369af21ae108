##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Functions behind the `database` and `users` CLI commands.

Each function receives the loaded `Config` explicitly, opens a connector for the
duration of the command, and closes it on the way out.
"""

import logging
from argparse import Namespace
from typing import List

from tabulate import tabulate

from tablerecord.config import Config
from tablerecord.connectors.connector_factory import create_connector
from tablerecord.exceptions import RecordNotFoundError
from tablerecord.models import MODELS
from tablerecord.models.user import User, find_users_by_lastname, load_all_users, new_user
from tablerecord.record.table_record import count, create_table_if_not_exists, delete, load_by_id, save


LOG = logging.getLogger(__name__)


def database_init(config: Config):
    """
    Create the table of every registered model.

    Args:
        config: The application configuration.
    """
    with create_connector(config) as connector:
        for model_name, constructor in MODELS.items():
            create_table_if_not_exists(constructor(connector))
            LOG.info(f"Table for model '{model_name}' is ready.")


def database_info(config: Config):
    """
    Print information about the database to the console.

    Args:
        config: The application configuration.
    """
    with create_connector(config) as connector:
        print("TableRecord Database Information")
        print("--------------------------------")
        print(f"- Database Type: {connector.connector_type}")
        print(f"- Database Version: {connector.get_version()}")
        print(f"- Connection String: {connector.get_connection_string()}")
        print()
        print("Tables:")
        for constructor in MODELS.values():
            pivot = constructor(connector)
            create_table_if_not_exists(pivot)
            print(f"- {pivot.get_table_name()}: {count(lambda: constructor(connector))} row(s)")


def _print_users(users: List[User]):
    if not users:
        LOG.info("No users found.")
        return
    rows = [(user.id, user.name, user.lastname, user.gender) for user in users]
    print(tabulate(rows, headers=["ID", "Name", "Lastname", "Gender"]))


def users_list(config: Config, args: Namespace):
    """
    Print every user, or only the users with the given last name.

    Args:
        config: The application configuration.
        args: Parsed CLI arguments from the user.
    """
    with create_connector(config) as connector:
        create_table_if_not_exists(new_user(connector))
        if args.lastname:
            users = find_users_by_lastname(connector, args.lastname)
        else:
            users = load_all_users(connector)
        _print_users(users)


def users_add(config: Config, args: Namespace):
    """
    Save a new user and print its id.

    Args:
        config: The application configuration.
        args: Parsed CLI arguments from the user.
    """
    with create_connector(config) as connector:
        user = new_user(connector)
        create_table_if_not_exists(user)
        user.name = args.name
        user.lastname = args.lastname
        user.gender = args.gender
        save(user)
        LOG.info(f"Saved user '{user.name} {user.lastname}'.")
        print(user.id)


def users_delete(config: Config, args: Namespace):
    """
    Delete users by id. Ids without a row are logged and skipped.

    Args:
        config: The application configuration.
        args: Parsed CLI arguments from the user.
    """
    with create_connector(config) as connector:
        for user_id in args.ids:
            user = new_user(connector)
            try:
                load_by_id(user, user_id)
            except RecordNotFoundError as exc:
                LOG.warning(str(exc))
                continue
            delete(user)
            LOG.info(f"Deleted user with id '{user_id}'.")
