##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
The `User` entity, stored in the `users` table.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from tablerecord.connectors.connector import SQLConnector
from tablerecord.record.table_record import TableRecord, TableRecordInterface, exec_query, load_all


@dataclass
class User(TableRecordInterface):
    """
    A user of the application.

    Attributes:
        id: The primary key, assigned by the database on insert.
        name: The user's first name.
        lastname: The user's last name.
        gender: A single-letter gender code.
        record: The persistence state of this user.
    """

    id: Optional[int] = None
    name: Optional[str] = None
    lastname: Optional[str] = None
    gender: Optional[str] = None
    record: TableRecord = field(default_factory=TableRecord, repr=False, compare=False)

    def get_table_record(self) -> TableRecord:
        return self.record

    def get_primary_key_name(self) -> str:
        return "id"

    def get_primary_key_value(self) -> Optional[int]:
        return self.id

    def get_table_name(self) -> str:
        return "users"


def new_user(connector: SQLConnector = None, is_read_only: bool = False) -> User:
    """
    Create a new, unsaved user.

    Args:
        connector: The connector the user is stored through.
        is_read_only: Whether the user refuses save and delete.

    Returns:
        An empty `User`.
    """
    return User(record=TableRecord(is_new=True, is_read_only=is_read_only, connector=connector))


def load_all_users(connector: SQLConnector) -> List[User]:
    """
    Load every user.

    Args:
        connector: The connector to read through.

    Returns:
        All users, ordered by id.
    """
    return load_all(lambda: new_user(connector))


def find_users_by_lastname(connector: SQLConnector, lastname: str) -> List[User]:
    """
    Load every user with the given last name.

    Args:
        connector: The connector to read through.
        lastname: The last name to match.

    Returns:
        The matching users, ordered by id.
    """
    pivot = new_user(connector)
    pivot.get_table_record().where("lastname", lastname).order_by("id")
    return exec_query(pivot, lambda: new_user(connector))
