##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Entities shipped with TableRecord.

`MODELS` maps a model name to a constructor taking a connector; the CLI uses it
to create tables and report row counts.
"""

from typing import Callable, Dict

from tablerecord.connectors.connector import SQLConnector
from tablerecord.models.user import User, new_user
from tablerecord.record.table_record import TableRecordInterface


MODELS: Dict[str, Callable[[SQLConnector], TableRecordInterface]] = {
    "user": new_user,
}

__all__ = ("MODELS", "User", "new_user")
