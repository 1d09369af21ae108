##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
The commands of the `tablerecord` CLI. Each command is a `CommandEntryPoint`
registered in `ALL_COMMANDS`.
"""

from tablerecord.cli.commands.database import DatabaseCommand
from tablerecord.cli.commands.users import UsersCommand


ALL_COMMANDS = [
    DatabaseCommand(),
    UsersCommand(),
]
