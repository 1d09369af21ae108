##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
TableRecord's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
TABLERECORD_HOME: str = os.path.join(USER_HOME, ".tablerecord")
DEFAULT_DB_PATH: str = os.path.join(TABLERECORD_HOME, "tablerecord.db")
DB_PATH_ENV_VAR: str = "TABLERECORD_DB_PATH"
