##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Connectors execute SQL on behalf of the record layer.

Modules:
    connector: Defines the `SQLConnector` interface along with the `Statement`,
        `Rows`, and `ExecResult` types it hands back.
    sqlite_connector: Implements `SQLConnector` on top of the standard `sqlite3` driver.
    connector_factory: Builds a connector from a `Config` object.
"""
