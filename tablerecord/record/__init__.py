##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
The active-record core.

Modules:
    field_mapper: Derives the ordered column-to-field mapping of an entity class.
    query_builder: Renders parametrized SQL for an entity's table.
    table_record: The record lifecycle (save, load, delete, queries).
"""

from tablerecord.record.field_mapper import column, get_field_mapper
from tablerecord.record.table_record import (
    NewTableModel,
    TableRecord,
    TableRecordInterface,
    count,
    create_table_if_not_exists,
    delete,
    exec_query,
    load_all,
    load_by_id,
    load_from_row,
    save,
)


__all__ = (
    "NewTableModel",
    "TableRecord",
    "TableRecordInterface",
    "column",
    "count",
    "create_table_if_not_exists",
    "delete",
    "exec_query",
    "get_field_mapper",
    "load_all",
    "load_by_id",
    "load_from_row",
    "save",
)
