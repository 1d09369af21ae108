##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Module of all TableRecord-specific exception types.

Errors raised by the underlying database driver (e.g. `sqlite3.Error`) are
never wrapped; they reach the caller unchanged.
"""

__all__ = (
    "ReadOnlyModelError",
    "RecordNotFoundError",
    "RowScanError",
    "FieldMappingError",
    "QueryBuilderError",
    "MissingConnectorError",
    "ConnectorNotSupportedError",
)


class ReadOnlyModelError(Exception):
    """
    Exception to signal that a write was attempted on an entity that was
    constructed as read-only. Raised before any statement is issued.
    """


class RecordNotFoundError(Exception):
    """
    Exception to signal that no row matched the requested primary key.
    """


class RowScanError(Exception):
    """
    Exception to signal that a result row could not be bound into an entity,
    either because a column has no matching field or because a value could
    not be converted to the field's type.
    """


class FieldMappingError(Exception):
    """
    Exception to signal that a field map could not be derived for an entity.
    """


class QueryBuilderError(Exception):
    """
    Exception to signal that an invalid clause was staged on a query builder.
    """


class MissingConnectorError(Exception):
    """
    Exception to signal that a record has no connector attached.
    """


class ConnectorNotSupportedError(Exception):
    """
    Exception to signal that an unsupported connector type was requested.
    """
