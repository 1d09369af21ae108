##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
The record lifecycle: saving, updating, loading, and deleting entities.

Any dataclass implementing `TableRecordInterface` and carrying a `TableRecord`
becomes persistable without entity-specific SQL. The functions here only talk to
that interface, to the field map, and to the entity's `SQLConnector`.

An entity starts out new (`is_new=True`). A successful `save` inserts it and
reloads it from the database, after which it is persisted. Saving a persisted
entity updates its row by primary key and reloads it. `delete` removes the row
but leaves the in-memory object as it was. Read-only entities refuse `save` and
`delete` before any statement is issued.

Statements are acquired per call and closed on every exit path. Errors raised
by the connector are propagated unchanged.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from tablerecord.connectors.connector import ExecResult, SQLConnector, Statement
from tablerecord.exceptions import MissingConnectorError, ReadOnlyModelError, RecordNotFoundError, RowScanError
from tablerecord.record.field_mapper import (
    all_field,
    get_columns_no_primary,
    get_field_map,
    get_fields_value_no_primary,
)
from tablerecord.record.query_builder import (
    QueryBuilder,
    gen_count_query,
    gen_create_table_query,
    gen_delete_query,
    gen_save_query,
    gen_select_all_query,
    gen_select_by_id_query,
    gen_update_query,
)


LOG = logging.getLogger(__name__)


class TableRecordInterface(ABC):
    """
    The capability set every persistable entity implements.

    Methods:
        get_table_record: Return the entity's `TableRecord`.
        get_primary_key_name: Return the name of the primary-key column.
        get_primary_key_value: Return the current primary-key value.
        get_table_name: Return the table the entity is stored in.
    """

    @abstractmethod
    def get_table_record(self) -> "TableRecord":
        """Return the entity's persistence state."""
        raise NotImplementedError("Subclasses of `TableRecordInterface` must implement a `get_table_record` method.")

    @abstractmethod
    def get_primary_key_name(self) -> str:
        """Return the name of the primary-key column."""
        raise NotImplementedError(
            "Subclasses of `TableRecordInterface` must implement a `get_primary_key_name` method."
        )

    @abstractmethod
    def get_primary_key_value(self) -> Optional[int]:
        """Return the current primary-key value."""
        raise NotImplementedError(
            "Subclasses of `TableRecordInterface` must implement a `get_primary_key_value` method."
        )

    @abstractmethod
    def get_table_name(self) -> str:
        """Return the table the entity is stored in."""
        raise NotImplementedError("Subclasses of `TableRecordInterface` must implement a `get_table_name` method.")


NewTableModel = Callable[[], TableRecordInterface]


class TableRecord(QueryBuilder):
    """
    Persistence state carried by every entity, plus a query builder for ad-hoc
    queries against the entity's table.

    Attributes:
        is_new (bool): True until the entity has been inserted or loaded.
        is_read_only (bool): Fixed at construction; blocks save and delete.
        connector (SQLConnector): The connector statements run on.

    Methods:
        set_is_new: Set `is_new`; returns the record for chaining.
        set_sql_connection: Attach a connector; returns the record for chaining.
        get_db: Return the attached connector.
        prepare_stmt: Acquire a statement for the query staged on the builder.
    """

    def __init__(self, is_new: bool = True, is_read_only: bool = False, connector: SQLConnector = None):
        """
        Args:
            is_new: Whether the entity has never been stored.
            is_read_only: Whether save and delete are refused.
            connector: The connector statements run on.
        """
        super().__init__()
        self._is_new: bool = is_new
        self._is_read_only: bool = is_read_only
        self.connector: SQLConnector = connector

    def __repr__(self) -> str:
        return (
            f"TableRecord(is_new={self._is_new}, is_read_only={self._is_read_only}, "
            f"connector={type(self.connector).__name__ if self.connector else None})"
        )

    @property
    def is_new(self) -> bool:
        return self._is_new

    @property
    def is_read_only(self) -> bool:
        return self._is_read_only

    def set_is_new(self, new: bool) -> "TableRecord":
        """
        Set whether the record is new.

        Args:
            new: The new value.

        Returns:
            This record.
        """
        self._is_new = new
        return self

    def set_sql_connection(self, connector: SQLConnector) -> "TableRecord":
        """
        Attach a connector.

        Args:
            connector: The connector statements should run on.

        Returns:
            This record.
        """
        self.connector = connector
        return self

    def get_db(self) -> SQLConnector:
        """Return the attached connector."""
        return self.connector

    def prepare_stmt(self, table_name: str, columns: str = "*") -> Statement:
        """
        Acquire a statement for the SELECT staged on this builder.

        Args:
            table_name: The table to select from.
            columns: The SELECT list.

        Returns:
            A statement that must be closed by the caller. Bind `params` to run it.
        """
        if self.connector is None:
            raise MissingConnectorError(f"No connector is attached to this record; can't query '{table_name}'.")
        return self.connector.prepare(self.build_query(table_name, columns))


def get_table_record_connection(entity: TableRecordInterface) -> SQLConnector:
    """
    Get the connector of an entity.

    Args:
        entity: The entity.

    Returns:
        The entity's connector.

    Raises:
        MissingConnectorError: If the entity has no connector attached.
    """
    connector = entity.get_table_record().get_db()
    if connector is None:
        raise MissingConnectorError(
            f"No connector is attached to {type(entity).__name__} ({entity.get_table_name()})."
        )
    return connector


def _check_writable(entity: TableRecordInterface, action: str):
    if entity.get_table_record().is_read_only:
        raise ReadOnlyModelError(
            f"Can't {action} {type(entity).__name__}: '{entity.get_table_name()}' is a read-only model."
        )


def _execute_save_update_query(connector: SQLConnector, query: str, params: List[Any]) -> ExecResult:
    with connector.prepare(query) as stmt:
        return stmt.exec(params)


def _insert(entity: TableRecordInterface):
    """Insert a new entity and reload it by its generated key."""
    connector = get_table_record_connection(entity)
    query = gen_save_query(entity)
    values = get_fields_value_no_primary(entity)

    result = _execute_save_update_query(connector, query, values)
    LOG.debug(f"Inserted a {entity.get_table_name()} row with id '{result.last_insert_id}'.")

    load_by_id(entity, result.last_insert_id)
    entity.get_table_record().set_is_new(False)


def _update(entity: TableRecordInterface):
    """Update a persisted entity by primary key and reload it."""
    primary_key = entity.get_primary_key_value()
    if not get_columns_no_primary(entity):
        # Nothing to write when the primary key is the only column
        load_by_id(entity, primary_key)
        return

    connector = get_table_record_connection(entity)
    query = gen_update_query(entity)
    values = get_fields_value_no_primary(entity) + [primary_key]

    result = _execute_save_update_query(connector, query, values)
    LOG.debug(f"Updated {result.rows_affected} {entity.get_table_name()} row(s) with id '{primary_key}'.")

    load_by_id(entity, primary_key)


def save(entity: TableRecordInterface):
    """
    Save an entity: insert it if it is new, otherwise update its row. Either
    way the entity is reloaded from the database afterwards, so it reflects
    exactly what was stored.

    The write and the reload are separate statements; if the reload fails the
    error is raised even though the write was committed.

    Args:
        entity: The entity to save.

    Raises:
        ReadOnlyModelError: If the entity is read-only. Nothing is written.
        RecordNotFoundError: If the row can't be found when reloading.
    """
    _check_writable(entity, "save")

    if entity.get_table_record().is_new:
        _insert(entity)
    else:
        _update(entity)


def load_by_id(entity: TableRecordInterface, record_id: int):
    """
    Load the row with primary key `record_id` into `entity`, overwriting every
    mapped field.

    Args:
        entity: The entity to load into.
        record_id: The primary-key value to look up.

    Raises:
        RecordNotFoundError: If no row has that key. The entity is left unchanged.
    """
    connector = get_table_record_connection(entity)
    query = gen_select_by_id_query(entity)

    with connector.prepare(query) as stmt:
        with stmt.query([record_id]) as rows:
            row = rows.next()

    if row is None:
        raise RecordNotFoundError(
            f"{entity.get_table_name().capitalize()} with {entity.get_primary_key_name()} '{record_id}' "
            "not found in the database."
        )

    load_from_row(row, entity)


def load_from_row(row: Dict[str, Any], entity: TableRecordInterface, connector: SQLConnector = None):
    """
    Bind one result row into an entity by column name, mark it as persisted, and
    attach a connector so the entity can be saved or deleted on its own.

    Every value is converted before any field is assigned, so a row that fails
    to scan leaves the entity unchanged.

    Args:
        row: A column-name to value mapping.
        entity: The entity to load into.
        connector: The connector to attach. Defaults to the entity's own.

    Raises:
        RowScanError: If a column has no matching field or a value can't be converted.
    """
    field_map = get_field_map(entity)

    converted = []
    for column_name, value in row.items():
        accessor = field_map.get(column_name)
        if accessor is None:
            raise RowScanError(f"Missing destination for column '{column_name}' in {type(entity).__name__}.")
        converted.append((accessor, accessor.from_db(value)))

    for accessor, value in converted:
        setattr(entity, accessor.attribute, value)

    record = entity.get_table_record()
    record.set_is_new(False).set_sql_connection(connector or record.get_db())


def delete(entity: TableRecordInterface) -> int:
    """
    Delete an entity's row by primary key. The in-memory entity is not changed.

    Args:
        entity: The entity whose row should be deleted.

    Returns:
        The number of rows deleted.

    Raises:
        ReadOnlyModelError: If the entity is read-only. Nothing is deleted.
    """
    _check_writable(entity, "delete")
    connector = get_table_record_connection(entity)
    primary_key = entity.get_primary_key_value()

    LOG.debug(f"Attempting to delete {entity.get_table_name()} with id '{primary_key}'...")
    with connector.prepare(gen_delete_query(entity)) as stmt:
        result = stmt.exec([primary_key])

    if result.rows_affected == 0:
        LOG.warning(f"No rows were deleted for {entity.get_table_name()} with id '{primary_key}'.")
    else:
        LOG.debug(f"Successfully deleted {entity.get_table_name()} with id '{primary_key}'.")
    return result.rows_affected


def _materialize(rows: Any, new_table_model: NewTableModel, connector: SQLConnector) -> List[TableRecordInterface]:
    entities = []
    for row in rows:
        entity = new_table_model()
        load_from_row(row, entity, connector)
        entities.append(entity)
    return entities


def load_all(new_table_model: NewTableModel) -> List[TableRecordInterface]:
    """
    Load every row of a table, one fresh entity per row.

    Args:
        new_table_model: A callable returning a new, empty entity of the table's type.

    Returns:
        A list of entities ordered by primary key.
    """
    pivot = new_table_model()
    connector = get_table_record_connection(pivot)

    with connector.prepare(gen_select_all_query(pivot)) as stmt:
        with stmt.query() as rows:
            entities = _materialize(rows, new_table_model, connector)

    LOG.debug(f"Retrieved {len(entities)} {pivot.get_table_name()} row(s).")
    return entities


def exec_query(entity: TableRecordInterface, new_table_model: NewTableModel) -> List[TableRecordInterface]:
    """
    Run the predicates staged on an entity's record against its table and load
    the matching rows. The staged state is cleared afterwards, whether or not
    the query succeeded.

    Args:
        entity: The entity whose record holds the staged predicates.
        new_table_model: A callable returning a new, empty entity of the table's type.

    Returns:
        A list of matching entities.
    """
    record = entity.get_table_record()
    try:
        connector = get_table_record_connection(entity)
        with record.prepare_stmt(entity.get_table_name(), all_field(entity)) as stmt:
            with stmt.query(record.params) as rows:
                return _materialize(rows, new_table_model, connector)
    finally:
        record.reset_stmt()


def count(new_table_model: NewTableModel) -> int:
    """
    Count the rows of a table.

    Args:
        new_table_model: A callable returning a new, empty entity of the table's type.

    Returns:
        The number of rows.
    """
    pivot = new_table_model()
    connector = get_table_record_connection(pivot)
    with connector.prepare(gen_count_query(pivot)) as stmt:
        with stmt.query() as rows:
            return int(rows.next()["total"])


def create_table_if_not_exists(entity: TableRecordInterface):
    """
    Create the entity's table from its field map if it doesn't exist yet.

    Args:
        entity: An entity of the table's type.
    """
    connector = get_table_record_connection(entity)
    query = gen_create_table_query(entity)
    with connector.prepare(query) as stmt:
        stmt.exec()
    LOG.debug(f"Ensured table '{entity.get_table_name()}' exists.")
