##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Parametrized SQL generation for entity tables.

`QueryBuilder` accumulates WHERE predicates (and optional ordering/paging) for
ad-hoc SELECTs. Every predicate value becomes a `?` placeholder, and `params`
holds the bound values in declaration order. The `gen_*` functions render the
fixed statements the record lifecycle needs from an entity's field map.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from tablerecord.exceptions import QueryBuilderError
from tablerecord.record.field_mapper import base_type, get_columns_no_primary, get_field_map
from tablerecord.utils import is_valid_identifier


LOG = logging.getLogger(__name__)

OPERATORS = ("=", "!=", "<>", "<", "<=", ">", ">=", "LIKE", "NOT LIKE")


def _check_identifier(name: str, kind: str = "column") -> str:
    if not is_valid_identifier(name):
        raise QueryBuilderError(f"'{name}' is not a valid {kind} name.")
    return name


class QueryBuilder:
    """
    Fluent accumulator of WHERE predicates and their bound parameters.

    Attributes:
        params (List[Any]): Values bound to the placeholders of the staged predicates, in order.

    Methods:
        where: Stage `column <operator> ?` joined with AND.
        or_where: Stage `column <operator> ?` joined with OR.
        where_in: Stage `column IN (?, ...)`.
        where_null: Stage `column IS NULL`.
        where_not_null: Stage `column IS NOT NULL`.
        order_by: Append an ORDER BY term.
        limit: Set the LIMIT.
        offset: Set the OFFSET.
        build_where: Render the staged predicates.
        build_query: Render a full SELECT for a table.
        reset_stmt: Clear everything staged.
    """

    def __init__(self):
        self._clauses: List[Tuple[str, str]] = []
        self._order_by: List[str] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self.params: List[Any] = []

    def _add_clause(self, conjunction: str, sql: str, params: Sequence[Any] = ()) -> "QueryBuilder":
        self._clauses.append((conjunction, sql))
        self.params.extend(params)
        return self

    @staticmethod
    def _check_operator(operator: str) -> str:
        normalized = " ".join(operator.upper().split())
        if normalized not in OPERATORS:
            raise QueryBuilderError(f"Unsupported operator '{operator}'. Supported operators: {', '.join(OPERATORS)}")
        return normalized

    def where(self, column: str, value: Any, operator: str = "=") -> "QueryBuilder":
        """
        Stage a `column <operator> ?` predicate joined to the previous one with AND.

        Args:
            column: The column to compare.
            value: The value bound to the placeholder.
            operator: The comparison operator.

        Returns:
            This builder.
        """
        _check_identifier(column)
        return self._add_clause("AND", f"{column} {self._check_operator(operator)} ?", [value])

    def or_where(self, column: str, value: Any, operator: str = "=") -> "QueryBuilder":
        """
        Stage a `column <operator> ?` predicate joined to the previous one with OR.

        Args:
            column: The column to compare.
            value: The value bound to the placeholder.
            operator: The comparison operator.

        Returns:
            This builder.
        """
        _check_identifier(column)
        return self._add_clause("OR", f"{column} {self._check_operator(operator)} ?", [value])

    def where_in(self, column: str, values: Sequence[Any]) -> "QueryBuilder":
        """
        Stage a `column IN (?, ...)` predicate joined with AND.

        Args:
            column: The column to compare.
            values: The candidate values.

        Returns:
            This builder.

        Raises:
            QueryBuilderError: If `values` is a string or bytes rather than a collection.
        """
        if isinstance(values, (str, bytes)):
            raise QueryBuilderError(
                f"where_in expects a collection of values for '{column}', got {type(values).__name__}."
            )
        _check_identifier(column)
        values = list(values)
        if not values:
            # Avoid generating invalid SQL like `IN ()`
            return self._add_clause("AND", "1 = 0")
        placeholders = ", ".join("?" for _ in values)
        return self._add_clause("AND", f"{column} IN ({placeholders})", values)

    def where_null(self, column: str) -> "QueryBuilder":
        """Stage a `column IS NULL` predicate joined with AND."""
        return self._add_clause("AND", f"{_check_identifier(column)} IS NULL")

    def where_not_null(self, column: str) -> "QueryBuilder":
        """Stage a `column IS NOT NULL` predicate joined with AND."""
        return self._add_clause("AND", f"{_check_identifier(column)} IS NOT NULL")

    def order_by(self, column: str, descending: bool = False) -> "QueryBuilder":
        """
        Append an ORDER BY term.

        Args:
            column: The column to sort on.
            descending: Sort descending instead of ascending.

        Returns:
            This builder.
        """
        self._order_by.append(f"{_check_identifier(column)} {'DESC' if descending else 'ASC'}")
        return self

    def limit(self, count: int) -> "QueryBuilder":
        """Cap the number of returned rows."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise QueryBuilderError(f"LIMIT must be a non-negative integer, got {count!r}.")
        self._limit = count
        return self

    def offset(self, count: int) -> "QueryBuilder":
        """Skip the first `count` rows. Only rendered together with a LIMIT."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise QueryBuilderError(f"OFFSET must be a non-negative integer, got {count!r}.")
        self._offset = count
        return self

    def has_clauses(self) -> bool:
        """Check whether any predicate is staged."""
        return bool(self._clauses)

    def build_where(self) -> str:
        """
        Render the staged predicates.

        Returns:
            "WHERE ..." or an empty string if nothing is staged.
        """
        if not self._clauses:
            return ""
        rendered = self._clauses[0][1]
        for conjunction, sql in self._clauses[1:]:
            rendered += f" {conjunction} {sql}"
        return f"WHERE {rendered}"

    def build_query(self, table_name: str, columns: str = "*") -> str:
        """
        Render the staged predicates into a SELECT on `table_name`.

        Args:
            table_name: The table to select from.
            columns: The SELECT list.

        Returns:
            The SQL text. Bind `params` to execute it.
        """
        _check_identifier(table_name, kind="table")
        parts = [f"SELECT {columns} FROM {table_name}"]

        where_clause = self.build_where()
        if where_clause:
            parts.append(where_clause)
        if self._order_by:
            parts.append(f"ORDER BY {', '.join(self._order_by)}")
        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")
            if self._offset is not None:
                parts.append(f"OFFSET {self._offset}")
        elif self._offset is not None:
            # SQLite only accepts OFFSET after a LIMIT
            parts.append(f"LIMIT -1 OFFSET {self._offset}")

        query = " ".join(parts)
        LOG.debug(f"Built query: {query}")
        return query

    def reset_stmt(self):
        """
        Clear every staged predicate, parameter, ordering, and paging value.
        """
        self._clauses = []
        self._order_by = []
        self._limit = None
        self._offset = None
        self.params = []


def _table_and_primary(entity: Any) -> Tuple[str, str]:
    table_name = _check_identifier(entity.get_table_name(), kind="table")
    primary = get_field_map(entity).primary_key(entity.get_primary_key_name())
    return table_name, primary.column


def gen_save_query(entity: Any) -> str:
    """
    Generate the INSERT for an entity. The primary key is left to the database.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `INSERT INTO <table> (<cols except PK>) VALUES (?, ...)`, or
        `INSERT INTO <table> DEFAULT VALUES` when the primary key is the only column.
    """
    table_name, _ = _table_and_primary(entity)
    columns = get_columns_no_primary(entity)
    if not columns:
        return f"INSERT INTO {table_name} DEFAULT VALUES"
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {table_name} ({', '.join(columns)}) VALUES ({placeholders})"


def gen_update_query(entity: Any) -> str:
    """
    Generate the UPDATE for an entity. The primary-key placeholder comes last.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `UPDATE <table> SET <col = ?, ...> WHERE <PK> = ?`.

    Raises:
        QueryBuilderError: If the primary key is the only mapped column.
    """
    table_name, primary = _table_and_primary(entity)
    columns = get_columns_no_primary(entity)
    if not columns:
        raise QueryBuilderError(f"{type(entity).__name__} has no columns besides its primary key to update.")
    set_str = ", ".join(f"{col} = ?" for col in columns)
    return f"UPDATE {table_name} SET {set_str} WHERE {primary} = ?"


def gen_delete_query(entity: Any) -> str:
    """
    Generate the DELETE of an entity's row.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `DELETE FROM <table> WHERE <PK> = ?`.
    """
    table_name, primary = _table_and_primary(entity)
    return f"DELETE FROM {table_name} WHERE {primary} = ?"


def gen_select_by_id_query(entity: Any) -> str:
    """
    Generate the SELECT of every mapped column of one row by primary key.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `SELECT <cols> FROM <table> WHERE <PK> = ?`.
    """
    table_name, primary = _table_and_primary(entity)
    columns = ", ".join(get_field_map(entity).columns)
    return f"SELECT {columns} FROM {table_name} WHERE {primary} = ?"


def gen_select_all_query(entity: Any) -> str:
    """
    Generate the SELECT of every mapped column of every row, ordered by primary key.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `SELECT <cols> FROM <table> ORDER BY <PK>`.
    """
    table_name, primary = _table_and_primary(entity)
    columns = ", ".join(get_field_map(entity).columns)
    return f"SELECT {columns} FROM {table_name} ORDER BY {primary}"


def gen_count_query(entity: Any) -> str:
    """
    Generate a row count of an entity's table.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `SELECT COUNT(*) AS total FROM <table>`.
    """
    table_name = _check_identifier(entity.get_table_name(), kind="table")
    return f"SELECT COUNT(*) AS total FROM {table_name}"


def get_sqlite_type(py_type: Any) -> str:
    """
    Map Python types to SQLite types.

    Args:
        py_type: A Python type hint (e.g., str, int, Optional[List[str]], etc.)

    Returns:
        A string representing the corresponding SQLite column type.
    """
    origin_type = base_type(py_type)
    result = "TEXT"  # Default fallback

    if origin_type in (list, dict, set):
        result = "TEXT"  # store as JSON string
    elif origin_type is str:
        result = "TEXT"
    elif origin_type is bool:
        result = "INTEGER"  # SQLite uses 0 and 1 for booleans
    elif origin_type is int:
        result = "INTEGER"
    elif origin_type is float:
        result = "REAL"
    elif origin_type is datetime:
        result = "TEXT"  # ISO format string

    return result


def gen_create_table_query(entity: Any) -> str:
    """
    Generate the CREATE TABLE of an entity from its field map. The primary key
    becomes an auto-incremented INTEGER key.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        `CREATE TABLE IF NOT EXISTS <table> (...)`.
    """
    table_name, primary = _table_and_primary(entity)
    field_defs = []
    for col, accessor in get_field_map(entity).accessors.items():
        if col == primary:
            field_defs.append(f"{col} INTEGER PRIMARY KEY AUTOINCREMENT")
        else:
            field_defs.append(f"{col} {get_sqlite_type(accessor.py_type)}")
    return f"CREATE TABLE IF NOT EXISTS {table_name} ({', '.join(field_defs)})"
