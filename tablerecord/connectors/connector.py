##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
This module defines the abstract base class for every connector that the record
layer can run statements through, plus the small result types that connectors
return.

The record layer only ever talks to a `SQLConnector`; it never imports a driver
directly. Errors raised by the driver are not translated here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Type


@dataclass(frozen=True)
class ExecResult:
    """
    The outcome of a statement that does not return rows.

    Attributes:
        last_insert_id: The key generated by the last INSERT, if any.
        rows_affected: The number of rows changed by the statement.
    """

    last_insert_id: Optional[int]
    rows_affected: int


class Rows:
    """
    A forward-only set of result rows. Each row is handed out as a dictionary
    keyed by column name.

    Attributes:
        columns (List[str]): The column names, in select order.

    Methods:
        next: Return the next row or None once the rows are exhausted.
        close: Release the rows. Safe to call more than once.
    """

    def __init__(self, columns: Sequence[str], rows: Sequence[Tuple]):
        self.columns: List[str] = list(columns)
        self._rows: Iterator[Tuple] = iter(rows)
        self.closed: bool = False

    def next(self) -> Optional[Dict[str, Any]]:
        """
        Advance to the next row.

        Returns:
            The next row as a column-name to value mapping, or None if there are no more rows.
        """
        if self.closed:
            return None
        row = next(self._rows, None)
        if row is None:
            return None
        return dict(zip(self.columns, row))

    def close(self):
        """Release the rows."""
        self.closed = True
        self._rows = iter(())

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        row = self.next()
        while row is not None:
            yield row
            row = self.next()

    def __enter__(self) -> "Rows":
        return self

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        self.close()


class Statement:
    """
    A statement bound to a connector. Acquired with `SQLConnector.prepare` and
    released with `close`, or by using it as a context manager.

    Attributes:
        connector (SQLConnector): The connector the statement runs on.
        query_text (str): The SQL text of the statement.
    """

    def __init__(self, connector: "SQLConnector", query: str):
        self.connector: "SQLConnector" = connector
        self.query_text: str = query
        self.closed: bool = False

    def _check_open(self):
        if self.closed:
            raise RuntimeError(f"Statement is closed: {self.query_text}")

    def exec(self, params: Sequence[Any] = ()) -> ExecResult:
        """
        Execute the statement with `params` bound to its placeholders.

        Args:
            params: Positional parameters.

        Returns:
            The execution result.
        """
        self._check_open()
        return self.connector.exec(self.query_text, params)

    def query(self, params: Sequence[Any] = ()) -> Rows:
        """
        Run the statement and return its result rows.

        Args:
            params: Positional parameters.

        Returns:
            The result rows.
        """
        self._check_open()
        return self.connector.query(self.query_text, params)

    def close(self):
        """Release the statement."""
        self.closed = True

    def __enter__(self) -> "Statement":
        return self

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        self.close()


class SQLConnector(ABC):
    """
    Base class for all connectors.

    Placeholders in queries use the `?` (qmark) style.

    Attributes:
        connector_type (str): A short name for the connector (e.g. "sqlite").

    Methods:
        exec: Execute a statement that does not return rows.
        query: Execute a statement and return its rows.
        prepare: Acquire a `Statement` for a query.
        close: Release the underlying connection.
        get_version: Return the version of the database server/library.
        get_connection_string: Return the string used to connect.
    """

    connector_type: str = None

    @abstractmethod
    def exec(self, query: str, params: Sequence[Any] = ()) -> ExecResult:
        """
        Execute a statement that does not return rows.

        Args:
            query: The SQL to execute.
            params: Positional parameters.

        Returns:
            The execution result.
        """
        raise NotImplementedError("Subclasses of `SQLConnector` must implement an `exec` method.")

    @abstractmethod
    def query(self, query: str, params: Sequence[Any] = ()) -> Rows:
        """
        Execute a statement and return its rows.

        Args:
            query: The SQL to execute.
            params: Positional parameters.

        Returns:
            The result rows.
        """
        raise NotImplementedError("Subclasses of `SQLConnector` must implement a `query` method.")

    @abstractmethod
    def close(self):
        """Release the underlying connection."""
        raise NotImplementedError("Subclasses of `SQLConnector` must implement a `close` method.")

    @abstractmethod
    def get_version(self) -> str:
        """Return the version of the database."""
        raise NotImplementedError("Subclasses of `SQLConnector` must implement a `get_version` method.")

    @abstractmethod
    def get_connection_string(self) -> str:
        """Return the string used to connect to the database."""
        raise NotImplementedError("Subclasses of `SQLConnector` must implement a `get_connection_string` method.")

    def prepare(self, query: str) -> Statement:
        """
        Acquire a statement for `query`.

        Args:
            query: The SQL of the statement.

        Returns:
            A `Statement` that must be closed by the caller.
        """
        return Statement(self, query)

    def __enter__(self) -> "SQLConnector":
        return self

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        self.close()
