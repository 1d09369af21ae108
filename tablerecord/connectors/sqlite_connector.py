##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
SQLite connector for TableRecord.

This module defines the `SQLiteConnector` class, which implements the
`SQLConnector` interface on top of the standard `sqlite3` driver. A single
connection is opened lazily with WAL mode and foreign key enforcement, runs in
autocommit mode, and is shared between threads behind a lock.
"""

import logging
import sqlite3
import sys
import threading
from pathlib import Path
from typing import Any, Sequence

from tablerecord.connectors.connector import ExecResult, Rows, SQLConnector


LOG = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class SQLiteConnector(SQLConnector):
    """
    A `SQLConnector` backed by a SQLite database file.

    Attributes:
        db_path (str): The path to the SQLite database file, or ":memory:".
        conn (sqlite3.Connection): The open connection, or None until first use.

    Methods:
        connect:
            Open and configure the connection if it isn't open yet.

        exec:
            Execute a statement and report the generated key and affected row count.

        query:
            Execute a statement and return its rows.

        close:
            Close the connection.

        get_version:
            Query SQLite for the current version.

        get_connection_string:
            Retrieve the database path.
    """

    connector_type = "sqlite"

    def __init__(self, db_path: str):
        """
        Args:
            db_path: The path to the SQLite database file, or ":memory:".
        """
        self.db_path: str = db_path
        self.conn: sqlite3.Connection = None
        self._lock = threading.RLock()

    def connect(self) -> sqlite3.Connection:
        """
        Open and configure the SQLite connection if it isn't open yet.

        Returns:
            A sqlite connection.
        """
        with self._lock:
            if self.conn is not None:
                return self.conn

            if self.db_path != IN_MEMORY:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            connection_kwargs = {"check_same_thread": False}
            if sys.version_info < (3, 12):  # `autocommit` kwarg is 3.12+
                connection_kwargs["isolation_level"] = None
            else:
                connection_kwargs["autocommit"] = True

            LOG.debug(f"Opening SQLite connection to '{self.db_path}'.")
            self.conn = sqlite3.connect(self.db_path, **connection_kwargs)

            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.execute("PRAGMA foreign_keys=ON")

            return self.conn

    def exec(self, query: str, params: Sequence[Any] = ()) -> ExecResult:
        """
        Execute a statement that does not return rows.

        Args:
            query: The SQL to execute.
            params: Positional parameters.

        Returns:
            The id of the last inserted row and the number of rows affected.
        """
        LOG.debug(f"SQLite exec: {query}")
        LOG.debug(f"SQLite params: {list(params)}")
        with self._lock:
            cursor = self.connect().execute(query, tuple(params))
            try:
                return ExecResult(last_insert_id=cursor.lastrowid, rows_affected=cursor.rowcount)
            finally:
                cursor.close()

    def query(self, query: str, params: Sequence[Any] = ()) -> Rows:
        """
        Execute a statement and return its rows. The rows are fetched before
        the lock is released.

        Args:
            query: The SQL to execute.
            params: Positional parameters.

        Returns:
            The result rows.
        """
        LOG.debug(f"SQLite query: {query}")
        LOG.debug(f"SQLite params: {list(params)}")
        with self._lock:
            cursor = self.connect().execute(query, tuple(params))
            try:
                columns = [description[0] for description in cursor.description or ()]
                return Rows(columns, cursor.fetchall())
            finally:
                cursor.close()

    def close(self):
        """
        Close the connection if it's open.
        """
        with self._lock:
            if self.conn is not None:
                self.conn.close()
                self.conn = None
                LOG.debug(f"Closed SQLite connection to '{self.db_path}'.")

    def get_version(self) -> str:
        """
        Query SQLite for the current version.

        Returns:
            The SQLite version string.
        """
        with self.query("SELECT sqlite_version()") as rows:
            return rows.next()["sqlite_version()"]

    def get_connection_string(self) -> str:
        """
        Retrieve the connection string (file path) used to connect to SQLite.

        Returns:
            The database path.
        """
        return self.db_path
