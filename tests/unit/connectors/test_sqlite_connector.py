##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Tests for the `sqlite_connector.py` module.
"""

import os
import sqlite3
import sys
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from tablerecord.connectors.connector import ExecResult
from tablerecord.connectors.sqlite_connector import SQLiteConnector
from tests.fixture_types import FixtureConnector, FixtureStr


class TestSQLiteConnector:
    """Tests for the SQLiteConnector class."""

    def test_connection_is_lazy(self, sqlite_db_path: FixtureStr):
        """
        Test that nothing is opened or created until the first statement.

        Args:
            sqlite_db_path: The path to a database file that doesn't exist yet.
        """
        connector = SQLiteConnector(sqlite_db_path)
        assert connector.conn is None
        assert not os.path.exists(os.path.dirname(sqlite_db_path))

        connector.connect()
        assert os.path.isfile(sqlite_db_path)
        assert connector.connect() is connector.conn
        connector.close()

    def test_connect_configuration(self, mocker: MockerFixture):
        """
        Test that the connection is opened shareable across threads, in
        autocommit mode, with WAL and foreign keys turned on.

        Args:
            mocker: PyTest mocker fixture.
        """
        mock_conn = MagicMock()
        mock_connect = mocker.patch("sqlite3.connect", return_value=mock_conn)

        connector = SQLiteConnector(":memory:")
        assert connector.connect() is mock_conn

        kwargs = mock_connect.call_args.kwargs
        assert kwargs["check_same_thread"] is False
        if sys.version_info < (3, 12):
            assert kwargs["isolation_level"] is None
        else:
            assert kwargs["autocommit"] is True
        mock_conn.execute.assert_any_call("PRAGMA journal_mode=WAL")
        mock_conn.execute.assert_any_call("PRAGMA foreign_keys=ON")

    def test_exec_and_query(self, sqlite_connector: FixtureConnector):
        """
        Test that `exec` reports generated keys and affected rows and that
        `query` returns rows keyed by column name.

        Args:
            sqlite_connector: A connector on a throwaway database.
        """
        sqlite_connector.exec("CREATE TABLE notes (id INTEGER PRIMARY KEY AUTOINCREMENT, body TEXT)")

        assert sqlite_connector.exec("INSERT INTO notes (body) VALUES (?)", ["first"]) == ExecResult(1, 1)
        assert sqlite_connector.exec("INSERT INTO notes (body) VALUES (?)", ["second"]).last_insert_id == 2
        assert sqlite_connector.exec("UPDATE notes SET body = ?", ["same"]).rows_affected == 2

        with sqlite_connector.query("SELECT id, body FROM notes WHERE id = ?", [2]) as rows:
            assert rows.columns == ["id", "body"]
            assert list(rows) == [{"id": 2, "body": "same"}]

    def test_changes_are_committed(self, sqlite_db_path: FixtureStr):
        """
        Test that writes are visible from a second connection without an explicit commit.

        Args:
            sqlite_db_path: The path to a database file that doesn't exist yet.
        """
        with SQLiteConnector(sqlite_db_path) as writer:
            writer.exec("CREATE TABLE notes (body TEXT)")
            writer.exec("INSERT INTO notes (body) VALUES (?)", ["hello"])

            with SQLiteConnector(sqlite_db_path) as reader:
                assert reader.query("SELECT body FROM notes").next() == {"body": "hello"}

    def test_driver_errors_propagate(self, sqlite_connector: FixtureConnector):
        """
        Test that driver errors reach the caller untranslated.

        Args:
            sqlite_connector: A connector on a throwaway database.
        """
        with pytest.raises(sqlite3.OperationalError, match="no such table"):
            sqlite_connector.query("SELECT * FROM missing")

    def test_prepare(self, sqlite_connector: FixtureConnector):
        """
        Test running statements acquired with `prepare`.

        Args:
            sqlite_connector: A connector on a throwaway database.
        """
        with sqlite_connector.prepare("CREATE TABLE notes (body TEXT)") as stmt:
            stmt.exec()
        with sqlite_connector.prepare("SELECT COUNT(*) AS total FROM notes") as stmt:
            assert stmt.query().next() == {"total": 0}

    def test_close_is_idempotent(self, sqlite_connector: FixtureConnector):
        """
        Test that closing twice is harmless and the connector reopens on demand.

        Args:
            sqlite_connector: A connector on a throwaway database.
        """
        sqlite_connector.connect()
        sqlite_connector.close()
        sqlite_connector.close()
        assert sqlite_connector.conn is None
        assert sqlite_connector.query("SELECT 1 AS one").next() == {"one": 1}

    def test_get_version(self, sqlite_connector: FixtureConnector):
        """
        Test that the version reported is the linked SQLite library's.

        Args:
            sqlite_connector: A connector on a throwaway database.
        """
        assert sqlite_connector.get_version() == sqlite3.sqlite_version

    def test_get_connection_string(self, sqlite_connector: FixtureConnector, sqlite_db_path: FixtureStr):
        """
        Test that the connection string is the database path.

        Args:
            sqlite_connector: A connector on a throwaway database.
            sqlite_db_path: The path to the database file.
        """
        assert sqlite_connector.get_connection_string() == sqlite_db_path
        assert sqlite_connector.connector_type == "sqlite"
