##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
End-to-end tests of the record lifecycle against a real SQLite database.
"""

import pytest

from tablerecord.exceptions import ReadOnlyModelError, RecordNotFoundError
from tablerecord.models.user import User, load_all_users, new_user
from tablerecord.record.table_record import TableRecord, count, delete, load_all, load_by_id, load_from_row, save
from tests.fixture_types import FixtureConnector
from tests.fixtures.models import Counter


class TestUserLifecycle:
    """Save, reload, update, list, and delete a user."""

    def test_save_update_and_list(self, mario: User, users_table: FixtureConnector):
        """
        Test that an update keeps the primary key and is visible to every reader.

        Args:
            mario: An unsaved user attached to a database with a `users` table.
            users_table: A connector with the `users` table in place.
        """
        save(mario)
        user_id = mario.id
        assert user_id
        assert not mario.get_table_record().is_new

        loaded = new_user(users_table)
        load_by_id(loaded, user_id)
        assert loaded.name == "Mario"

        loaded.name = "Marco"
        save(loaded)
        assert loaded.id == user_id

        users = load_all_users(users_table)
        assert len(users) >= 1
        assert any(user.id == user_id and user.name == "Marco" for user in users)

    def test_delete_then_load(self, mario: User, users_table: FixtureConnector):
        """
        Test that a deleted row can't be loaded and that the entity is left as it was.

        Args:
            mario: An unsaved user attached to a database with a `users` table.
            users_table: A connector with the `users` table in place.
        """
        save(mario)
        user_id = mario.id

        assert delete(mario) == 1
        assert mario.id == user_id
        assert mario.name == "Mario"

        with pytest.raises(RecordNotFoundError):
            load_by_id(new_user(users_table), user_id)
        assert delete(mario) == 0

    def test_read_only_leaves_database_untouched(self, mario: User, users_table: FixtureConnector):
        """
        Test that read-only entities can be loaded but never written.

        Args:
            mario: An unsaved user attached to a database with a `users` table.
            users_table: A connector with the `users` table in place.
        """
        save(mario)

        viewer = new_user(users_table, is_read_only=True)
        load_by_id(viewer, mario.id)
        viewer.name = "Marco"

        with pytest.raises(ReadOnlyModelError):
            save(viewer)
        with pytest.raises(ReadOnlyModelError):
            delete(viewer)

        fresh = new_user(users_table)
        load_by_id(fresh, mario.id)
        assert fresh.name == "Mario"

    def test_load_all_returns_every_row(self, users_table: FixtureConnector):
        """
        Test that loading every row returns exactly the stored rows, in key order.

        Args:
            users_table: A connector with the `users` table in place.
        """
        assert load_all_users(users_table) == []

        saved = []
        for name in ("Mario", "Anna", "Luigi", "Sara"):
            user = new_user(users_table)
            user.name, user.lastname, user.gender = name, "Rossi", "X"
            save(user)
            saved.append(user)

        loaded = load_all(lambda: new_user(users_table))
        assert loaded == saved
        assert [user.id for user in loaded] == sorted(user.id for user in saved)
        assert count(lambda: new_user(users_table)) == 4

    def test_loaded_entities_can_be_saved(self, mario: User, users_table: FixtureConnector):
        """
        Test that an entity built from a row carries a connector and can be updated directly.

        Args:
            mario: An unsaved user attached to a database with a `users` table.
            users_table: A connector with the `users` table in place.
        """
        save(mario)

        detached = new_user()
        load_from_row({"id": mario.id, "name": "Mario", "lastname": "Rossi", "gender": "M"}, detached, users_table)
        detached.gender = "F"
        save(detached)

        fresh = new_user(users_table)
        load_by_id(fresh, mario.id)
        assert fresh.gender == "F"


class TestPrimaryKeyOnlyLifecycle:
    """Insert, list, and delete rows of a table whose primary key is its only column."""

    def test_insert_list_and_delete(self, counters_table: FixtureConnector):
        """
        Test that rows with nothing but a generated key behave like any other row.

        Args:
            counters_table: A connector with the `counters` table in place.
        """

        def new_counter() -> Counter:
            return Counter(record=TableRecord(is_new=True, connector=counters_table))

        counters = [new_counter() for _ in range(3)]
        for counter in counters:
            save(counter)

        assert [counter.id for counter in load_all(new_counter)] == [1, 2, 3]

        assert delete(counters[1]) == 1
        assert [counter.id for counter in load_all(new_counter)] == [1, 3]
        with pytest.raises(RecordNotFoundError):
            load_by_id(new_counter(), 2)
        assert count(new_counter) == 2
