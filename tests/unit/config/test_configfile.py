##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Tests for the configfile.py module.
"""

import os

import pytest
import yaml

from tablerecord.config import configfile
from tablerecord.config.configfile import DEFAULTS, find_config_file, load_config, merge_defaults, read_config_file


def write_app_yaml(directory: str, contents) -> str:
    """
    Write an `app.yaml` file.

    Args:
        directory: The directory to write it in. Created if needed.
        contents: The data to dump as YAML.

    Returns:
        The path to the file.
    """
    os.makedirs(directory, exist_ok=True)
    app_path = os.path.join(directory, "app.yaml")
    with open(app_path, "w") as app_file:
        yaml.dump(contents, app_file)
    return app_path


@pytest.fixture
def working_dir(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    """
    Run the test from an empty working directory.

    Args:
        tmp_path: PyTest temporary directory fixture.
        monkeypatch: PyTest monkeypatch fixture.

    Returns:
        The path to the working directory.
    """
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return str(cwd)


class TestFindConfigFile:
    """Tests for locating `app.yaml`."""

    def test_explicit_directory(self, tmp_path, working_dir: str):
        """
        Test that only the given directory is checked when one is provided.

        Args:
            tmp_path: PyTest temporary directory fixture.
            working_dir: An empty working directory.
        """
        write_app_yaml(working_dir, {})
        explicit = str(tmp_path / "explicit")

        assert find_config_file(explicit) is None
        app_path = write_app_yaml(explicit, {})
        assert find_config_file(explicit) == app_path

    def test_working_directory_first(self, working_dir: str):
        """
        Test that the working directory wins over the TableRecord home directory.

        Args:
            working_dir: An empty working directory.
        """
        write_app_yaml(configfile.TABLERECORD_HOME, {})
        app_path = write_app_yaml(working_dir, {})
        assert find_config_file() == app_path

    def test_home_directory_fallback(self, working_dir: str):
        """
        Test that the TableRecord home directory is used when the working directory has no file.

        Args:
            working_dir: An empty working directory.
        """
        app_path = write_app_yaml(configfile.TABLERECORD_HOME, {})
        assert find_config_file() == app_path

    def test_not_found(self, working_dir: str):
        """
        Test that None is returned when there is no `app.yaml` anywhere.

        Args:
            working_dir: An empty working directory.
        """
        assert find_config_file() is None


def test_read_config_file(tmp_path):
    """
    Test reading a file, an empty file, and a missing file.

    Args:
        tmp_path: PyTest temporary directory fixture.
    """
    app_path = write_app_yaml(str(tmp_path), {"database": {"type": "sqlite"}})
    assert read_config_file(app_path) == {"database": {"type": "sqlite"}}

    empty_path = tmp_path / "empty.yaml"
    empty_path.write_text("")
    assert read_config_file(str(empty_path)) == {}

    assert read_config_file(str(tmp_path / "missing.yaml")) is None


def test_merge_defaults():
    """Test that missing and null keys are filled in and the input isn't modified."""
    app_dict = {"database": {"path": "/data/app.db", "type": None}, "logging": None}
    merged = merge_defaults(app_dict)

    assert merged["database"] == {"type": "sqlite", "path": "/data/app.db"}
    assert merged["logging"] == DEFAULTS["logging"]
    assert app_dict == {"database": {"path": "/data/app.db", "type": None}, "logging": None}


class TestLoadConfig:
    """Tests for building a Config object."""

    def test_defaults(self, working_dir: str):
        """
        Test that the defaults are used when there is no `app.yaml`.

        Args:
            working_dir: An empty working directory.
        """
        config = load_config()
        assert config.database.type == "sqlite"
        assert config.database.path == configfile.DEFAULT_DB_PATH
        assert config.logging.level == "INFO"
        assert config.logging.colors is True

    def test_file_values(self, working_dir: str):
        """
        Test that values from `app.yaml` override the defaults and relative paths are expanded.

        Args:
            working_dir: An empty working directory.
        """
        write_app_yaml(working_dir, {"database": {"path": "data/app.db"}, "logging": {"level": "DEBUG"}})
        config = load_config()
        assert config.database.path == os.path.join(working_dir, "data", "app.db")
        assert config.logging.level == "DEBUG"
        assert config.logging.colors is True

    def test_environment_overrides_file(self, working_dir: str, monkeypatch: pytest.MonkeyPatch):
        """
        Test that `TABLERECORD_DB_PATH` beats the path in `app.yaml`.

        Args:
            working_dir: An empty working directory.
            monkeypatch: PyTest monkeypatch fixture.
        """
        write_app_yaml(working_dir, {"database": {"path": "/from/file.db"}})
        monkeypatch.setenv("TABLERECORD_DB_PATH", "/from/env.db")
        assert load_config().database.path == "/from/env.db"

    def test_in_memory_path(self, working_dir: str, monkeypatch: pytest.MonkeyPatch):
        """
        Test that the in-memory marker isn't turned into a file path.

        Args:
            working_dir: An empty working directory.
            monkeypatch: PyTest monkeypatch fixture.
        """
        monkeypatch.setenv("TABLERECORD_DB_PATH", ":memory:")
        assert load_config().database.path == ":memory:"

    def test_fresh_object_each_call(self, working_dir: str):
        """
        Test that every call builds a new Config.

        Args:
            working_dir: An empty working directory.
        """
        assert load_config() is not load_config()
