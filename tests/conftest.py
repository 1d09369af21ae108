##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import logging
import os

import pytest

from tests.fixture_types import FixtureModification


#######################################
# Loading in Module Specific Fixtures #
#######################################

pytest_plugins = [
    "tests.fixtures.connectors",
    "tests.fixtures.models",
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(autouse=True)
def isolate_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> FixtureModification:
    """
    Keep tests away from the real `~/.tablerecord` directory and from any
    database path set in the environment of the person running the tests.

    Args:
        monkeypatch: PyTest monkeypatch fixture.
        tmp_path_factory: PyTest factory for temporary directories.
    """
    fake_home = str(tmp_path_factory.mktemp("home"))
    monkeypatch.setattr("tablerecord.config.configfile.TABLERECORD_HOME", os.path.join(fake_home, ".tablerecord"))
    monkeypatch.delenv("TABLERECORD_DB_PATH", raising=False)


@pytest.fixture
def tablerecord_logger() -> logging.Logger:
    """
    Provide the `tablerecord` logger and restore its handlers and level afterwards.

    Returns:
        The `tablerecord` logger.
    """
    logger = logging.getLogger("tablerecord")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
