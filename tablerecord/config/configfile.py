##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
This module provides functionality for locating and loading the application
configuration file (`app.yaml`) and filling in default settings.

Nothing here is cached at module level: every call to `load_config` builds a
fresh `Config` that the caller passes on explicitly.
"""
import logging
import os
from typing import Dict, Optional

from tablerecord.config import Config
from tablerecord.config.config_filepaths import APP_FILENAME, DB_PATH_ENV_VAR, DEFAULT_DB_PATH, TABLERECORD_HOME
from tablerecord.utils import expand_path, load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

DEFAULTS: Dict = {
    "database": {"type": "sqlite", "path": DEFAULT_DB_PATH},
    "logging": {"level": "INFO", "colors": True},
}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the application configuration file (`app.yaml`).

    If a `path` is given only that directory is checked. Otherwise the current
    working directory is checked first, then `TABLERECORD_HOME`.

    Args:
        path: A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is not None:
        app_path = os.path.join(path, APP_FILENAME)
        return app_path if os.path.isfile(app_path) else None

    for directory in (os.getcwd(), TABLERECORD_HOME):
        app_path = os.path.join(directory, APP_FILENAME)
        if os.path.isfile(app_path):
            return app_path

    return None


def read_config_file(filepath: str) -> Optional[Dict]:
    """
    Reads a YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def merge_defaults(app_dict: Dict) -> Dict:
    """
    Fill every missing section and key of `app_dict` with the values in `DEFAULTS`.

    Args:
        app_dict: The configuration read from file. Not modified.

    Returns:
        A new dictionary with defaults applied.
    """
    merged = {}
    for section, defaults in DEFAULTS.items():
        user_section = app_dict.get(section) or {}
        merged[section] = {**defaults, **{k: v for k, v in user_section.items() if v is not None}}
    return merged


def load_config(path: str = None) -> Config:
    """
    Build a `Config` from `app.yaml` (if one can be found), the defaults, and
    the `TABLERECORD_DB_PATH` environment variable, in increasing priority.

    Args:
        path: A specific directory to look for `app.yaml`.

    Returns:
        A populated `Config` object.
    """
    app_dict = {}
    filepath = find_config_file(path)
    if filepath is not None:
        app_dict = read_config_file(filepath) or {}
    else:
        LOG.debug("No app.yaml found; using default configuration.")

    merged = merge_defaults(app_dict)

    env_path = os.environ.get(DB_PATH_ENV_VAR)
    if env_path:
        LOG.debug(f"Using database path from ${DB_PATH_ENV_VAR}: {env_path}")
        merged["database"]["path"] = env_path

    merged["database"]["path"] = expand_path(merged["database"]["path"])
    return Config(merged)
