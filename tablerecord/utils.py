##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Helpers shared across TableRecord: YAML loading, path expansion, and
identifier checks.
"""

import os
import re
from types import SimpleNamespace
from typing import Dict

import yaml


IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def load_yaml(filepath: str) -> Dict:
    """
    Parse a YAML file with `yaml.safe_load`.

    Args:
        filepath: Path of the file to parse.

    Returns:
        The parsed document, or None for an empty file.
    """
    with open(filepath, "r") as yaml_file:
        return yaml.safe_load(yaml_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Turn a dictionary into a `SimpleNamespace`, converting nested dictionaries
    as well. Other values are kept as they are.

    Args:
        dic: The dictionary to convert.

    Returns:
        The namespace, or `dic` itself if it isn't a dictionary.
    """
    if not isinstance(dic, dict):
        return dic
    return SimpleNamespace(**{key: nested_dict_to_namespaces(value) for key, value in dic.items()})


def expand_path(path: str) -> str:
    """
    Expand user and environment variables in a path. The SQLite in-memory
    marker is returned untouched.

    Args:
        path: The path to expand.

    Returns:
        The expanded path.
    """
    if path == ":memory:":
        return path
    return os.path.abspath(os.path.expandvars(os.path.expanduser(path)))


def is_valid_identifier(name: str) -> bool:
    """
    Check whether `name` can be used verbatim as a SQL table or column name.

    Args:
        name: The identifier to check.

    Returns:
        True if `name` is a plain identifier, False otherwise.
    """
    return isinstance(name, str) and bool(IDENTIFIER_PATTERN.match(name))
