##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Application configuration for the `tablerecord` command.

`configfile.load_config` reads `app.yaml` into a `Config` object, which is then
passed explicitly to whatever needs it: connectors, the CLI, and logging setup.

Modules:
    config_filepaths.py: Names and default locations of configuration files.
    configfile.py: Locates `app.yaml`, applies defaults, and builds a `Config`.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from tablerecord.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The settings of one TableRecord invocation, grouped by section.

    Attributes:
        database (Optional[SimpleNamespace]): `type` and `path` of the database to open.
        logging (Optional[SimpleNamespace]): `level` and `colors` for log output.

    Methods:
        __copy__: Copy the config so its sections can be changed independently.
        __str__: Render the config as indented `key: value` lines.
        load_app_into_namespaces: Store each known section of a dictionary as a namespace.
    """

    sections: List[str] = ["database", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Args:
            app_dict: The configuration as read from `app.yaml`. Only the keys
                listed in `sections` are kept; missing sections stay None.
        """
        self.database: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        duplicate = self.__class__.__new__(self.__class__)
        for section in self.sections:
            setattr(duplicate, section, copy(getattr(self, section)))
        return duplicate

    def __str__(self) -> str:
        lines = ["config:"]
        for section in self.sections:
            lines.append(f"  {section}:")
            values = getattr(self, section)
            if values is None:
                lines.append("    None")
                continue
            lines.extend(f"    {key}: {value!r}" for key, value in vars(values).items())
        return "\n".join(lines)

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Store each known section of `app_dict` as a `SimpleNamespace` attribute.

        Args:
            app_dict: The configuration as read from `app.yaml`.
        """
        for section in self.sections:
            if section in app_dict:
                setattr(self, section, nested_dict_to_namespaces(app_dict[section]))
