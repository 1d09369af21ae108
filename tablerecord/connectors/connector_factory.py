##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Builds connectors from configuration.

The connector type is read from `database.type` in a `Config` object and
looked up in `CONNECTORS`.
"""

import logging
from typing import Dict, List, Type

from tablerecord.config import Config
from tablerecord.connectors.connector import SQLConnector
from tablerecord.connectors.sqlite_connector import SQLiteConnector
from tablerecord.exceptions import ConnectorNotSupportedError


LOG = logging.getLogger(__name__)

CONNECTORS: Dict[str, Type[SQLConnector]] = {
    "sqlite": SQLiteConnector,
    "sqlite3": SQLiteConnector,
}


def list_available() -> List[str]:
    """
    Get the names of the supported connector types.

    Returns:
        A sorted list of connector type names.
    """
    return sorted(CONNECTORS)


def create_connector(config: Config) -> SQLConnector:
    """
    Instantiate the connector described by `config.database`.

    Args:
        config: The application configuration.

    Returns:
        A connector ready for use. The connection itself is opened lazily.

    Raises:
        ConnectorNotSupportedError: If `database.type` names an unknown connector.
    """
    connector_type = str(config.database.type).lower()
    try:
        connector_class = CONNECTORS[connector_type]
    except KeyError as exc:
        raise ConnectorNotSupportedError(
            f"Connector type '{connector_type}' is not supported. Supported types: {', '.join(list_available())}"
        ) from exc

    LOG.debug(f"Creating a '{connector_type}' connector for '{config.database.path}'.")
    return connector_class(config.database.path)
