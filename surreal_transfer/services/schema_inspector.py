"""Table schema lookup."""

import logging
from typing import List

from ..models.errors import QueryError

logger = logging.getLogger(__name__)

# INFO FOR TABLE keys: "fields" on 1.1+, "fd" on 1.0
FIELD_KEYS = ("fields", "fd")


class SchemaInspector:
    """Reads the declared field names of a table from the database."""

    def __init__(self, connection):
        self.connection = connection

    def fields(self, table: str) -> List[str]:
        """
        Get the declared field names of a table, in database order.

        Unknown and schema-less tables yield an empty list.
        """
        try:
            info = self.connection.schema_info(table)
        except QueryError as e:
            if "does not exist" in e.message:
                logger.warning(f"Table {table} does not exist, no columns to project")
                return []
            raise

        for key in FIELD_KEYS:
            definitions = info.get(key)
            if definitions:
                names = list(definitions.keys())
                logger.debug(f"Schema for {table}: {names}")
                return names

        logger.warning(f"Table {table} declares no fields")
        return []
