"""Bulk insert of records into a database table."""

import logging
from typing import List, Optional

from .base import BaseLoader, LoadResult
from ..models.errors import QueryError
from ..models.record import Record, escape_ident
from ..services.identifiers import IdentifierNormalizer, to_record_id

logger = logging.getLogger(__name__)


class SurrealLoader(BaseLoader):
    """
    Loads records into a table with a single parameterized INSERT.

    The inserted rows returned by the database are checked against the
    integer ids in the source records.
    """

    def __init__(
        self,
        connection,
        dry_run: bool = False,
        normalizer: Optional[IdentifierNormalizer] = None
    ):
        super().__init__(dry_run)
        self.connection = connection
        self.normalizer = normalizer or IdentifierNormalizer()

    def load(self, table: str, records: List[Record]) -> LoadResult:
        """
        Insert all records in one statement.

        Raises:
            QueryError: If the database reports any statement error
        """
        result = LoadResult(table=table, total_attempted=len(records))

        if not records:
            result.warnings.append(f"No records to insert into {table}")
        elif self.dry_run:
            logger.info(f"[dry run] Would insert {len(records)} record(s) into {table}")
            result.total_succeeded = len(records)
        else:
            statement = f"INSERT INTO {escape_ident(table)} $records;"
            response = self.connection.execute(statement, {"records": records})
            if not response.ok:
                raise QueryError("; ".join(response.errors), {"table": table})

            rows = response.rows if isinstance(response.rows, list) else []
            result.total_succeeded = len(rows)
            for row in rows:
                key = self.normalizer.normalize(row.get(self.normalizer.id_field), table)
                if key is not None:
                    result.created_ids.append(key)
            result.warnings.extend(self._verify_ids(table, records, rows))

        return result

    def _verify_ids(self, table: str, records: List[Record], rows: List[Record]) -> List[str]:
        """Check that every integer source id came back as an inserted row."""
        id_field = self.normalizer.id_field
        inserted = {to_record_id(row.get(id_field)) for row in rows}

        warnings = []
        for record in records:
            key = record.get(id_field)
            if not isinstance(key, int) or isinstance(key, bool):
                continue
            expected = self.normalizer.denormalize(table, key)
            if expected not in inserted:
                warnings.append(f"Record {expected} was not returned by the insert")
        return warnings
