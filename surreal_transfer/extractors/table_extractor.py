"""Database table record extractor."""

import logging
from typing import List, Optional

from .base import BaseExtractor
from ..models.record import Record
from ..services.identifiers import IdentifierNormalizer

logger = logging.getLogger(__name__)


class TableExtractor(BaseExtractor):
    """
    Extracts a bounded window of records from a database table.

    Record ids are normalized to their plain key on the way out.
    """

    def __init__(
        self,
        connection,
        table: str,
        page_size: int = 1000,
        normalizer: Optional[IdentifierNormalizer] = None
    ):
        """
        Initialize the extractor.

        Args:
            connection: Database service connection
            table: Table to read
            page_size: Maximum records fetched by extract()
            normalizer: Identifier normalizer (default: on the ``id`` field)
        """
        self.connection = connection
        self._table = table
        self.page_size = page_size
        self.normalizer = normalizer or IdentifierNormalizer()
        self.truncated = False

    @property
    def table(self) -> str:
        return self._table

    def extract(self) -> List[Record]:
        """
        Extract the first page of the table.

        One row past the page is fetched so ``truncated`` is only set when
        the table really holds more than ``page_size`` records.
        """
        records = self.extract_batch(offset=0, limit=self.page_size + 1)
        self.truncated = len(records) > self.page_size
        if self.truncated:
            logger.debug(f"{self._table}: more than {self.page_size} records, page trimmed")
        return records[:self.page_size]

    def extract_batch(self, offset: int = 0, limit: int = 1000) -> List[Record]:
        """
        Extract a batch of records.

        Args:
            offset: Starting offset
            limit: Maximum records to extract

        Returns:
            List of identifier-normalized records
        """
        rows = self.connection.select(self._table, start=offset, limit=limit)
        return [self.normalizer.normalize_record(row, self._table) for row in rows]
