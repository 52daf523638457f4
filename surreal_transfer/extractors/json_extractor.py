"""JSON file record extractor."""

import json
import logging
from typing import Any, List

from .base import FileExtractor
from ..models.errors import ParseError
from ..models.record import Record

logger = logging.getLogger(__name__)


class JSONExtractor(FileExtractor):
    """
    Extractor for JSON files.

    Accepts either a single JSON object (one record) or an array of
    objects (one record per element, in file order).
    """

    def extract(self) -> List[Record]:
        """Read and parse the file into records."""
        try:
            with open(self.path, "r", encoding=self.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(self.path, f"cannot read file: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(self.path, f"invalid JSON: {e}") from e

        records = self._to_records(data)
        logger.debug(f"Read {len(records)} record(s) from {self.path}")
        return records

    def _to_records(self, data: Any) -> List[Record]:
        if isinstance(data, dict):
            return [data]

        if isinstance(data, list):
            for idx, item in enumerate(data):
                if not isinstance(item, dict):
                    raise ParseError(
                        self.path,
                        f"item {idx} is {type(item).__name__}, expected an object",
                    )
            return data

        raise ParseError(
            self.path,
            f"root value is {type(data).__name__}, expected an object or array",
        )
