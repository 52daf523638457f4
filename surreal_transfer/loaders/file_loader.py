"""Loaders that write exported records to files."""

import json
import logging
from abc import abstractmethod
from pathlib import Path
from typing import Callable, List, TextIO, Union

from .base import BaseLoader, LoadResult
from ..models.record import Record
from ..models.transfer import ExportJob, FileFormat
from ..services.schema_inspector import SchemaInspector
from ..services.tabular import TabularSerializer

logger = logging.getLogger(__name__)

Writer = Callable[[List[Record], TextIO], int]


class FileLoader(BaseLoader):
    """
    Writes a table's records to ``<output_dir>/<table>.<ext>``.

    A partially written file is removed if writing fails.
    """

    file_format: FileFormat

    def __init__(self, output_dir: Union[str, Path] = ".", encoding: str = "utf-8"):
        super().__init__(dry_run=False)
        self.output_dir = Path(output_dir)
        self.encoding = encoding

    def path_for(self, table: str) -> Path:
        return self.output_dir / ExportJob(table, self.file_format).file_name

    @abstractmethod
    def _writer(self, table: str) -> Writer:
        """Prepare a writer for the table; called before the file is opened."""
        pass

    def load(self, table: str, records: List[Record]) -> LoadResult:
        result = LoadResult(table=table, total_attempted=len(records))

        writer = self._writer(table)
        path = self.path_for(table)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w", encoding=self.encoding, newline="") as f:
                result.total_succeeded = writer(records, f)
        except Exception:
            path.unlink(missing_ok=True)
            raise

        result.output_path = str(path)
        logger.info(f"Wrote {result.total_succeeded} {table} record(s) to {path}")
        return result


class JSONFileLoader(FileLoader):
    """Writes records as a pretty-printed JSON array."""

    file_format = FileFormat.JSON

    def _writer(self, table: str) -> Writer:
        def write(records: List[Record], stream: TextIO) -> int:
            json.dump(records, stream, indent=2, ensure_ascii=False)
            stream.write("\n")
            return len(records)

        return write


class CSVFileLoader(FileLoader):
    """Writes records as CSV, with columns taken from the table schema."""

    file_format = FileFormat.CSV

    def __init__(
        self,
        inspector: SchemaInspector,
        output_dir: Union[str, Path] = ".",
        encoding: str = "utf-8"
    ):
        super().__init__(output_dir, encoding)
        self.inspector = inspector

    def _writer(self, table: str) -> Writer:
        serializer = TabularSerializer(self.inspector.fields(table))
        return serializer.write
