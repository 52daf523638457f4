"""Export engine - dumps database tables to files, one concurrent task per table."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .extractors.table_extractor import TableExtractor
from .loaders.base import BaseLoader
from .loaders.file_loader import CSVFileLoader, JSONFileLoader
from .models.errors import (
    AuthError,
    DatabaseError,
    NetworkError,
    TableExportError,
    TransferError,
    ValidationError,
)
from .models.record import TransferOutcome
from .models.transfer import ExportJob, FileFormat
from .services.schema_inspector import SchemaInspector

logger = logging.getLogger(__name__)


class ExportEngine:
    """
    Exports tables to JSON or CSV files.

    Every table runs as an independent task on a thread pool, each with its
    own clone of the connection. A failing table is reported on its own
    outcome and never cancels its siblings; run() returns once every task
    has finished. Connection-level errors (auth, network) are raised from
    run() after the outcomes of all tasks have been collected.
    """

    def __init__(
        self,
        connection,
        output_dir: Union[str, Path] = ".",
        page_size: int = 1000,
        max_workers: Optional[int] = None
    ):
        """
        Initialize the export engine.

        Args:
            connection: Database service connection (cloned per task)
            output_dir: Directory receiving ``<table>.<format>`` files
            page_size: Maximum records exported per table
            max_workers: Thread pool size (default: one per table)
        """
        if page_size <= 0:
            raise ValidationError(f"Page size must be positive, got {page_size}")
        self.connection = connection
        self.output_dir = Path(output_dir)
        self.page_size = page_size
        self.max_workers = max_workers

    def run(
        self,
        tables: Sequence[str],
        file_format: FileFormat = FileFormat.JSON,
        outcomes: Optional[List[TransferOutcome]] = None
    ) -> List[TransferOutcome]:
        """
        Export all tables concurrently.

        Args:
            tables: Tables to export; duplicates are collapsed
            file_format: Output format
            outcomes: List to append outcomes to (default: a new list)

        Raises:
            ValidationError: If no tables are given
            AuthError, NetworkError: If any task lost the connection. Raised
                after every task has finished and all outcomes are appended.

        Returns:
            One outcome per distinct table, in request order
        """
        outcomes = outcomes if outcomes is not None else []
        jobs = [ExportJob(table=table, format=file_format) for table in dict.fromkeys(tables)]
        if not jobs:
            raise ValidationError("No tables given")

        workers = self.max_workers or len(jobs)
        logger.info(f"Exporting {len(jobs)} table(s) as {file_format.value} with {workers} worker(s)")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="export") as executor:
            futures = [executor.submit(self.export_table, job) for job in jobs]
            wait(futures)

        fatal: Optional[DatabaseError] = None
        failed = 0
        for job, future in zip(jobs, futures):
            error = future.exception()
            if error is None:
                outcome = future.result()
            else:
                if isinstance(error, (AuthError, NetworkError)) and fatal is None:
                    fatal = error
                message = error.message if isinstance(error, TransferError) else str(error)
                outcome = TransferOutcome(item=job.table, table=job.table)
                outcome.fail(TableExportError(job.table, message))
            if not outcome.success:
                failed += 1
                logger.error(outcome.error.message)
            outcomes.append(outcome)

        logger.info(f"Exported {len(jobs) - failed}/{len(jobs)} table(s)")
        if fatal is not None:
            raise fatal
        return outcomes

    def export_table(self, job: ExportJob) -> TransferOutcome:
        """Export a single table; per-table failures are captured on the outcome."""
        outcome = TransferOutcome(item=job.table, table=job.table)
        outcome.started_at = datetime.utcnow()

        if not self._valid_table_name(job.table):
            outcome.completed_at = datetime.utcnow()
            return outcome.fail(TableExportError(job.table, "invalid table name"))

        try:
            with self.connection.clone() as connection:
                extractor = TableExtractor(connection, job.table, self.page_size)
                records = extractor.extract()
                if extractor.truncated:
                    outcome.warnings.append(f"Export truncated at {self.page_size} records")
                    logger.warning(f"{job.table}: export truncated at {self.page_size} records")

                result = self._create_loader(job.format, connection).load(job.table, records)

            outcome.success = True
            outcome.record_count = result.total_succeeded
            outcome.output_path = result.output_path

        except (AuthError, NetworkError):
            # Connection-level; run() reports it once all tasks finish
            raise

        except TransferError as e:
            outcome.fail(TableExportError(job.table, e.message))

        except (OSError, ValueError, TypeError) as e:
            outcome.fail(TableExportError(job.table, str(e)))

        finally:
            outcome.completed_at = datetime.utcnow()

        return outcome

    def _create_loader(self, file_format: FileFormat, connection) -> BaseLoader:
        """Create the file loader for an output format."""
        if file_format == FileFormat.JSON:
            return JSONFileLoader(self.output_dir)
        elif file_format == FileFormat.CSV:
            return CSVFileLoader(SchemaInspector(connection), self.output_dir)
        else:
            raise ValueError(f"Unsupported export format: {file_format}")

    @staticmethod
    def _valid_table_name(table: str) -> bool:
        if not table or not table.strip() or table in (".", ".."):
            return False
        return "/" not in table and os.sep not in table
