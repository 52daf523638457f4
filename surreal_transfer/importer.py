"""Import engine - loads input files into database tables."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Type, Union

from .extractors import FileExtractor, get_extractor
from .loaders.surreal_loader import SurrealLoader
from .models.errors import NamingError, ParseError, QueryError, TableImportError
from .models.record import TransferOutcome
from .services.format_resolver import resolve_format

logger = logging.getLogger(__name__)


def validate_inputs(paths: Sequence[Union[str, Path]]) -> Type[FileExtractor]:
    """
    Validate an input file set and pick its extractor.

    Raises:
        ValidationError: If the files are missing, mixed, or of a format
            that cannot be imported
    """
    return get_extractor(resolve_format(paths))


class ImportEngine:
    """
    Imports input files, one bulk insert per file.

    Files are processed in the given order. A file that cannot be parsed,
    named or inserted is reported on its own outcome; the remaining files
    still run. Connection-level errors (auth, network) propagate.
    """

    def __init__(self, connection, dry_run: bool = False):
        """
        Initialize the import engine.

        Args:
            connection: Database service connection
            dry_run: If True, read and validate files without inserting
        """
        self.connection = connection
        self.loader = SurrealLoader(connection, dry_run=dry_run)

    def run(
        self,
        paths: Sequence[Union[str, Path]],
        outcomes: Optional[List[TransferOutcome]] = None
    ) -> List[TransferOutcome]:
        """
        Import all files.

        Args:
            paths: Input files, processed in order
            outcomes: List to append outcomes to (default: a new list). Files
                finished before a connection-level error stay in it.

        Raises:
            ValidationError: If the file set is invalid; nothing is imported
            AuthError, NetworkError: If the connection fails mid-run

        Returns:
            One outcome per file, in input order
        """
        extractor_cls = validate_inputs(paths)

        outcomes = outcomes if outcomes is not None else []
        for path in paths:
            outcomes.append(self.import_file(extractor_cls(path)))

        failed = sum(1 for o in outcomes if not o.success)
        logger.info(f"Imported {len(outcomes) - failed}/{len(outcomes)} file(s)")
        return outcomes

    def import_file(self, extractor) -> TransferOutcome:
        """Import a single file through its extractor."""
        outcome = TransferOutcome(item=str(extractor.path))
        outcome.started_at = datetime.utcnow()

        try:
            outcome.table = extractor.table
            records = extractor.extract()
            result = self.loader.load(outcome.table, records)

            outcome.success = True
            outcome.record_count = result.total_succeeded
            outcome.created_ids = result.created_ids
            outcome.warnings.extend(result.warnings)
            for warning in result.warnings:
                logger.warning(f"{extractor.path}: {warning}")
            logger.info(f"Inserted {result.total_succeeded} record(s) from {extractor.path} into {outcome.table}")

        except (ParseError, NamingError) as e:
            outcome.fail(e)
            logger.error(e.message)

        except QueryError as e:
            outcome.fail(TableImportError(extractor.path, outcome.table, e.message))
            logger.error(outcome.error.message)

        finally:
            outcome.completed_at = datetime.utcnow()

        return outcome
