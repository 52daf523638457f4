"""Transfer orchestrator - coordinates a complete import or export run."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .exporter import ExportEngine
from .importer import ImportEngine, validate_inputs
from .models.errors import DatabaseError, ReportError, TransferError, ValidationError
from .models.settings import ConnectionSettings
from .models.transfer import TransferConfig, TransferRun, TransferStatus
from .services.database import SurrealConnection

logger = logging.getLogger(__name__)


class TransferOrchestrator:
    """
    Orchestrates a transfer run.

    Handles:
    - Input validation before any connection is made
    - Connecting and signing in to the database
    - Running the import or export engine
    - Collecting per-item outcomes into a TransferRun
    - Writing the optional JSON run report
    """

    def __init__(
        self,
        config: TransferConfig,
        settings: Optional[ConnectionSettings] = None,
        connection: Optional[SurrealConnection] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Transfer configuration
            settings: Connection settings (ignored if connection is given)
            connection: Existing connection to use instead of connecting
        """
        self.config = config
        self.settings = settings or ConnectionSettings()
        self.connection = connection
        self.run: Optional[TransferRun] = None

    def run_transfer(self) -> TransferRun:
        """
        Run the configured transfer.

        Fatal errors (invalid input, auth, network) are recorded on the
        run with status FAILED; per-item failures leave the run
        COMPLETED_WITH_ERRORS. Outcomes of items finished before a fatal
        error are kept. A report that cannot be written fails the run.
        """
        self.run = TransferRun(operation=self.config.operation)
        self.run.started_at = datetime.utcnow()
        self.run.status = TransferStatus.RUNNING

        owned = self.connection is None
        connection = self.connection

        try:
            if self.config.operation == "import":
                validate_inputs(self.config.items)
            elif self.config.operation != "export":
                raise ValidationError(f"Unknown operation: {self.config.operation}")

            if connection is None:
                connection = SurrealConnection.connect(self.settings)

            if self.config.operation == "import":
                logger.info("=== IMPORT ===")
                engine = ImportEngine(connection, dry_run=self.config.dry_run)
                engine.run(self.config.items, self.run.outcomes)
            else:
                logger.info("=== EXPORT ===")
                engine = ExportEngine(
                    connection,
                    output_dir=self.config.output_dir,
                    page_size=self.config.page_size,
                    max_workers=self.config.max_workers,
                )
                engine.run(self.config.items, self.config.format, self.run.outcomes)

        except (ValidationError, DatabaseError) as e:
            logger.error(f"Transfer aborted: {e.message}")
            self._record_error(e)

        finally:
            if owned and connection is not None:
                connection.close()
            self.run.finish()
            if self.config.report_path:
                self._save_report(Path(self.config.report_path))

        return self.run

    def _record_error(self, error: TransferError):
        self.run.errors.append({
            **error.to_dict(),
            "timestamp": datetime.utcnow().isoformat(),
        })

    def _save_report(self, filepath: Path):
        """Save the run report; a failed write marks the run as failed."""
        report = self.run.to_dict()
        report["config"] = self.config.to_dict()
        report["connection"] = self.settings.to_dict()
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=2, default=str)
        except OSError as e:
            error = ReportError(filepath, str(e))
            logger.error(error.message)
            self._record_error(error)
            self.run.finish()
            return
        logger.info(f"Saved transfer report to {filepath}")
