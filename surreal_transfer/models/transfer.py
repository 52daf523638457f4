"""Transfer execution models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime
import uuid

from .record import TransferOutcome


class TransferStatus(str, Enum):
    """Status of a transfer run."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    FAILED = "failed"


class FileFormat(str, Enum):
    """File formats understood by the transfer tool."""
    JSON = "json"
    CSV = "csv"  # Export only; import is reserved

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True)
class ExportJob:
    """One table to export in one format."""
    table: str
    format: FileFormat = FileFormat.JSON

    @property
    def file_name(self) -> str:
        return f"{self.table}{self.format.extension}"


@dataclass
class TransferConfig:
    """Options for a transfer run (connection settings live separately)."""
    operation: str = "import"  # import, export
    items: List[str] = field(default_factory=list)  # file paths or table names
    format: FileFormat = FileFormat.JSON
    output_dir: str = "."
    page_size: int = 1000
    max_workers: Optional[int] = None
    dry_run: bool = False
    report_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "operation": self.operation,
            "items": self.items,
            "format": self.format.value,
            "output_dir": self.output_dir,
            "page_size": self.page_size,
            "max_workers": self.max_workers,
            "dry_run": self.dry_run,
            "report_path": self.report_path,
        }


@dataclass
class TransferRun:
    """A complete import or export run."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    operation: str = ""
    status: TransferStatus = TransferStatus.PENDING

    # Timing
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Per-item results
    outcomes: List[TransferOutcome] = field(default_factory=list)

    # Run-level errors (fatal)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def duration_seconds(self) -> Optional[float]:
        """Get duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    @property
    def failures(self) -> List[TransferOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def total_succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def total_failed(self) -> int:
        return len(self.failures)

    @property
    def total_records(self) -> int:
        return sum(o.record_count for o in self.outcomes if o.success)

    def finish(self) -> None:
        """Stamp completion and derive the final status from outcomes."""
        self.completed_at = datetime.utcnow()
        if self.errors:
            self.status = TransferStatus.FAILED
        elif self.failures:
            self.status = TransferStatus.COMPLETED_WITH_ERRORS
        else:
            self.status = TransferStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "operation": self.operation,
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "total_succeeded": self.total_succeeded,
            "total_failed": self.total_failed,
            "total_records": self.total_records,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "errors": self.errors,
        }
