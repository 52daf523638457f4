"""Base loader interface for record targets."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from ..models.record import Record

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Result of a load operation."""
    table: str
    total_attempted: int = 0
    total_succeeded: int = 0
    created_ids: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    output_path: Optional[str] = None


class BaseLoader(ABC):
    """
    Base class for loaders.

    Loaders write a batch of records for one table into a target: the
    database on import, a file on export. Failures are raised, not
    collected; the calling engine decides how far they propagate.
    """

    def __init__(self, dry_run: bool = False):
        """
        Initialize the loader.

        Args:
            dry_run: If True, simulate without making changes
        """
        self.dry_run = dry_run

    @abstractmethod
    def load(self, table: str, records: List[Record]) -> LoadResult:
        """
        Load all records for a table.

        Args:
            table: Target table name
            records: Records to load

        Returns:
            LoadResult with counts
        """
        pass
