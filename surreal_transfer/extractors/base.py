"""Base extractor interface."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union
import logging

from ..models.errors import NamingError
from ..models.record import Record

logger = logging.getLogger(__name__)


class BaseExtractor(ABC):
    """
    Base class for all record extractors.

    Extractors pull records out of a source (an input file or a database
    table) and hand them on as plain Record mappings.
    """

    @property
    @abstractmethod
    def table(self) -> str:
        """Name of the table the records belong to."""
        pass

    @abstractmethod
    def extract(self) -> List[Record]:
        """
        Extract records from the source.

        Returns:
            Records in source order
        """
        pass


class FileExtractor(BaseExtractor):
    """
    Base class for extractors that read one input file.

    The target table is named after the file stem.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        """
        Initialize the extractor.

        Args:
            path: Input file path
            encoding: File encoding
        """
        self.path = Path(path)
        self.encoding = encoding

    @property
    def table(self) -> str:
        return table_name(self.path)


def table_name(path: Union[str, Path]) -> str:
    """
    Derive a table name from a file path by stripping its extension.

    Raises:
        NamingError: If the stem is empty
    """
    stem = Path(path).stem.strip()
    if not stem or stem.startswith("."):
        raise NamingError(path)
    return stem
