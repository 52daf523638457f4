"""Record extractors for input files and database tables."""

from typing import Dict, Type

from .base import BaseExtractor, FileExtractor, table_name
from .json_extractor import JSONExtractor
from .table_extractor import TableExtractor
from ..models.errors import ValidationError
from ..models.transfer import FileFormat

# Formats that can be imported; CSV import is not implemented yet
FILE_EXTRACTORS: Dict[FileFormat, Type[FileExtractor]] = {
    FileFormat.JSON: JSONExtractor,
}


def get_extractor(file_format: FileFormat) -> Type[FileExtractor]:
    """Get the extractor class for an input format."""
    try:
        return FILE_EXTRACTORS[file_format]
    except KeyError:
        raise ValidationError(
            f"Importing {file_format.value} files is not supported",
            {"format": file_format.value},
        ) from None


__all__ = [
    "BaseExtractor",
    "FileExtractor",
    "JSONExtractor",
    "TableExtractor",
    "FILE_EXTRACTORS",
    "get_extractor",
    "table_name",
]
