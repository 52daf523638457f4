"""Record loaders for the database and export files."""

from .base import BaseLoader, LoadResult
from .file_loader import CSVFileLoader, FileLoader, JSONFileLoader
from .surreal_loader import SurrealLoader

__all__ = [
    "BaseLoader",
    "LoadResult",
    "CSVFileLoader",
    "FileLoader",
    "JSONFileLoader",
    "SurrealLoader",
]
