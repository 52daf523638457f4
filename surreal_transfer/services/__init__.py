"""Service layer for the transfer application."""

from .database import QueryResponse, SurrealConnection
from .format_resolver import resolve_format
from .identifiers import IdentifierNormalizer
from .schema_inspector import SchemaInspector
from .tabular import NULL, TabularSerializer

__all__ = [
    "QueryResponse",
    "SurrealConnection",
    "resolve_format",
    "IdentifierNormalizer",
    "SchemaInspector",
    "NULL",
    "TabularSerializer",
]
