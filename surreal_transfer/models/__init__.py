"""Data models for the transfer application."""

from .errors import (
    TransferError,
    ValidationError,
    ParseError,
    NamingError,
    TableImportError,
    TableExportError,
    DatabaseError,
    AuthError,
    NetworkError,
    QueryError,
    ReportError,
)
from .record import (
    Record,
    RecordId,
    TransferOutcome,
)
from .settings import ConnectionSettings
from .transfer import (
    ExportJob,
    FileFormat,
    TransferConfig,
    TransferRun,
    TransferStatus,
)

__all__ = [
    "TransferError",
    "ValidationError",
    "ParseError",
    "NamingError",
    "TableImportError",
    "TableExportError",
    "DatabaseError",
    "AuthError",
    "NetworkError",
    "QueryError",
    "ReportError",
    "Record",
    "RecordId",
    "TransferOutcome",
    "ConnectionSettings",
    "ExportJob",
    "FileFormat",
    "TransferConfig",
    "TransferRun",
    "TransferStatus",
]
