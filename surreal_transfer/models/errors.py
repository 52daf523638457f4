"""Error types raised and collected during a transfer."""

from typing import Any, Dict, Optional


class TransferError(Exception):
    """
    Base class for all transfer errors.

    Carries a human readable message plus structured details so that
    per-item failures can be reported after the run completes.
    """

    error_type = "transfer"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TransferError):
    """The input file set is unusable; raised before any work starts."""

    error_type = "validation"


class ParseError(TransferError):
    """A file body could not be parsed into records."""

    error_type = "parse"

    def __init__(self, path: Any, reason: str):
        super().__init__(f"Failed to parse {path}: {reason}", {"path": str(path)})
        self.path = path


class NamingError(TransferError):
    """A table name could not be derived from a file name."""

    error_type = "naming"

    def __init__(self, path: Any, reason: str = "empty file stem"):
        super().__init__(
            f"Cannot derive a table name from {path}: {reason}",
            {"path": str(path)},
        )
        self.path = path


class TableImportError(TransferError):
    """The database reported statement errors while inserting a file."""

    error_type = "import"

    def __init__(self, path: Any, table: str, message: str):
        super().__init__(
            f"Import of {path} into {table} failed: {message}",
            {"path": str(path), "table": table},
        )
        self.path = path
        self.table = table


class TableExportError(TransferError):
    """Exporting a single table failed (query, schema lookup or write)."""

    error_type = "export"

    def __init__(self, table: str, message: str):
        super().__init__(f"Export of {table} failed: {message}", {"table": table})
        self.table = table


class DatabaseError(TransferError):
    """Base class for errors reported by the database service."""

    error_type = "database"


class AuthError(DatabaseError):
    """Sign-in was rejected."""

    error_type = "auth"


class NetworkError(DatabaseError):
    """The database endpoint could not be reached or answered abnormally."""

    error_type = "network"


class QueryError(DatabaseError):
    """One or more statements returned an error status."""

    error_type = "query"


class ReportError(TransferError):
    """The run report could not be written."""

    error_type = "report"

    def __init__(self, path: Any, reason: str):
        super().__init__(f"Failed to write report to {path}: {reason}", {"path": str(path)})
        self.path = path
