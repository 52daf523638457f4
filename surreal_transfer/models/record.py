"""Record models for transfer data."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from datetime import datetime

from .errors import TransferError

# A record is a plain JSON-shaped mapping
Record = Dict[str, Any]

_PLAIN_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INT_KEY = re.compile(r"^-?[0-9]+$")


def escape_ident(value: str) -> str:
    """Escape a table name or string key for use in SurrealQL."""
    if _PLAIN_KEY.match(value):
        return value
    return "⟨" + value.replace("⟩", "\\⟩") + "⟩"


def unescape_ident(value: str) -> str:
    """Strip ⟨...⟩ or `...` escaping from an identifier."""
    if len(value) >= 2 and value[0] == "⟨" and value[-1] == "⟩":
        return value[1:-1].replace("\\⟩", "⟩")
    if len(value) >= 2 and value[0] == "`" and value[-1] == "`":
        return value[1:-1].replace("\\`", "`")
    return value


@dataclass(frozen=True)
class RecordId:
    """
    Composite identifier of a record inside a table.

    The text form is ``table:key``; keys that are neither integers nor
    plain identifiers are wrapped in ``⟨...⟩``.
    """
    table: str
    key: Union[int, str]

    def __str__(self) -> str:
        if isinstance(self.key, int) and not isinstance(self.key, bool):
            key = str(self.key)
        else:
            key = str(self.key)
            if not _PLAIN_KEY.match(key) or _INT_KEY.match(key):
                key = "⟨" + key.replace("⟩", "\\⟩") + "⟩"
        return f"{escape_ident(self.table)}:{key}"

    @property
    def display_key(self) -> str:
        """The key component rendered as a plain string."""
        return str(self.key)

    @classmethod
    def parse(cls, text: str) -> Optional["RecordId"]:
        """
        Parse ``table:key`` text into a RecordId.

        Returns None if the text is not shaped like a record id.
        """
        if not isinstance(text, str):
            return None

        if text.startswith("⟨"):
            end = text.find("⟩:")
            if end < 0:
                return None
            table = unescape_ident(text[:end + 1])
            raw_key = text[end + 2:]
        elif text.startswith("`"):
            end = text.find("`:", 1)
            if end < 0:
                return None
            table = unescape_ident(text[:end + 1])
            raw_key = text[end + 2:]
        else:
            table, sep, raw_key = text.partition(":")
            if not sep or not _PLAIN_KEY.match(table):
                return None

        if not table or not raw_key:
            return None

        if _INT_KEY.match(raw_key):
            return cls(table=table, key=int(raw_key))

        key = unescape_ident(raw_key)
        return cls(table=table, key=key)


@dataclass
class TransferOutcome:
    """Result of transferring one file (import) or one table (export)."""
    item: str
    table: Optional[str] = None
    success: bool = False
    record_count: int = 0
    output_path: Optional[str] = None
    error: Optional[TransferError] = None
    warnings: List[str] = field(default_factory=list)
    created_ids: List[str] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        """Get duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def fail(self, error: TransferError) -> "TransferOutcome":
        """Mark the outcome as failed with the given error."""
        self.success = False
        self.error = error
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "item": self.item,
            "table": self.table,
            "success": self.success,
            "record_count": self.record_count,
            "output_path": self.output_path,
            "error": self.error.to_dict() if self.error else None,
            "warnings": self.warnings,
            "created_ids": self.created_ids,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
        }
