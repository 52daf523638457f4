"""Schema-driven CSV projection of records."""

import csv
import json
from typing import Any, Iterable, List, Sequence, TextIO

from ..models.record import Record

NULL = "NULL"

_MISSING = object()


def stringify(value: Any) -> str:
    """Render a JSON-shaped value as a single CSV cell."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def get_field(record: Record, path: str) -> Any:
    """
    Get a field value by name, falling back to dot-notation (e.g. 'address.city').

    Returns the module-level missing marker when the field is absent.
    """
    if path in record:
        return record[path]

    value: Any = record
    for part in path.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        elif isinstance(value, list) and part.isdigit() and int(part) < len(value):
            value = value[int(part)]
        else:
            return _MISSING
    return value


class TabularSerializer:
    """
    Projects records onto a fixed column list.

    Absent fields and nulls both render as the NULL sentinel, so records
    that drifted from the declared schema still serialize.
    """

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)

    def header(self) -> List[str]:
        return list(self.fields)

    def row(self, record: Record) -> List[str]:
        cells = []
        for name in self.fields:
            value = get_field(record, name)
            cells.append(NULL if value is _MISSING else stringify(value))
        return cells

    def write(self, records: Iterable[Record], stream: TextIO) -> int:
        """
        Write the header and one row per record to a text stream.

        Returns:
            Number of record rows written
        """
        writer = csv.writer(stream)
        writer.writerow(self.header())
        count = 0
        for record in records:
            writer.writerow(self.row(record))
            count += 1
        return count
