"""Conversion between database record ids and plain display values."""

from typing import Any, Optional, Union

from ..models.record import Record, RecordId

ID_FIELD = "id"


def _native_key(value: Any) -> Any:
    """Unwrap a tagged key such as {"Number": 1} or {"String": "abc"}."""
    if isinstance(value, dict) and len(value) == 1:
        tag, inner = next(iter(value.items()))
        if tag in ("Number", "String", "Uuid", "Int", "Float"):
            return inner
    return value


def to_record_id(value: Any) -> Optional[RecordId]:
    """Interpret a value as a RecordId, or return None if it isn't one."""
    if isinstance(value, RecordId):
        return value
    if isinstance(value, str):
        return RecordId.parse(value)
    if isinstance(value, dict) and "tb" in value and "id" in value:
        key = _native_key(value["id"])
        if isinstance(key, (str, int)) and not isinstance(key, bool):
            return RecordId(table=str(value["tb"]), key=key)
    return None


class IdentifierNormalizer:
    """
    Rewrites record ids between the database shape and file shape.

    On export the ``id`` field collapses to its key as a string; on import
    verification a key is turned back into a RecordId for comparison.
    """

    def __init__(self, id_field: str = ID_FIELD):
        self.id_field = id_field

    def normalize(self, value: Any, table: Optional[str] = None) -> Optional[str]:
        """
        Get the plain key for an identifier value.

        Args:
            value: RecordId, ``table:key`` text, or ``{"tb", "id"}`` mapping
            table: If given, only identifiers of this table are recognized

        Returns:
            The key as a string, or None if the value is not an identifier
        """
        record_id = to_record_id(value)
        if record_id is None:
            return None
        if table is not None and record_id.table != table:
            return None
        return record_id.display_key

    def denormalize(self, table: str, key: Union[int, str]) -> RecordId:
        """Rebuild the identifier for a key in a table."""
        return RecordId(table=table, key=key)

    def normalize_record(self, record: Record, table: Optional[str] = None) -> Record:
        """
        Return a copy of the record with its id replaced by the plain key.

        Records without an id, or whose id is not a recognized identifier,
        are returned unchanged.
        """
        if self.id_field not in record:
            return record

        key = self.normalize(record[self.id_field], table)
        if key is None:
            return record

        normalized = dict(record)
        normalized[self.id_field] = key
        return normalized
