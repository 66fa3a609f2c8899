"""
Per-message-type table builder.

Columns are stored sparsely, mapping row index to value, so that the
schema can grow record by record. A column exists for every expanded
field name ever seen for the message type.
"""

import logging
from typing import Any, Iterator, Optional, Union

from fittables.enums import NUMERIC_BASE_TYPES, BaseType
from fittables.models.record import Record, RecordField

logger = logging.getLogger(__name__)

FieldValue = Optional[float]

# Value stored for fields whose encoded kind cannot be interpreted
UNRECOGNIZED_SENTINEL = -1.0


def to_field_value(
    value: Any,
    base_type: Union[BaseType, str],
    unrecognized: FieldValue = UNRECOGNIZED_SENTINEL,
) -> FieldValue:
    """
    Widen one encoded scalar to the float64 value domain.

    Args:
        value: Scalar as reported by the decoder (None when invalid)
        base_type: Encoded kind of the field
        unrecognized: Value used when the kind is not numeric

    Returns:
        The value as a float, None for invalid values, or ``unrecognized``
    """
    if base_type not in NUMERIC_BASE_TYPES:
        return unrecognized
    if value is None:
        return None
    return float(value)


def expand_field(field: RecordField) -> Iterator[tuple[str, Any]]:
    """
    Yield (column_name, raw_value) pairs for a field.

    Single-valued fields keep their name. A field with k > 1 values
    expands into ``<name>_1`` ... ``<name>_k``.
    """
    if field.num_values == 1:
        yield field.name, field.values[0]
        return
    for position, value in enumerate(field.values, start=1):
        yield f"{field.name}_{position}", value


class TableBuilder:
    """
    Accumulates the rows of a single message type.

    Each appended record gets the next row index (starting at 1), even if
    it carries no fields. Fields are expanded into columns, created lazily
    on first sight together with their unit. The first unit seen for a
    column is kept for good.

    Usage:
        table = TableBuilder(20, "record")
        table.append(record)
        print(table.row_count, table.column_names)
    """

    def __init__(
        self,
        type_id: int,
        name: str,
        unrecognized_value: FieldValue = UNRECOGNIZED_SENTINEL,
    ):
        self.type_id = type_id
        self.name = name
        self.unrecognized_value = unrecognized_value

        self._row_counter = 0
        self.row_indices: list[int] = []
        self.columns: dict[str, dict[int, FieldValue]] = {}
        self.units: dict[str, str] = {}

        # Columns that received a value of an unrecognized kind, with counts
        self.unrecognized: dict[str, int] = {}
        # Columns that were later reported with a different unit
        self.unit_conflicts: dict[str, set[str]] = {}

    @property
    def row_count(self) -> int:
        """Number of records appended so far."""
        return len(self.row_indices)

    @property
    def column_names(self) -> list[str]:
        """Column names in discovery order."""
        return list(self.columns)

    @property
    def unrecognized_count(self) -> int:
        return sum(self.unrecognized.values())

    def append(self, record: Record) -> int:
        """
        Append one record as a new row.

        Args:
            record: Record of this table's message type

        Returns:
            The row index assigned to the record
        """
        self._row_counter += 1
        row_index = self._row_counter
        self.row_indices.append(row_index)

        for field in record.fields:
            for column_name, raw in expand_field(field):
                column = self.columns.get(column_name)
                if column is None:
                    column = self.columns[column_name] = {}
                    self.units[column_name] = field.units
                elif field.units != self.units[column_name]:
                    self._note_unit_conflict(column_name, field.units)

                if field.base_type not in NUMERIC_BASE_TYPES:
                    self._note_unrecognized(column_name, field.base_type)

                column[row_index] = to_field_value(
                    raw, field.base_type, unrecognized=self.unrecognized_value
                )

        return row_index

    def _note_unrecognized(self, column_name: str, base_type: Union[BaseType, str]) -> None:
        count = self.unrecognized.get(column_name, 0)
        if count == 0:
            kind = base_type.value if isinstance(base_type, BaseType) else base_type
            logger.warning(
                f"Unrecognized field type '{kind}' for {self.name}.{column_name}; "
                f"storing {self.unrecognized_value}"
            )
        self.unrecognized[column_name] = count + 1

    def _note_unit_conflict(self, column_name: str, units: str) -> None:
        seen = self.unit_conflicts.setdefault(column_name, set())
        if units not in seen:
            logger.debug(
                f"Ignoring unit '{units}' for {self.name}.{column_name}, "
                f"keeping '{self.units[column_name]}'"
            )
            seen.add(units)

    def __repr__(self) -> str:
        return (
            f"TableBuilder(type_id={self.type_id}, name={self.name!r}, "
            f"rows={self.row_count}, columns={len(self.columns)})"
        )
