"""
PyArrow schema construction for decoded tables.

Every column is a nullable float64. Units travel as field metadata so
they survive a round trip through Parquet.
"""

import pyarrow as pa

from fittables.tables import MaterializedTable

UNITS_KEY = b"units"
MESSAGE_NAME_KEY = b"fit_message_name"
MESSAGE_NUM_KEY = b"fit_message_num"
ROW_COUNT_KEY = b"fit_row_count"


def build_arrow_schema(table: MaterializedTable) -> pa.Schema:
    """
    Build the Arrow schema for one materialized table.

    Args:
        table: The dense table

    Returns:
        Schema with one float64 field per column, in column order. The
        row count is kept in the schema metadata, since a table with no
        columns has no rows in Arrow
    """
    fields = [
        pa.field(name, pa.float64(), nullable=True, metadata={UNITS_KEY: units.encode()})
        for name, units in zip(table.columns, table.units)
    ]
    return pa.schema(
        fields,
        metadata={
            MESSAGE_NAME_KEY: table.name.encode(),
            MESSAGE_NUM_KEY: str(table.type_id).encode(),
            ROW_COUNT_KEY: str(table.row_count).encode(),
        },
    )


def units_from_schema(schema: pa.Schema) -> dict[str, str]:
    """Recover the column units stored in a schema."""
    units = {}
    for field in schema:
        metadata = field.metadata or {}
        units[field.name] = metadata.get(UNITS_KEY, b"").decode()
    return units


def row_count_from_schema(schema: pa.Schema) -> int | None:
    """Recover the table row count stored in a schema, if present."""
    value = (schema.metadata or {}).get(ROW_COUNT_KEY)
    return int(value) if value is not None else None
