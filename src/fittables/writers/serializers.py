"""
Serialization utilities for materialized tables.

Converts dense tables into Arrow tables and JSON-ready records.
"""

import math
from typing import Any, Optional

import pyarrow as pa

from fittables.tables import MaterializedTable

from .schemas import build_arrow_schema


def to_arrow_table(table: MaterializedTable) -> pa.Table:
    """
    Convert a materialized table into a pyarrow Table.

    Nulls stay nulls; units are attached as field metadata.
    """
    schema = build_arrow_schema(table)
    arrays = [pa.array(values, type=pa.float64()) for values in table.columns.values()]
    if not arrays:
        # Arrow has no rows without columns; row_count lives in the schema metadata
        return pa.Table.from_batches([], schema=schema)
    return pa.Table.from_arrays(arrays, schema=schema)


def serialize_value(value: Optional[float]) -> Optional[float]:
    """
    Serialize a value for JSON output.

    NaN and infinities are not valid JSON and are written as null.
    """
    if value is None:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def table_to_record(table: MaterializedTable) -> dict[str, Any]:
    """Convert a materialized table to a JSON-ready dict."""
    record = table.to_dict()
    record["columns"] = {
        name: [serialize_value(v) for v in values] for name, values in table.columns.items()
    }
    return record
