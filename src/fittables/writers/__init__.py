"""
Writers module for outputting decoded tables to Parquet and JSON files.

Module structure:
- schemas.py: PyArrow schema construction (units in field metadata)
- serializers.py: Table-to-Arrow and table-to-JSON conversion
- parquet_writer.py: ParquetWriter class
- json_writer.py: JSONWriter class
"""

from pathlib import Path

from fittables.workflow import DecodeResult

from .json_writer import JSONWriter, write_result_to_json
from .parquet_writer import ParquetWriter
from .schemas import build_arrow_schema, row_count_from_schema, units_from_schema
from .serializers import serialize_value, table_to_record, to_arrow_table

__all__ = [
    # Schemas
    "build_arrow_schema",
    "row_count_from_schema",
    "units_from_schema",
    # Serializers
    "serialize_value",
    "table_to_record",
    "to_arrow_table",
    # Writers
    "ParquetWriter",
    "JSONWriter",
    # Convenience functions
    "write_result_to_parquet",
    "write_result_to_json",
]


def write_result_to_parquet(result: DecodeResult, output_dir: str | Path) -> dict[str, Path]:
    """
    Convenience function to write all tables of a decode result.

    Args:
        result: The DecodeResult from decode_file
        output_dir: Directory for output files

    Returns:
        Dict mapping table names to written file paths

    Example:
        result = decode_file("/data/activity.fit")
        paths = write_result_to_parquet(result, "/data/tables")
        print(f"Wrote records to: {paths['record']}")
    """
    return ParquetWriter(output_dir).write(result)
