"""
JSON writer for decoded tables.

Produces one JSON file per message type with the same columns and units
as the Parquet output.
"""

from __future__ import annotations

import json
from pathlib import Path

from fittables.tables import MaterializedTable
from fittables.workflow import DecodeResult

from .serializers import table_to_record


class JSONWriter:
    """
    Writes materialized tables to JSON files.

    Each file holds ``name``, ``type_id``, ``row_count``, ``units`` and
    ``columns``; missing values are written as null.
    """

    def __init__(self, output_dir: str | Path, indent: int | None = 2):
        """
        Initialize the JSON writer.

        Args:
            output_dir: Base directory for output files
            indent: JSON indentation, None for compact output
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.indent = indent

    def write_table(self, table: MaterializedTable, name: str | None = None) -> Path:
        """Write one table to ``<name>.json``."""
        output_path = self.output_dir / f"{name or table.name}.json"
        with open(output_path, "w") as f:
            json.dump(table_to_record(table), f, indent=self.indent)
        return output_path

    def write(self, result: DecodeResult) -> dict[str, Path]:
        """Write every table of a decode result."""
        return {name: self.write_table(table, name=name) for name, table in result.tables.items()}


def write_result_to_json(result: DecodeResult, output_dir: str | Path) -> dict[str, Path]:
    """
    Convenience function to write all tables of a decode result as JSON.

    Returns:
        Dict mapping table names to written file paths
    """
    return JSONWriter(output_dir).write(result)
