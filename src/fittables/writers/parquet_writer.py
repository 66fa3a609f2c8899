"""
Parquet file writer for decoded tables.

Writes one Parquet file per message type.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pyarrow.parquet as pq

from fittables.tables import MaterializedTable
from fittables.workflow import DecodeResult

from .serializers import to_arrow_table

logger = logging.getLogger(__name__)


class ParquetWriter:
    """
    Writes materialized tables to Parquet files.

    Example:
        writer = ParquetWriter("/data/tables")
        paths = writer.write(decode_result)
        print(paths["record"])  # /data/tables/record.parquet
    """

    def __init__(self, output_dir: str | Path, skip_empty: bool = False):
        """
        Initialize the writer with an output directory.

        Args:
            output_dir: Directory for output files, created if missing
            skip_empty: Do not write tables without columns
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.skip_empty = skip_empty

    def write_table(self, table: MaterializedTable, name: str | None = None) -> Path:
        """
        Write one table to ``<name>.parquet``.

        Args:
            table: The dense table
            name: File stem, defaults to the table's message name

        Returns:
            Path to the written file
        """
        output_path = self.output_dir / f"{name or table.name}.parquet"
        pq.write_table(to_arrow_table(table), output_path)
        logger.debug(f"Wrote {table.row_count} rows to {output_path}")
        return output_path

    def write(self, result: DecodeResult) -> dict[str, Path]:
        """
        Write every table of a decode result.

        Returns:
            Dict mapping table names to written file paths
        """
        paths: dict[str, Path] = {}
        for name, table in result.tables.items():
            if self.skip_empty and not table.columns:
                continue
            paths[name] = self.write_table(table, name=name)
        return paths
