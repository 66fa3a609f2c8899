"""
Decode result dataclass.

Holds the dense tables produced by the decode workflow.
"""

from dataclasses import dataclass, field
from typing import Optional

from fittables.tables import MaterializedTable


@dataclass
class DecodeResult:
    """
    Result of decoding a FIT file.

    Attributes:
        tables: Friendly name to dense table, in message discovery order
        source_file: Path of the decoded file
        record_count: Number of records ingested across all tables
        warnings: Non-fatal issues (unrecognized field types, unit conflicts)
    """

    tables: dict[str, MaterializedTable] = field(default_factory=dict)
    source_file: Optional[str] = None
    record_count: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def table_names(self) -> list[str]:
        return list(self.tables)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def __getitem__(self, name: str) -> MaterializedTable:
        return self.tables[name]

    def __contains__(self, name: object) -> bool:
        return name in self.tables

    def __len__(self) -> int:
        return len(self.tables)

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = ["Decode Summary:"]
        if self.source_file:
            lines.append(f"  File: {self.source_file}")
        lines.append(f"  Records: {self.record_count}")
        lines.append(f"  Tables: {len(self.tables)}")

        for name, table in self.tables.items():
            lines.append(
                f"    {name} (#{table.type_id}): {table.row_count} rows, "
                f"{len(table.columns)} columns"
            )

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for w in self.warnings[:5]:  # Limit to first 5
                lines.append(f"  - {w}")

        return "\n".join(lines)
