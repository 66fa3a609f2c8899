"""
Dense materialization of table builders.

Turns sparse per-row columns into equal-length columns aligned with the
table's row sequence, filling gaps with None.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from fittables.enums import ColumnOrder

from .builder import TableBuilder


@dataclass
class MaterializedTable:
    """
    Dense table for one message type.

    Attributes:
        name: Friendly message name (e.g. "record")
        type_id: Global message number
        row_count: Number of rows; every column has this length
        columns: Column name to dense values (None where a row had no value)
        units: Unit strings, one per column, in column order
    """

    name: str
    type_id: int
    row_count: int
    columns: dict[str, list[Optional[float]]] = field(default_factory=dict)
    units: list[str] = field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        return list(self.columns)

    @property
    def units_by_column(self) -> dict[str, str]:
        """Column name to unit string."""
        return dict(zip(self.columns, self.units))

    def unit_for(self, column: str) -> str:
        """Unit string for a column."""
        return self.units_by_column[column]

    def to_numpy(self) -> dict[str, NDArray[np.float64]]:
        """Columns as float64 arrays with NaN in place of nulls."""
        return {
            name: np.array([np.nan if v is None else v for v in values], dtype=np.float64)
            for name, values in self.columns.items()
        }

    def to_rows(self) -> list[dict[str, Optional[float]]]:
        """Row-oriented view, one dict per row."""
        names = self.column_names
        return [
            {name: self.columns[name][i] for name in names} for i in range(self.row_count)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type_id": self.type_id,
            "row_count": self.row_count,
            "units": self.units_by_column,
            "columns": self.columns,
        }


def materialize(
    table: TableBuilder,
    column_order: ColumnOrder | str = ColumnOrder.NAME,
) -> MaterializedTable:
    """
    Build dense columns for one table.

    Every output column has exactly ``table.row_count`` entries. Units are
    returned in the same order as the columns. The builder is not
    modified, so repeated calls give identical output.

    Args:
        table: The builder to materialize
        column_order: ``name`` sorts columns alphabetically,
            ``discovery`` keeps the order columns were first seen

    Returns:
        MaterializedTable with dense columns and units
    """
    order = ColumnOrder(column_order)
    names = table.column_names
    if order is ColumnOrder.NAME:
        names = sorted(names)

    columns = {}
    for name in names:
        sparse = table.columns[name]
        columns[name] = [sparse.get(row) for row in table.row_indices]

    return MaterializedTable(
        name=table.name,
        type_id=table.type_id,
        row_count=table.row_count,
        columns=columns,
        units=[table.units[name] for name in names],
    )
