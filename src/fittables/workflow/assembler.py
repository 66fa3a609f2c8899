"""
Output assembly.

Materializes every table of a registry, in discovery order, and keys the
results by friendly message name.
"""

import logging

from fittables.enums import ColumnOrder
from fittables.tables import MaterializedTable, TableRegistry, materialize

from .result import DecodeResult

logger = logging.getLogger(__name__)


class OutputAssembler:
    """
    Builds the ordered collection of dense tables.

    Example:
        assembler = OutputAssembler()
        result = assembler.assemble(dispatcher.registry)

        for name, table in result.tables.items():
            print(name, table.row_count)
    """

    def __init__(self, column_order: ColumnOrder | str = ColumnOrder.NAME):
        self.column_order = ColumnOrder(column_order)

    def assemble(self, registry: TableRegistry) -> DecodeResult:
        """
        Materialize all tables of a registry.

        Two message types reporting the same friendly name are kept apart:
        the later one is keyed as ``<name>_<type_id>``.

        Args:
            registry: Registry holding the table builders

        Returns:
            DecodeResult with tables in discovery order and any warnings
        """
        result = DecodeResult()

        for builder in registry:
            table = materialize(builder, column_order=self.column_order)
            key = self._table_key(result.tables, table)
            result.tables[key] = table
            result.record_count += table.row_count

            for column, count in builder.unrecognized.items():
                result.warnings.append(
                    f"{key}.{column}: {count} value(s) of unrecognized field type "
                    f"stored as {builder.unrecognized_value}"
                )
            for column, units in builder.unit_conflicts.items():
                result.warnings.append(
                    f"{key}.{column}: kept unit '{builder.units[column]}', "
                    f"ignored {sorted(units)}"
                )

        logger.info(f"Assembled {len(result.tables)} table(s), {result.record_count} record(s)")
        return result

    @staticmethod
    def _table_key(tables: dict[str, MaterializedTable], table: MaterializedTable) -> str:
        if table.name not in tables:
            return table.name
        logger.warning(
            f"Message name '{table.name}' reused by type {table.type_id}; "
            f"keying as '{table.name}_{table.type_id}'"
        )
        return f"{table.name}_{table.type_id}"
