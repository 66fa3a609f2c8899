"""
Record dispatcher.

Single entry point for decoded records; routes each one to the table
builder of its message type.
"""

from typing import Iterable

from fittables.models.record import Record
from fittables.tables import TableRegistry
from fittables.tables.builder import UNRECOGNIZED_SENTINEL, FieldValue


class RecordDispatcher:
    """
    Receives records one at a time and appends them to their table.

    Example:
        dispatcher = RecordDispatcher()
        for record in parser.iter_records("activity.fit"):
            dispatcher.ingest(record)

        tables = OutputAssembler().assemble(dispatcher.registry)
    """

    def __init__(
        self,
        registry: TableRegistry | None = None,
        unrecognized_value: FieldValue = UNRECOGNIZED_SENTINEL,
    ):
        self.registry = registry if registry is not None else TableRegistry(unrecognized_value)

    def ingest(self, record: Record) -> None:
        """Route a record to its table, creating the table on first sight."""
        table = self.registry.get_or_create(record.type_id, record.type_name)
        table.append(record)

    def ingest_all(self, records: Iterable[Record]) -> int:
        """
        Ingest every record from an iterable.

        Returns:
            Number of records ingested by this call
        """
        count = 0
        for record in records:
            self.ingest(record)
            count += 1
        return count

    __call__ = ingest
