"""
Registry of table builders keyed by message type.
"""

import logging
from typing import Iterator

from .builder import UNRECOGNIZED_SENTINEL, FieldValue, TableBuilder

logger = logging.getLogger(__name__)


class TableRegistry:
    """
    Maps message type id to its TableBuilder.

    Builders are created on first sighting of a type and iterate in the
    order their types were discovered. A registry owns its builders.
    """

    def __init__(self, unrecognized_value: FieldValue = UNRECOGNIZED_SENTINEL):
        self.unrecognized_value = unrecognized_value
        self._tables: dict[int, TableBuilder] = {}

    def get_or_create(self, type_id: int, name: str) -> TableBuilder:
        """
        Return the builder for a type, creating it if this is a new type.

        Args:
            type_id: Global message number
            name: Friendly message name, used only when creating

        Returns:
            The TableBuilder for ``type_id``
        """
        table = self._tables.get(type_id)
        if table is None:
            logger.debug(f"Discovered message type {type_id} ({name})")
            table = TableBuilder(type_id, name, unrecognized_value=self.unrecognized_value)
            self._tables[type_id] = table
        return table

    def get(self, type_id: int) -> TableBuilder | None:
        return self._tables.get(type_id)

    def names(self) -> list[str]:
        """Friendly names in discovery order."""
        return [table.name for table in self._tables.values()]

    def __iter__(self) -> Iterator[TableBuilder]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._tables
