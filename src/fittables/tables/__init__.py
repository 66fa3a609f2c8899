"""
Table engine for decoded FIT messages.

Module structure:
- builder.py: TableBuilder accumulating sparse columns for one message type
- registry.py: TableRegistry mapping message type to its builder
- materialize.py: Dense materialization of a builder into aligned columns
"""

from .builder import UNRECOGNIZED_SENTINEL, TableBuilder, expand_field, to_field_value
from .materialize import MaterializedTable, materialize
from .registry import TableRegistry

__all__ = [
    "UNRECOGNIZED_SENTINEL",
    "TableBuilder",
    "MaterializedTable",
    "TableRegistry",
    "expand_field",
    "materialize",
    "to_field_value",
]
