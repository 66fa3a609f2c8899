"""
Pydantic models for decoded FIT messages.

These are the records handed from the decoder to the table engine:
- Record: one decoded message tagged with its type
- RecordField: a named field carrying one or more scalar values
"""

from fittables.models.record import Record, RecordField

__all__ = [
    "Record",
    "RecordField",
]
