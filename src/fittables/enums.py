"""
Enums for FIT field encodings.

Base type names follow the FIT SDK profile.
"""

from enum import Enum


class BaseType(str, Enum):
    """Encoded value kinds a FIT field may carry."""

    ENUM = "enum"
    SINT8 = "sint8"
    UINT8 = "uint8"
    SINT16 = "sint16"
    UINT16 = "uint16"
    SINT32 = "sint32"
    UINT32 = "uint32"
    STRING = "string"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    UINT8Z = "uint8z"
    UINT16Z = "uint16z"
    UINT32Z = "uint32z"
    BYTE = "byte"
    SINT64 = "sint64"
    UINT64 = "uint64"
    UINT64Z = "uint64z"


# Kinds that widen directly to float64. Everything else is unrecognized.
NUMERIC_BASE_TYPES = frozenset(
    {
        BaseType.ENUM,
        BaseType.SINT8,
        BaseType.UINT8,
        BaseType.SINT16,
        BaseType.UINT16,
        BaseType.SINT32,
        BaseType.UINT32,
        BaseType.FLOAT32,
        BaseType.FLOAT64,
        BaseType.UINT8Z,
        BaseType.UINT16Z,
        BaseType.UINT32Z,
    }
)


class ColumnOrder(str, Enum):
    """Order of columns in a materialized table."""

    NAME = "name"
    DISCOVERY = "discovery"
