"""
File parsers for data ingestion.

Provides:
- Integrity checks for FIT files (header, signature, CRC)
- FitParser streaming decoded messages as Records
"""

from fittables.parsers.fit_parser import (
    FitParser,
    field_to_record_field,
    frame_to_record,
)
from fittables.parsers.integrity import (
    FitHeader,
    check_bytes,
    check_integrity,
    parse_header,
    read_header,
)

__all__ = [
    # FIT decoding
    "FitParser",
    "frame_to_record",
    "field_to_record_field",
    # Integrity
    "FitHeader",
    "parse_header",
    "read_header",
    "check_bytes",
    "check_integrity",
]
