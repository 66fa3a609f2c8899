"""
fit-tables - Dense per-message tables from FIT telemetry files.

This package decodes FIT files and accumulates every message type into a
table whose columns are discovered on the fly, then materializes those
tables as dense, null-filled columns aligned by row order.
"""

__version__ = "0.1.0"

from fittables.enums import BaseType, ColumnOrder
from fittables.errors import (
    DecodeRuntimeError,
    FitTablesError,
    InputFileNotFoundError,
    IntegrityCheckFailed,
)
from fittables.models import Record, RecordField
from fittables.parsers import FitParser, check_integrity, read_header
from fittables.tables import TableBuilder, TableRegistry, materialize
from fittables.validation import TableValidator, ValidationResult
from fittables.workflow import (
    DecodeResult,
    MaterializedTable,
    OutputAssembler,
    RecordDispatcher,
    decode_file,
)
from fittables.writers import JSONWriter, ParquetWriter, write_result_to_parquet

__all__ = [
    # Models and enums
    "BaseType",
    "ColumnOrder",
    "Record",
    "RecordField",
    # Errors
    "FitTablesError",
    "InputFileNotFoundError",
    "IntegrityCheckFailed",
    "DecodeRuntimeError",
    # Parsing
    "FitParser",
    "check_integrity",
    "read_header",
    # Table engine
    "TableBuilder",
    "TableRegistry",
    "materialize",
    # Workflow
    "RecordDispatcher",
    "OutputAssembler",
    "DecodeResult",
    "MaterializedTable",
    "decode_file",
    # Validation
    "TableValidator",
    "ValidationResult",
    # Writers
    "ParquetWriter",
    "JSONWriter",
    "write_result_to_parquet",
]
