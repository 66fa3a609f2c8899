"""
Workflow module for turning decoded records into dense tables.

Module structure:
- result.py: MaterializedTable and DecodeResult dataclasses
- dispatcher.py: RecordDispatcher routing records to table builders
- assembler.py: OutputAssembler materializing all tables
"""

import logging
from pathlib import Path

from fittables.enums import ColumnOrder
from fittables.tables import MaterializedTable
from fittables.tables.builder import UNRECOGNIZED_SENTINEL, FieldValue

from .assembler import OutputAssembler
from .dispatcher import RecordDispatcher
from .result import DecodeResult

logger = logging.getLogger(__name__)

__all__ = [
    # Main classes
    "DecodeResult",
    "MaterializedTable",
    "OutputAssembler",
    "RecordDispatcher",
    # Convenience function
    "decode_file",
]


def decode_file(
    file_path: str | Path,
    column_order: ColumnOrder | str = ColumnOrder.NAME,
    unrecognized_value: FieldValue = UNRECOGNIZED_SENTINEL,
) -> DecodeResult:
    """
    Decode a FIT file into one dense table per message type.

    The file is checked before decoding starts. If decoding fails part way
    through, the rows gathered so far are discarded and the error raised.

    Args:
        file_path: Path to the FIT file
        column_order: ``name`` (alphabetical) or ``discovery`` column order
        unrecognized_value: Value stored for fields of unrecognized type;
            pass None to store a null instead of the -1 sentinel

    Returns:
        DecodeResult with tables keyed by message name, in discovery order

    Raises:
        InputFileNotFoundError: If the file cannot be opened
        IntegrityCheckFailed: If the integrity check fails
        DecodeRuntimeError: If decoding aborts mid-stream

    Example:
        result = decode_file("/data/activity.fit")
        records = result["record"]
        print(records.row_count, records.units_by_column["heart_rate"])
    """
    from fittables.parsers import FitParser

    parser = FitParser()
    records = parser.iter_records(file_path)

    logger.info(f"Decoding {file_path}")
    dispatcher = RecordDispatcher(unrecognized_value=unrecognized_value)
    dispatcher.ingest_all(records)

    result = OutputAssembler(column_order=column_order).assemble(dispatcher.registry)
    result.source_file = str(file_path)
    return result
