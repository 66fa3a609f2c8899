"""
FIT file parser.

Verifies file integrity, then streams decoded data messages from
fitdecode and converts them into Record models for the table engine.
"""

import logging
from pathlib import Path
from typing import Any, Iterator

import fitdecode

from fittables.errors import DecodeRuntimeError, InputFileNotFoundError
from fittables.models.record import Record, RecordField

from .integrity import check_integrity

logger = logging.getLogger(__name__)


def _base_type_name(field_data: Any) -> str:
    """Encoded kind of a decoded field, as a FIT base type name."""
    base_type = None
    if field_data.field_def is not None:
        base_type = field_data.field_def.base_type
    elif field_data.field is not None:
        # Expanded components carry no definition of their own; profile
        # types wrap a base type, plain fields are typed by one directly
        field_type = field_data.field.type
        base_type = getattr(field_type, "base_type", field_type)
    return getattr(base_type, "name", None) or "unknown"


def _encode_component(value: Any, field: Any, base_type: str) -> Any:
    """
    Undo the scale and offset fitdecode applies to expanded components.

    The value is mapped back through the target field's own scale and
    offset, matching the encoded value of a plain field.
    """
    if not isinstance(value, (int, float)):
        return value
    encoded = (value + (field.offset or 0)) * (field.scale or 1)
    if base_type.startswith("float"):
        return encoded
    return round(encoded)


def field_to_record_field(field_data: Any) -> RecordField:
    """Convert a fitdecode FieldData into a RecordField."""
    base_type = _base_type_name(field_data)
    raw = field_data.raw_value
    if field_data.field_def is None and field_data.field is not None:
        if isinstance(raw, (tuple, list)):
            raw = tuple(_encode_component(v, field_data.field, base_type) for v in raw)
        else:
            raw = _encode_component(raw, field_data.field, base_type)

    if isinstance(raw, (tuple, list)):
        values = tuple(raw)
    else:
        values = (raw,)

    return RecordField(
        name=field_data.name,
        units=field_data.units or "",
        base_type=base_type,
        values=values,
    )


def frame_to_record(frame: Any) -> Record:
    """Convert a fitdecode data message into a Record."""
    return Record(
        type_id=frame.global_mesg_num,
        type_name=frame.name,
        fields=tuple(field_to_record_field(f) for f in frame.fields),
    )


class FitParser:
    """
    Parser for binary FIT files.

    The file is opened and its integrity verified before anything is
    yielded, so a missing or corrupt file fails before the first record.

    Usage:
        parser = FitParser()
        for record in parser.iter_records("/data/activity.fit"):
            print(record.type_name, len(record.fields))
    """

    def __init__(self, verify_integrity: bool = True):
        """
        Initialize the parser.

        Args:
            verify_integrity: Run the header/CRC check before decoding
        """
        self.verify_integrity = verify_integrity

    def iter_records(self, file_path: str | Path) -> Iterator[Record]:
        """
        Stream the data messages of a FIT file as Records.

        Args:
            file_path: Path to the FIT file

        Returns:
            Iterator over decoded records, in file order

        Raises:
            InputFileNotFoundError: If the file cannot be opened
            IntegrityCheckFailed: If the integrity check fails
            DecodeRuntimeError: (while iterating) if decoding aborts
        """
        path = Path(file_path)
        if not path.is_file():
            raise InputFileNotFoundError(f"File not found: {path}")

        if self.verify_integrity:
            headers = check_integrity(path)
            logger.debug(f"Integrity check passed for {path} ({len(headers)} segment(s))")

        return self._decode(path)

    def parse(self, file_path: str | Path) -> list[Record]:
        """Decode every data message of a FIT file into a list."""
        return list(self.iter_records(file_path))

    def _decode(self, path: Path) -> Iterator[Record]:
        try:
            with fitdecode.FitReader(str(path)) as fit:
                for frame in fit:
                    if frame.frame_type == fitdecode.FIT_FRAME_DATA:
                        yield frame_to_record(frame)
        except fitdecode.FitError as e:
            raise DecodeRuntimeError(f"Error decoding {path}: {e}") from e
        except OSError as e:
            raise DecodeRuntimeError(f"Error reading {path}: {e}") from e
