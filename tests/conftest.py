"""
Shared fixtures: small FIT files built byte by byte.
"""

import struct

import pytest

from fittables.models import Record, RecordField
from fitdecode.utils import compute_crc

# Base type bytes from the FIT profile
UINT8 = 0x02
STRING = 0x07
UINT16 = 0x84
SINT32 = 0x85

FILE_ID_MESG = 0
RECORD_MESG = 20


def definition(local: int, global_num: int, fields: list[tuple[int, int, int]]) -> bytes:
    """Definition message: (def_num, size, base_type) per field."""
    out = bytes([0x40 | local, 0, 0]) + struct.pack("<HB", global_num, len(fields))
    for def_num, size, base_type in fields:
        out += bytes([def_num, size, base_type])
    return out


def data(local: int, payload: bytes) -> bytes:
    """Data message for a previously defined local type."""
    return bytes([local]) + payload


def build_fit(body: bytes, header_size: int = 14) -> bytes:
    """Wrap message bytes in a FIT header and trailing CRC."""
    header = struct.pack("<BBHI4s", header_size, 0x20, 2132, len(body), b".FIT")
    if header_size == 14:
        header += struct.pack("<H", compute_crc(header))
    content = header + body
    return content + struct.pack("<H", compute_crc(content))


def heart_rate_body() -> bytes:
    """Two 'record' messages: heart_rate only, then heart_rate and cadence."""
    return (
        definition(0, RECORD_MESG, [(3, 1, UINT8)])
        + data(0, bytes([60]))
        + definition(0, RECORD_MESG, [(3, 1, UINT8), (4, 1, UINT8)])
        + data(0, bytes([62, 80]))
    )


def speed_body() -> bytes:
    """One 'record' with speed, which fitdecode expands into enhanced_speed."""
    return definition(0, RECORD_MESG, [(6, 2, UINT16)]) + data(0, struct.pack("<H", 5000))


def array_body() -> bytes:
    """One 'record' with an undocumented three-byte array field."""
    return definition(0, RECORD_MESG, [(200, 3, UINT8)]) + data(0, bytes([1, 2, 3]))


def string_body() -> bytes:
    """One 'file_id' with a string product name."""
    return definition(0, FILE_ID_MESG, [(8, 5, STRING)]) + data(0, b"Edge\x00")


def invalid_body() -> bytes:
    """One 'record' whose heart rate holds the uint8 invalid value."""
    return definition(0, RECORD_MESG, [(3, 1, UINT8)]) + data(0, bytes([0xFF]))


@pytest.fixture
def write_fit(tmp_path):
    """Write message bytes as a complete FIT file and return its path."""

    def _write(body: bytes, name: str = "messages.fit"):
        path = tmp_path / name
        path.write_bytes(build_fit(body))
        return path

    return _write


@pytest.fixture
def fit_bytes() -> bytes:
    return build_fit(heart_rate_body())


@pytest.fixture
def fit_file(tmp_path, fit_bytes):
    path = tmp_path / "activity.fit"
    path.write_bytes(fit_bytes)
    return path


@pytest.fixture
def corrupt_fit_file(tmp_path, fit_bytes):
    """Valid structure with the trailing CRC flipped."""
    broken = bytearray(fit_bytes)
    broken[-1] ^= 0xFF
    path = tmp_path / "corrupt.fit"
    path.write_bytes(bytes(broken))
    return path


def make_record(type_id: int = RECORD_MESG, type_name: str = "record", **fields) -> Record:
    """
    Build a Record from keyword fields.

    Each value is a scalar, a tuple of scalars (uint16, no units), or a
    dict of RecordField keyword arguments.
    """
    record_fields = []
    for name, spec in fields.items():
        if isinstance(spec, dict):
            record_fields.append(RecordField(name=name, **spec))
        else:
            values = spec if isinstance(spec, tuple) else (spec,)
            record_fields.append(RecordField(name=name, base_type="uint16", values=values))
    return Record(type_id=type_id, type_name=type_name, fields=tuple(record_fields))
