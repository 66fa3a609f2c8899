"""
Structural integrity checks for FIT files.

Verifies each file segment (FIT files may be chained) before any message
is decoded: header size and signature, declared data size, header CRC
when present and the trailing file CRC.
"""

import struct
from dataclasses import dataclass
from pathlib import Path

from fitdecode.utils import compute_crc

from fittables.errors import InputFileNotFoundError, IntegrityCheckFailed

FIT_SIGNATURE = b".FIT"
CRC_SIZE = 2
HEADER_SIZES = (12, 14)

@dataclass
class FitHeader:
    """
    Parsed FIT file header.

    Attributes:
        header_size: 12 or 14 bytes
        protocol_version: Raw protocol byte (major in the high nibble)
        profile_version: Profile version times 100 (e.g. 2132 for 21.32)
        data_size: Length of the message data following the header
        header_crc: CRC stored in a 14 byte header (0 when absent)
    """

    header_size: int
    protocol_version: int
    profile_version: int
    data_size: int
    header_crc: int = 0

    @property
    def protocol(self) -> str:
        return f"{self.protocol_version >> 4}.{self.protocol_version & 0x0F}"

    @property
    def profile(self) -> str:
        return f"{self.profile_version // 100}.{self.profile_version % 100:02d}"

    @property
    def segment_size(self) -> int:
        """Total bytes of this file segment, trailing CRC included."""
        return self.header_size + self.data_size + CRC_SIZE


def parse_header(data: bytes, offset: int = 0) -> FitHeader:
    """
    Parse the header of the segment starting at ``offset``.

    Raises:
        IntegrityCheckFailed: If the header is truncated or malformed
    """
    if len(data) - offset < HEADER_SIZES[0]:
        raise IntegrityCheckFailed(f"Truncated header at byte {offset}")

    header_size = data[offset]
    if header_size not in HEADER_SIZES:
        raise IntegrityCheckFailed(f"Invalid header size {header_size} at byte {offset}")
    if len(data) - offset < header_size:
        raise IntegrityCheckFailed(f"Truncated header at byte {offset}")

    protocol_version, profile_version, data_size, signature = struct.unpack_from(
        "<BHI4s", data, offset + 1
    )
    if signature != FIT_SIGNATURE:
        raise IntegrityCheckFailed(f"Missing .FIT signature at byte {offset}")

    header_crc = 0
    if header_size == 14:
        (header_crc,) = struct.unpack_from("<H", data, offset + 12)
        if header_crc != 0 and header_crc != compute_crc(data, start=offset, end=offset + 12):
            raise IntegrityCheckFailed(f"Header CRC mismatch at byte {offset}")

    return FitHeader(
        header_size=header_size,
        protocol_version=protocol_version,
        profile_version=profile_version,
        data_size=data_size,
        header_crc=header_crc,
    )


def _read_bytes(file_path: str | Path) -> bytes:
    path = Path(file_path)
    try:
        return path.read_bytes()
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise InputFileNotFoundError(f"File not found: {path}") from e


def read_header(file_path: str | Path) -> FitHeader:
    """
    Read the header of the first file segment.

    Raises:
        InputFileNotFoundError: If the file cannot be opened
        IntegrityCheckFailed: If the header is malformed
    """
    return parse_header(_read_bytes(file_path))


def check_bytes(data: bytes) -> list[FitHeader]:
    """
    Verify every chained segment of an in-memory FIT file.

    Returns:
        Headers of all segments, in file order

    Raises:
        IntegrityCheckFailed: On the first failing check
    """
    if not data:
        raise IntegrityCheckFailed("File is empty")

    headers = []
    offset = 0
    while offset < len(data):
        header = parse_header(data, offset)
        end = offset + header.segment_size
        if end > len(data):
            raise IntegrityCheckFailed(
                f"Declared data size {header.data_size} exceeds file length"
            )

        (stored_crc,) = struct.unpack_from("<H", data, end - CRC_SIZE)
        if compute_crc(data, start=offset, end=end - CRC_SIZE) != stored_crc:
            raise IntegrityCheckFailed(f"File CRC mismatch in segment at byte {offset}")

        headers.append(header)
        offset = end

    return headers


def check_integrity(file_path: str | Path) -> list[FitHeader]:
    """
    Verify the structural integrity of a FIT file on disk.

    Args:
        file_path: Path to the FIT file

    Returns:
        Headers of all file segments

    Raises:
        InputFileNotFoundError: If the file cannot be opened
        IntegrityCheckFailed: If any check fails
    """
    return check_bytes(_read_bytes(file_path))
