"""
Exception types raised while decoding a FIT file.

All fatal conditions abort the whole decode; nothing partial is returned
alongside one of these errors.
"""


class FitTablesError(Exception):
    """Base class for all fit-tables errors."""


class InputFileNotFoundError(FitTablesError, FileNotFoundError):
    """The input path cannot be opened."""


class IntegrityCheckFailed(FitTablesError):
    """The file failed the structural integrity check (header or CRC)."""


class DecodeRuntimeError(FitTablesError):
    """The decoder aborted mid-stream (corrupt or truncated data)."""
