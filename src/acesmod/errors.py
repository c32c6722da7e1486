"""Exception and warning types raised by acesmod.

Parsing and fetching raise; sampling never does. ``TransformPipeline``
catches ``FormatError`` and ``ResourceError`` during a load and keeps them
in its ``Failed`` state for diagnostics.
"""

from __future__ import annotations


class AcesmodError(Exception):
    """Base class for all acesmod errors."""


class FormatError(AcesmodError, ValueError):
    """LUT text is malformed and cannot be parsed.

    :param message: Human-readable description
    :param line_number: 1-based line where parsing stopped, if known
    """

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ResourceError(AcesmodError, OSError):
    """A LUT resource could not be fetched.

    :param message: Human-readable description
    :param location: URL or path that failed
    :param status: HTTP status code, or None for non-HTTP failures
    """

    def __init__(self, message: str, location: str = "", status: int | None = None):
        super().__init__(message)
        self.location = location
        self.status = status


class IncompleteDataWarning(UserWarning):
    """A LUT declared more entries than its data block supplied.

    The table is still usable; missing entries are zero.
    """

    def __init__(self, message: str, expected: int = 0, actual: int = 0):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
