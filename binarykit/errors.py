"""
Exceptions raised by binarykit readers.

Both concrete errors also derive from a built-in exception type, so
callers that already guard parsing code with ``except IndexError`` or
``except ValueError`` keep working.
"""


class BinaryError(Exception):
    """Base class for all binarykit errors."""


class OutOfBoundsError(BinaryError, IndexError):
    """A bit or byte index (or range) falls outside the buffer."""

    def __init__(self, message: str, index: int, limit: int) -> None:
        """
        Initialize the error.

        Args:
            message: Human readable description
            index: Offending index (bit or byte, depending on the operation)
            limit: Exclusive upper bound that was checked against
        """
        super().__init__(message)
        self.index = index
        self.limit = limit


class NotStringError(BinaryError, ValueError):
    """Bytes could not be decoded as text in the requested encoding."""

    def __init__(self, message: str, encoding: str) -> None:
        super().__init__(message)
        self.encoding = encoding
