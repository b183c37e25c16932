"""Exception types raised by the segmenter."""


class MMSegError(Exception):
    """Base exception for all segmenter errors."""


class DecodingError(MMSegError, ValueError):
    """Raised when input cannot be decoded into a valid character sequence."""


class DictionaryFormatError(MMSegError, ValueError):
    """Raised when a dictionary file contains a malformed entry."""

    def __init__(self, path, line_number: int, line: str, reason: str):
        self.path = path
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{path}:{line_number}: {reason}: {line!r}")


class InternalConsistencyError(MMSegError, RuntimeError):
    """Raised when an invariant of the scan is violated.

    This cannot happen with a well-formed dictionary, since every character
    is a valid single-character word.
    """
