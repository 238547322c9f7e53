class LaterError(Exception):
    """Base exception for all later errors."""
    pass

class RecoverableError(LaterError):
    """An error that can be recovered from without data loss."""
    pass

class FatalError(LaterError):
    """An error that requires application termination or major intervention."""
    pass

class CorruptionError(FatalError):
    """Corrupted Data Error - from syntax errors in data formats, to just unknown data"""
    pass

class ConfigError(FatalError):
    """The configuration file could not be read or is invalid."""
    pass

class FileOperationError(RecoverableError):
    """File operation failed but can be retried."""
    pass

class ParseError(RecoverableError, ValueError):
    """Malformed date, time or index text."""
    pass

class PathIndexError(RecoverableError, IndexError):
    """An index path does not address a valid position in the tree."""

    TOO_BIG = "too big"
    NON_LIST = "sub-indexing a non-list"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid index! ({reason})")

class MoveFailedError(RecoverableError):
    """The moved item could not be placed; it was restored at its origin."""
    pass

class DuplicateNameError(RecoverableError):
    """A list with the requested name already exists."""
    pass

class NotFoundError(RecoverableError):
    """No list with the requested name exists."""
    pass

class ReservedNameError(RecoverableError):
    """The default list cannot be removed or renamed."""
    pass

class CancelledError(RecoverableError):
    """The user declined a destructive confirmation."""
    pass
