"""Custom exceptions for the canvas layout engine."""

class LayoutError(Exception):
    """Base class for errors raised by the layout engine."""
    pass

class NotAuthenticatedError(LayoutError):
    """An operation needing a user identity was called without one."""
    pass

class InvalidBoardError(LayoutError, ValueError):
    """The destination board identifier is missing or malformed."""
    pass
