"""Errors raised by the EAC cache toolkit."""


class EacCacheError(Exception):
    """Base class for errors relating to inspecting or transforming cache images."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(EacCacheError, ValueError):
    """Raised when an argument is malformed, e.g. a pattern and mask of different lengths."""


class OutOfRangeError(EacCacheError, IndexError):
    """Raised when a declared size reaches past the end of the supplied buffer."""
