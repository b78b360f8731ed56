"""normkit exception hierarchy.

Pipeline steps signal fatal problems by raising; the ``normalize`` boundary
turns them into error results.

Usage:
    from normkit.exceptions import NormalizationError

    def positive(value, warn):
        if value <= 0:
            raise NormalizationError("Must be positive.")
        return value
"""


class NormkitError(Exception):
    """Base exception for all normkit errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NormalizationError(NormkitError):
    """A value failed to normalize.

    Raised by pipeline steps and by ``Normalized.value`` when it is read
    from an error result.
    """

    pass


class AbortedError(NormalizationError):
    """An async pipeline was cancelled through its abort signal."""

    def __init__(self, message: str = "Aborted."):
        super().__init__(message)
