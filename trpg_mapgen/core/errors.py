"""Failure conditions raised by the map generation engine."""


class GenerationError(Exception):
    """Base class for generation failures.

    The message is meant to be shown to the user as-is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GenerationInfeasible(GenerationError):
    """Raised when the requested constraints cannot all hold for the node layout."""


class InvalidParameters(GenerationError):
    """Raised when generation parameters are out of range before any work starts."""
