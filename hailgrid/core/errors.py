"""Exceptions raised by the hail gridding pipeline."""


class HailGridError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(HailGridError):
    """Raised when grid parameters are invalid. Fatal, checked before aggregation."""


class InvariantViolation(HailGridError):
    """Raised when derived data breaks an invariant that valid input cannot break."""


class ObservationParseError(HailGridError):
    """Raised when an observation row cannot be parsed.

    Carries the offending row labels so the caller can report them.
    """

    def __init__(self, message: str, rows: list | None = None) -> None:
        super().__init__(message)
        self.rows = rows or []


class InputError(HailGridError):
    """Raised when an input file is missing, unreadable or has the wrong layout."""
