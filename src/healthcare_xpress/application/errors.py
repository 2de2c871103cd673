"""Exceptions raised by parsing, command execution and storage.

All inherit from HealthcareXpressError so callers can catch everything at once.
"""


class HealthcareXpressError(Exception):
    """Base exception for all Healthcare Xpress errors."""


class ParseError(HealthcareXpressError):
    """User input could not be turned into a command (bad syntax or invalid value)."""


class CommandError(HealthcareXpressError):
    """A well-formed command could not be executed against the current model."""


class IllegalValueError(HealthcareXpressError):
    """A stored record is missing a field or carries a value that fails validation."""


class DataLoadingError(HealthcareXpressError):
    """The data file exists but could not be read or parsed."""
