"""
Custom exceptions for the base reporter.
"""


class BaseReporterError(Exception):
    """Base exception for all base reporter errors."""
    pass


class ConfigurationError(BaseReporterError):
    """Raised when configuration is invalid."""
    pass


class UnknownColorError(BaseReporterError, KeyError):
    """Raised when a semantic tag has no entry in the color table."""

    def __init__(self, tag: str):
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f"Unknown color tag: {self.tag!r}"


class EventReplayError(BaseReporterError):
    """Raised when an event script cannot be turned into runner events."""
    pass
