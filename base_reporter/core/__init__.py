"""
Core modules for the base reporter.
"""

from base_reporter.core.config import ReporterConfig, detect_colors
from base_reporter.core.errors import (
    BaseReporterError,
    ConfigurationError,
    UnknownColorError,
    EventReplayError,
)

__all__ = [
    "ReporterConfig",
    "detect_colors",
    "BaseReporterError",
    "ConfigurationError",
    "UnknownColorError",
    "EventReplayError",
]
