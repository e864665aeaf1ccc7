"""
Base Reporter Package

Turns a test runner's lifecycle events into a colorized console report,
with unified or inline diffs for assertion failures.
"""

__version__ = "0.1.0"

from base_reporter.core.config import ReporterConfig
from base_reporter.reporting.reporter import Reporter, VerboseReporter

__all__ = [
    "ReporterConfig",
    "Reporter",
    "VerboseReporter",
]
