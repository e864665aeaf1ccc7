"""
Test reporting for runner event streams.

This module provides:
- Run statistics and test/error records
- Event payloads and a simple emitter
- Colorized unified and inline diffs
- The event-driven reporter and its epilogue
"""

from base_reporter.reporting.models import RunStats, TestRecord, SuiteRecord, ErrorRecord
from base_reporter.reporting.colors import ColorFormatter, COLORS, get_symbols
from base_reporter.reporting.diff import DiffRenderer, create_patch
from base_reporter.reporting.events import EventEmitter, EventSource
from base_reporter.reporting.reporter import Reporter, VerboseReporter
from base_reporter.reporting.stringify import stringify, same_kind

__all__ = [
    "RunStats",
    "TestRecord",
    "SuiteRecord",
    "ErrorRecord",
    "ColorFormatter",
    "COLORS",
    "get_symbols",
    "DiffRenderer",
    "create_patch",
    "EventEmitter",
    "EventSource",
    "Reporter",
    "VerboseReporter",
    "stringify",
    "same_kind",
]
