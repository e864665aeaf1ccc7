"""
Data models consumed and produced by the reporter.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class RunStats:
    """Running counts for one test run."""
    suites: int = 0
    tests: int = 0
    passes: int = 0
    pending: int = 0
    failures: int = 0
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    duration: Optional[int] = None  # milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suites": self.suites,
            "tests": self.tests,
            "passes": self.passes,
            "pending": self.pending,
            "failures": self.failures,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "duration": self.duration,
        }


@dataclass
class ErrorRecord:
    """Error attached to a failing test."""
    message: str = ""
    stack: str = ""
    actual: Any = None
    expected: Any = None
    show_diff: bool = False
    uncaught: bool = False


@dataclass
class TestRecord:
    """A single test as seen by the reporter."""
    __test__ = False  # not a pytest test class

    title: str = ""
    full_title: Optional[str] = None
    duration: int = 0  # milliseconds
    slow: Optional[int] = None  # slow threshold in milliseconds
    err: Optional[ErrorRecord] = None
    speed: Optional[str] = None  # set by the reporter on pass


@dataclass
class SuiteRecord:
    """A suite as seen by the reporter."""
    title: str = ""
    root: bool = False
