"""
Runner events and the subscription interface the reporter listens on.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Optional, Protocol, Union

from base_reporter.reporting.models import ErrorRecord, SuiteRecord, TestRecord

START = "start"
SUITE = "suite"
SUITE_END = "suite end"
TEST_END = "test end"
PASS = "pass"
FAIL = "fail"
PENDING = "pending"
END = "end"


@dataclass
class Start:
    name: ClassVar[str] = START


@dataclass
class SuiteEnter:
    name: ClassVar[str] = SUITE
    suite: SuiteRecord = field(default_factory=SuiteRecord)


@dataclass
class SuiteExit:
    name: ClassVar[str] = SUITE_END
    suite: SuiteRecord = field(default_factory=SuiteRecord)


@dataclass
class TestEnd:
    __test__ = False

    name: ClassVar[str] = TEST_END
    test: TestRecord = field(default_factory=TestRecord)


@dataclass
class Pass:
    name: ClassVar[str] = PASS
    test: TestRecord = field(default_factory=TestRecord)


@dataclass
class Fail:
    name: ClassVar[str] = FAIL
    test: TestRecord = field(default_factory=TestRecord)
    err: Optional[ErrorRecord] = None


@dataclass
class Pending:
    name: ClassVar[str] = PENDING
    test: TestRecord = field(default_factory=TestRecord)


@dataclass
class End:
    name: ClassVar[str] = END


Event = Union[Start, SuiteEnter, SuiteExit, TestEnd, Pass, Fail, Pending, End]
Handler = Callable[[Event], None]

EVENT_TYPES = {
    cls.name: cls
    for cls in (Start, SuiteEnter, SuiteExit, TestEnd, Pass, Fail, Pending, End)
}


class EventSource(Protocol):
    """Anything the reporter can subscribe to by event name."""

    def on(self, name: str, handler: Handler) -> None:
        ...


class EventEmitter:
    """Minimal in-process event source; delivers events to handlers in subscription order."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def on(self, name: str, handler: Handler) -> None:
        if name not in EVENT_TYPES:
            raise ValueError(f"Unknown event name: {name!r}")
        self._handlers[name].append(handler)

    def emit(self, event: Event) -> None:
        for handler in list(self._handlers[event.name]):
            handler(event)
