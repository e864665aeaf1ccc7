"""
Event-driven reporter.

The reporter subscribes to a runner's lifecycle events, keeps running
statistics and a text buffer, and on the final ``end`` event writes an
epilogue summarizing passes, pending tests and failures (with diffs).

Each handler is a plain function taking the reporter state explicitly;
the reporter binds them when it subscribes.
"""

import re
from datetime import datetime
from functools import partial
from typing import Any, Callable, List, Optional

from base_reporter.core.config import ReporterConfig
from base_reporter.core.logging import get_logger
from base_reporter.reporting import events
from base_reporter.reporting.colors import ColorFormatter, get_symbols
from base_reporter.reporting.diff import INDENT, DiffRenderer, indent_lines
from base_reporter.reporting.models import ErrorRecord, RunStats, TestRecord
from base_reporter.reporting.stringify import same_kind, stringify as default_stringify

logger = get_logger(__name__)

_ASSERTION_PREFIX_RE = re.compile(r"^([^:]+): expected")

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24


def format_duration(ms: int) -> str:
    """Format milliseconds in the largest whole unit reached (``3s``, ``250ms``)."""
    for size, suffix in ((DAY, "d"), (HOUR, "h"), (MINUTE, "m"), (SECOND, "s")):
        if ms >= size:
            return f"{int(ms / size + 0.5)}{suffix}"
    return f"{ms}ms"


def indent(depth: int) -> str:
    """Two spaces per nesting level below the root."""
    return "  " * max(depth - 1, 0)


def classify_speed(test: TestRecord) -> str:
    """Classify a passed test as ``fast``, ``medium`` or ``slow`` against its threshold."""
    if test.slow is None:
        return "fast"
    duration = test.duration or 0
    if duration > test.slow:
        return "slow"
    if duration > test.slow / 2:
        return "medium"
    return "fast"


def on_start(reporter: "Reporter", event: events.Start) -> None:
    reporter.stats.start = reporter.clock()
    logger.debug("run started")
    reporter.log()


def on_suite(reporter: "Reporter", event: events.SuiteEnter) -> None:
    suite = event.suite
    if not suite.root:
        reporter.stats.suites += 1
    reporter.indents += 1
    logger.debug(f"suite {suite.title!r} entered at depth {reporter.indents}")
    reporter.log(reporter.color("suite", f"{indent(reporter.indents)}{suite.title or ''}"))


def on_suite_end(reporter: "Reporter", event: events.SuiteExit) -> None:
    reporter.indents -= 1
    logger.debug(f"suite {event.suite.title!r} exited to depth {reporter.indents}")
    if reporter.indents < 0:
        logger.warning(f"suite end without matching suite (depth {reporter.indents})")
    if reporter.indents == 1:
        reporter.log()


def on_test_end(reporter: "Reporter", event: events.TestEnd) -> None:
    reporter.stats.tests += 1
    logger.debug(f"test {event.test.title!r} ended")


def on_pass(reporter: "Reporter", event: events.Pass) -> None:
    test = event.test
    test.speed = classify_speed(test)
    logger.debug(f"test {test.title!r} passed ({test.speed})")
    reporter.stats.passes += 1
    reporter.log_pass(test)


def on_fail(reporter: "Reporter", event: events.Fail) -> None:
    test = event.test
    reporter.stats.failures += 1
    logger.debug(f"test {test.title!r} failed")
    if event.err is not None:
        test.err = event.err
    reporter.failures.append(test)
    reporter.log_fail(test)


def on_pending(reporter: "Reporter", event: events.Pending) -> None:
    reporter.stats.pending += 1
    logger.debug(f"test {event.test.title!r} pending")
    reporter.log(indent(reporter.indents) + reporter.color("pending", f"  - {event.test.title or ''}"))


def on_end(reporter: "Reporter", event: events.End) -> None:
    stats = reporter.stats
    stats.end = reporter.clock()
    if stats.start is not None:
        stats.duration = int((stats.end - stats.start).total_seconds() * 1000)
    logger.debug(f"run ended: {stats.tests} tests, {stats.failures} failures")
    reporter.epilogue()


HANDLERS = {
    events.START: on_start,
    events.SUITE: on_suite,
    events.SUITE_END: on_suite_end,
    events.TEST_END: on_test_end,
    events.PASS: on_pass,
    events.FAIL: on_fail,
    events.END: on_end,
    events.PENDING: on_pending,
}


class Reporter:
    """
    Base reporter.

    Other reporters build on this one by overriding the logging hooks
    (``log_pass``, ``log_fail``); the statistics, buffering and epilogue
    stay the same.
    """

    def __init__(
        self,
        runner: Optional[events.EventSource] = None,
        config: Optional[ReporterConfig] = None,
        sink: Optional[Callable[[str], Any]] = None,
        stringify: Callable[[Any], str] = default_stringify,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the reporter and subscribe to `runner`.

        Args:
            runner: Event source; the run statistics are also exposed on it as ``stats``
            config: Formatting configuration (colors, diff layout)
            sink: Receives the buffered text on flush and terminates the line (default: print)
            stringify: Renders non-string actual/expected values for diffing
            clock: Source of start/end timestamps
        """
        self.config = config or ReporterConfig()
        self.formatter = ColorFormatter(enabled=self.config.use_colors)
        self.differ = DiffRenderer(self.formatter, inline=self.config.inline_diffs)
        self.sink = sink or print
        self.stringify = stringify
        self.clock = clock

        self.indents = 0
        self.n = 0  # failures logged so far
        self.stats = RunStats()
        self.failures: List[TestRecord] = []
        self._buffer = ""
        self.runner = runner

        if runner is None:
            return

        try:
            runner.stats = self.stats
        except AttributeError:
            logger.debug("runner does not accept a stats attribute")
        for name, handler in HANDLERS.items():
            runner.on(name, partial(handler, self))

    def color(self, tag: str, text: str) -> str:
        return self.formatter.colorize(tag, text)

    # Buffer

    def get_buffer(self) -> str:
        return self._buffer

    def log(self, text: str = "") -> None:
        """Append a line to the buffer."""
        self._buffer += text + "\n"

    def error(self, text: str = "") -> None:
        """Append a failure-report line to the buffer."""
        self._buffer += text + "\n"

    def print(self) -> None:
        """Flush the buffer to the sink and clear it."""
        buffer, self._buffer = self._buffer, ""
        self.sink(buffer)

    # Hooks

    def log_pass(self, test: TestRecord) -> None:
        """Called for each passing test; silent by default."""
        pass

    def log_fail(self, test: TestRecord) -> None:
        self.n += 1
        self.log(indent(self.indents) + self.color("fail", f"  {self.n}) {test.title or ''}"))

    # Epilogue

    def get_test_title(self, test: TestRecord) -> str:
        return test.full_title or test.title or ""

    def log_passes(self) -> None:
        stats = self.stats
        line = self.color("bright pass", " ") + self.color("green", f" {stats.passes} passing")
        if stats.duration:
            line += self.color("light", f" ({format_duration(stats.duration)})")
        self.log(line)

    def log_pending(self) -> None:
        if self.stats.pending:
            self.log(self.color("pending", " ") + self.color("pending", f" {self.stats.pending} pending"))

    def log_failures(self) -> None:
        if not self.stats.failures:
            return
        self.error(self.color("fail", f"  {self.stats.failures} failing"))
        self.error()
        for i, test in enumerate(self.failures):
            self.log_failure(test, i)
        self.error()

    def add_error_to_message(self, err: ErrorRecord, msg: str, actual: str, expected: str, escape: bool) -> str:
        """Replace the message line with the assertion prefix (if any) followed by the diff."""
        match = _ASSERTION_PREFIX_RE.match(err.message or "")
        text = "\n" + INDENT + self.color("error message", match.group(1) if match else msg)
        return text + self.differ.render(actual, expected, escape)

    def log_failure(self, test: TestRecord, i: int) -> None:
        """Write the numbered block for the `i`-th (0-based) queued failure."""
        err = test.err or ErrorRecord()
        message = err.message or ""
        stack = err.stack or message

        found = stack.find(message)
        index = len(stack) if found == -1 else found + len(message)
        msg = stack[:index]
        escape = True

        if err.uncaught:
            msg = "Uncaught " + msg

        actual, expected = err.actual, err.expected
        if (err.show_diff and actual is not None and expected is not None
                and same_kind(actual, expected)):
            # Stringified output is already safe to show
            escape = False
            actual = self.stringify(actual)
            expected = self.stringify(expected)

        title = self.get_test_title(test)
        stack = indent_all_lines_after_first(stack, index)

        if isinstance(actual, str) and isinstance(expected, str):
            msg = self.add_error_to_message(err, msg, actual, expected, escape)
            text = (self.color("error title", f"  {i + 1}) {title}:\n{msg}")
                    + self.color("error stack", f"\n{stack}\n"))
        else:
            text = (self.color("error title", f"  {i + 1}) {title}:\n")
                    + self.color("error message", f"     {msg}")
                    + self.color("error stack", f"\n{stack}\n"))
        self.error(text)

    def epilogue(self) -> None:
        """Compose the closing summary and flush it."""
        self.log()

        self.log_passes()
        self.log_pending()
        self.log_failures()

        self.log()

        self.print()


def indent_all_lines_after_first(text: str, index: int) -> str:
    """Indent what follows position `index` (skipping the line break there) by two spaces."""
    return indent_lines(text[index + 1 if index else index:], "  ")


class VerboseReporter(Reporter):
    """Reporter that also lists passing tests with a checkmark and their speed."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.symbols = get_symbols()

    def log_pass(self, test: TestRecord) -> None:
        line = (indent(self.indents) + self.color("checkmark", f"  {self.symbols.ok}")
                + self.color("pass", f" {test.title or ''}"))
        if test.speed != "fast":
            line += self.color(test.speed, f" ({test.duration}ms)")
        self.log(line)
