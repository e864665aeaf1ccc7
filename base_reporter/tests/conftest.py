from datetime import datetime

import pytest

from base_reporter.core.config import COLORS_ENV_VAR, CONFIG_ENV_VAR, ReporterConfig
from base_reporter.reporting.events import EventEmitter
from base_reporter.reporting.reporter import Reporter

NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv(COLORS_ENV_VAR, raising=False)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class Harness:
    """An emitter wired to a reporter whose flushed output is collected."""

    def __init__(self, colors=False, inline=False, reporter_cls=Reporter):
        self.now = NOW
        self.runner = EventEmitter()
        self.output = []
        self.reporter = reporter_cls(
            self.runner,
            config=ReporterConfig(use_colors=colors, inline_diffs=inline),
            sink=self.output.append,
            clock=lambda: NOW,
        )

    def emit(self, *event_list):
        for event in event_list:
            self.runner.emit(event)

    @property
    def buffer(self):
        return self.reporter.get_buffer()


@pytest.fixture
def harness():
    return Harness()


@pytest.fixture
def make_harness():
    return Harness
