import pytest

from base_reporter.core.errors import UnknownColorError
from base_reporter.reporting.colors import COLORS, ColorFormatter, get_symbols


def test_disabled_formatter_returns_text_unchanged():
    assert ColorFormatter(enabled=False).colorize("fail", "boom") == "boom"


@pytest.mark.parametrize("tag, code", [
    ("pass", 90),
    ("fail", 31),
    ("bright pass", 92),
    ("pending", 36),
    ("suite", 0),
    ("diff added", 42),
    ("diff removed", 41),
])
def test_enabled_formatter_wraps_text(tag, code):
    assert ColorFormatter(enabled=True).colorize(tag, "x") == f"\u001b[{code}mx\u001b[0m"


def test_every_tag_has_a_code():
    formatter = ColorFormatter(enabled=True)
    for tag in COLORS:
        assert formatter.colorize(tag, "").startswith("\u001b[")


@pytest.mark.parametrize("enabled", [True, False])
def test_unknown_tag_fails_fast(enabled):
    with pytest.raises(UnknownColorError) as excinfo:
        ColorFormatter(enabled=enabled).colorize("magenta", "x")
    assert isinstance(excinfo.value, KeyError)
    assert "magenta" in str(excinfo.value)


def test_color_lines_wraps_each_line():
    formatter = ColorFormatter(enabled=True)
    assert formatter.color_lines("diff added", "a\nb") == "\u001b[42ma\u001b[0m\n\u001b[42mb\u001b[0m"


def test_symbols_per_platform():
    assert get_symbols("linux").ok == "✓"
    assert get_symbols("linux").err == "✖"
    assert get_symbols("win32").ok == "√"
    assert get_symbols("win32").err == "×"
