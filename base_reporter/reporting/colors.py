"""
Semantic color tags and terminal symbols.
"""

import sys
from dataclasses import dataclass

from base_reporter.core.errors import UnknownColorError

# Semantic tag -> ANSI SGR code
COLORS = {
    'pass': 90,
    'fail': 31,
    'bright pass': 92,
    'bright fail': 91,
    'bright yellow': 93,
    'pending': 36,
    'suite': 0,
    'error title': 0,
    'error message': 31,
    'error stack': 90,
    'checkmark': 32,
    'fast': 90,
    'medium': 33,
    'slow': 31,
    'green': 32,
    'light': 90,
    'diff gutter': 90,
    'diff added': 42,
    'diff removed': 41,
}


class ColorFormatter:
    """Wraps text in the escape sequence bound to a semantic tag."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def colorize(self, tag: str, text: str) -> str:
        """Color `text` with the code for `tag`, or return it unchanged when disabled."""
        try:
            code = COLORS[tag]
        except KeyError:
            raise UnknownColorError(tag) from None
        if not self.enabled:
            return text
        return f"\u001b[{code}m{text}\u001b[0m"

    def color_lines(self, tag: str, text: str) -> str:
        """Color each line of `text` separately so escapes never span a newline."""
        return "\n".join(self.colorize(tag, line) for line in text.split("\n"))


@dataclass(frozen=True)
class Symbols:
    ok: str
    err: str
    dot: str


def get_symbols(platform: str = sys.platform) -> Symbols:
    """Return status glyphs that render in the platform's default terminal font."""
    if platform == "win32":
        return Symbols(ok='√', err='×', dot='․')
    return Symbols(ok='✓', err='✖', dot='․')
