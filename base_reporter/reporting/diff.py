"""
Colorized diffs between an assertion's actual and expected values.

Two layouts are supported:
- unified: a line patch with ``+``/``-`` markers (expected is the new side)
- inline: a word-level diff rendered as flowing text, with line numbers
  once it grows past a few lines
"""

import difflib
import re
from typing import Iterator, List, Optional

from base_reporter.reporting.colors import ColorFormatter

INDENT = "      "

# Index, separator, ---, +++
PATCH_HEADER_LINES = 4

# Inline diffs longer than this get a line-number gutter
MAX_UNNUMBERED_LINES = 4

HUNK_RE = re.compile(r"^@@.*@@")
NO_NEWLINE_MARKER = "\\ No newline at end of file"

_WORD_SPLIT_RE = re.compile(r"(\s+|\b)")
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")


def escape_invisibles(text: str) -> str:
    """Replace tab, CR and LF with visible placeholders (LF keeps its line break)."""
    return text.replace("\t", "<tab>").replace("\r", "<CR>").replace("\n", "<LF>\n")


def indent_lines(text: str, prefix: str) -> str:
    """Prefix every line of `text`, including an empty trailing one."""
    return "\n".join(prefix + line for line in text.split("\n"))


def split_lines(text: str) -> List[str]:
    """Split into lines, each keeping its terminating newline."""
    return _LINE_RE.findall(text)


def word_tokens(text: str) -> List[str]:
    """Split into words, whitespace runs and punctuation, dropping empties."""
    return [token for token in _WORD_SPLIT_RE.split(text) if token]


def _hunk_range(start: int, stop: int) -> str:
    count = stop - start
    if count == 0:
        return f"{start},0"
    return f"{start + 1},{count}"


def _patch_lines(prefix: str, lines: List[str]) -> Iterator[str]:
    for line in lines:
        if line.endswith("\n"):
            yield prefix + line[:-1]
        else:
            yield prefix + line
            yield NO_NEWLINE_MARKER


def create_patch(file_name: str, old: str, new: str, context: int = 4) -> str:
    """
    Build a unified patch turning `old` into `new`.

    The patch starts with PATCH_HEADER_LINES header lines, followed by one
    ``@@`` hunk per changed region. Within a replaced region the added lines
    precede the removed ones.

    Args:
        file_name: Name shown in the header lines
        old: Original text
        new: Changed text
        context: Unchanged lines kept around each change

    Returns:
        Patch text terminated by a newline
    """
    old_lines = split_lines(old)
    new_lines = split_lines(new)
    out = [
        f"Index: {file_name}",
        "=" * 67,
        f"--- {file_name}",
        f"+++ {file_name}",
    ]

    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for group in matcher.get_grouped_opcodes(context):
        i1, i2 = group[0][1], group[-1][2]
        j1, j2 = group[0][3], group[-1][4]
        out.append(f"@@ -{_hunk_range(i1, i2)} +{_hunk_range(j1, j2)} @@")
        for tag, a1, a2, b1, b2 in group:
            if tag == "equal":
                out.extend(_patch_lines(" ", old_lines[a1:a2]))
                continue
            out.extend(_patch_lines("+", new_lines[b1:b2]))
            out.extend(_patch_lines("-", old_lines[a1:a2]))

    return "\n".join(out) + "\n"


class DiffRenderer:
    """Renders actual/expected pairs as colorized diff blocks."""

    def __init__(self, formatter: ColorFormatter, inline: bool = False):
        self.formatter = formatter
        self.inline = inline

    def render(self, actual: str, expected: str, escape: bool = True) -> str:
        """Render with the configured layout."""
        if self.inline:
            return self.inline_diff(actual, expected, escape)
        return self.unified_diff(actual, expected, escape)

    def unified_diff(self, actual: str, expected: str, escape: bool = True) -> str:
        """Render a ``+ expected - actual`` patch body, headers and hunk markers removed."""
        if escape:
            actual = escape_invisibles(actual)
            expected = escape_invisibles(expected)

        patch = create_patch("string", actual, expected)
        body = []
        for line in patch.split("\n")[PATCH_HEADER_LINES:]:
            rendered = self._clean_up(line)
            if rendered is not None:
                body.append(rendered)

        color_lines = self.formatter.color_lines
        return (
            "\n" + INDENT
            + color_lines("diff added", "+ expected") + " "
            + color_lines("diff removed", "- actual")
            + "\n\n"
            + "\n".join(body)
        )

    def _clean_up(self, line: str) -> Optional[str]:
        if line.startswith("+"):
            return INDENT + self.formatter.color_lines("diff added", line)
        if line.startswith("-"):
            return INDENT + self.formatter.color_lines("diff removed", line)
        if HUNK_RE.match(line) or line.startswith(NO_NEWLINE_MARKER):
            return None
        return INDENT + line

    def inline_diff(self, actual: str, expected: str, escape: bool = True) -> str:
        """Render a word-level diff with an ``actual expected`` legend."""
        msg = self.word_diff(actual, expected, escape)

        lines = msg.split("\n")
        if len(lines) > MAX_UNNUMBERED_LINES:
            width = len(str(len(lines)))
            msg = "\n".join(
                f"{str(number).rjust(width)} | {line}"
                for number, line in enumerate(lines, 1)
            )

        colorize = self.formatter.colorize
        msg = (
            "\n" + colorize("diff removed", "actual") + " " + colorize("diff added", "expected")
            + "\n\n" + msg + "\n"
        )
        return indent_lines(msg, INDENT)

    def word_diff(self, actual: str, expected: str, escape: bool = True) -> str:
        """Concatenate word-diff segments, coloring insertions and removals."""
        if escape:
            actual = escape_invisibles(actual)
            expected = escape_invisibles(expected)

        old = word_tokens(actual)
        new = word_tokens(expected)
        color_lines = self.formatter.color_lines
        parts = []
        matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
        for tag, a1, a2, b1, b2 in matcher.get_opcodes():
            if tag == "equal":
                parts.append("".join(old[a1:a2]))
                continue
            if b2 > b1:
                parts.append(color_lines("diff added", "".join(new[b1:b2])))
            if a2 > a1:
                parts.append(color_lines("diff removed", "".join(old[a1:a2])))
        return "".join(parts)
