"""Unified diff generation between a file and its formatted version."""

from __future__ import annotations

import difflib
import re

NO_NEWLINE_MARKER = "\\ No newline at end of file\n"

# Split on "\n" only; str.splitlines would also break on form feeds and
# other separators that must survive a round trip through `git apply`.
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def split_lines(text: str) -> list[str]:
    """Split text into lines, keeping line endings."""
    return _LINE_RE.findall(text)


def unified_diff(original: str, formatted: str, path: str, context: int = 3) -> str:
    """Render a unified diff from original to formatted text.

    Both labels are ``path``. Returns an empty string when the texts are equal.
    Lines without a trailing newline get the standard marker so the output
    stays valid input for ``git apply``.
    """
    if original == formatted:
        return ""

    chunks: list[str] = []
    for line in difflib.unified_diff(
        split_lines(original),
        split_lines(formatted),
        fromfile=path,
        tofile=path,
        n=context,
    ):
        if line.endswith("\n"):
            chunks.append(line)
        else:
            chunks.append(line + "\n" + NO_NEWLINE_MARKER)
    return "".join(chunks)


def count_hunks(diff_text: str) -> int:
    """Number of hunks in a unified diff."""
    return sum(1 for line in split_lines(diff_text) if line.startswith("@@ "))


def printable(text: str) -> str:
    """Replace undecodable bytes (lone surrogates) with ``\\xNN`` escapes.

    Diff text keeps the file's raw bytes via surrogateescape; anything shown
    to a reviewer or written as UTF-8 Markdown must not carry them.
    """
    return text.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="backslashreplace")


def code_fence(text: str) -> str:
    """Backtick fence longer than any backtick run inside text (minimum three)."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    return "`" * max(3, longest + 1)
