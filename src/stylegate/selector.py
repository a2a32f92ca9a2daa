"""Select which changed files need a style check."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import PurePath

logger = logging.getLogger(__name__)


def is_ignored(path: str, ignore_patterns: Iterable[re.Pattern[str]]) -> bool:
    """True if any pattern matches somewhere in the POSIX form of path."""
    posix = PurePath(path).as_posix()
    return any(pattern.search(posix) for pattern in ignore_patterns)


def select_files(
    changes: Sequence[str],
    file_extensions: Sequence[str],
    ignore_patterns: Sequence[re.Pattern[str]] = (),
) -> list[str]:
    """Filter a change set down to the files to validate.

    A path is kept when it ends with one of ``file_extensions`` (case-sensitive)
    and matches none of ``ignore_patterns``. Input order is preserved.
    """
    if not changes or not file_extensions:
        return []

    suffixes = tuple(file_extensions)
    selected = [
        path
        for path in changes
        if path.endswith(suffixes) and not is_ignored(path, ignore_patterns)
    ]
    logger.info("Selected %d of %d changed file(s)", len(selected), len(changes))
    return selected
