"""Run the validator per file and collect style violations.

Each file is independent: the validator output is diffed against the file's
current content and a violation is recorded only when the diff is non-empty.
A file the validator cannot process is recorded as a failure and never counts
as clean. Processing continues with the remaining files.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from stylegate.config import CheckConfiguration
from stylegate.diffing import count_hunks, unified_diff
from stylegate.errors import ValidatorError
from stylegate.exec import run_validator
from stylegate.types import FileFailure, FileViolation, ViolationReport

logger = logging.getLogger(__name__)

FileResult = FileViolation | FileFailure | None


def read_original(path: Path) -> str:
    """Read file content as UTF-8 with line endings preserved."""
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def resolve_file(config: CheckConfiguration, path: str, *, repo_root: Path) -> FileResult:
    """Check one file.

    Returns:
        FileViolation if formatting changes the file, FileFailure if it could
        not be checked, None if it is clean
    """
    try:
        formatted = run_validator(config.command, path, repo_root=repo_root, timeout=config.timeout)
    except ValidatorError as e:
        kind = "timeout" if e.timed_out else "validator_failure"
        logger.warning("%s: %s", path, e)
        return FileFailure(path=path, kind=kind, message=str(e))

    try:
        original = read_original(repo_root / path)
    except OSError as e:
        logger.warning("%s: cannot read file: %s", path, e)
        return FileFailure(path=path, kind="io_error", message=f"cannot read file: {e.strerror or e}")

    diff = unified_diff(original, formatted, path)
    if not diff:
        logger.debug("%s: clean", path)
        return None

    logger.debug("%s: formatting differs in %d hunk(s)", path, count_hunks(diff))
    return FileViolation(path=path, diff=diff)


def resolve_changes(
    config: CheckConfiguration,
    paths: Sequence[str],
    *,
    repo_root: Path,
) -> ViolationReport:
    """Validate each path and build the report in input order.

    With ``config.jobs > 1`` files run on a thread pool; ``Executor.map``
    yields results in submission order.
    """
    report = ViolationReport()
    if not paths:
        return report

    def _resolve(path: str) -> FileResult:
        return resolve_file(config, path, repo_root=repo_root)

    if config.jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=min(config.jobs, len(paths))) as executor:
            results = list(executor.map(_resolve, paths))
    else:
        results = [_resolve(path) for path in paths]

    for result in results:
        if isinstance(result, FileViolation):
            report.violations.append(result)
        elif isinstance(result, FileFailure):
            report.failures.append(result)

    logger.info(
        "Checked %d file(s): %d violation(s), %d failure(s)",
        len(paths),
        len(report.violations),
        len(report.failures),
    )
    return report
