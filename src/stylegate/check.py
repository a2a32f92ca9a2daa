"""Style check entry point: select, resolve, report."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from rich.console import Console

from stylegate.config import CheckConfiguration, build_config
from stylegate.report import REPORT_HEADER, REPORT_SEPARATOR, build_message, failure_summary
from stylegate.resolver import resolve_changes
from stylegate.selector import select_files
from stylegate.types import CheckOutcome

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    """Receiver of the failure signal and Markdown blocks (e.g. a review bot)."""

    def fail(self, message: str) -> None: ...

    def markdown(self, text: str) -> None: ...


class ConsoleSink:
    """Print the verdict and the raw Markdown to a rich console."""

    def __init__(self, console: Console):
        self.console = console

    def fail(self, message: str) -> None:
        self.console.print(f"[bold red]✗ {message}[/bold red]")

    def markdown(self, text: str) -> None:
        # Raw text so the output can be pasted into a review as-is.
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def check(
    changed_files: Sequence[str],
    config: CheckConfiguration | dict[str, Any] | None = None,
    *,
    sink: ReportSink,
    repo_root: Path | None = None,
) -> CheckOutcome:
    """Validate code style of the changed files.

    Nothing reaches the sink when every selected file is clean. Otherwise the
    sink gets one failure signal followed by the header, a separator and the
    aggregated message.

    Args:
        changed_files: Added and modified paths, relative to repo_root
        config: CheckConfiguration, or raw options merged over defaults
        sink: Receiver of the failure signal and Markdown output
        repo_root: Working tree the paths are relative to (default: cwd)

    Returns:
        CheckOutcome with status "failed" on any violation or validation failure
    """
    if not isinstance(config, CheckConfiguration):
        config = build_config(config)
    root = (repo_root or Path.cwd()).resolve()

    selected = select_files(changed_files, config.file_extensions, config.ignore_file_patterns)
    report = resolve_changes(config, selected, repo_root=root)
    message = build_message(config.validator, report)

    if message is None:
        return CheckOutcome(status="passed", report=report, checked_files=selected)

    sink.fail(failure_summary(report))
    sink.markdown(REPORT_HEADER)
    sink.markdown(REPORT_SEPARATOR)
    sink.markdown(message)
    return CheckOutcome(status="failed", report=report, checked_files=selected, message=message)
