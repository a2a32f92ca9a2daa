"""Markdown and JSON rendering of style check results."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from stylegate.diffing import printable
from stylegate.types import CheckOutcome, ViolationReport

REPORT_HEADER = "### Code Style Check"
REPORT_SEPARATOR = "---"
VIOLATION_ERROR_MESSAGE = "Code style violations detected."
VALIDATION_ERROR_MESSAGE = "Code style validation could not be completed."

REPORT_JSON_FILENAME = "STYLE_CHECK_REPORT.json"
REPORT_MD_FILENAME = "STYLE_CHECK_REPORT.md"


def failure_summary(report: ViolationReport) -> str:
    """One-line reason handed to the sink with the failure signal."""
    if report.violations:
        return VIOLATION_ERROR_MESSAGE
    return VALIDATION_ERROR_MESSAGE


def build_message(validator: str, report: ViolationReport) -> str | None:
    """Assemble the reviewer-facing Markdown body, or None when there is nothing to report."""
    if report.clean:
        return None

    parts: list[str] = []

    if report.violations:
        parts.append("Code style violations detected in the following files:\n")
        for path in report.offending_files:
            parts.append(f"* `{path}`\n")
        parts.append("\n")
        parts.append("Execute one of the following actions and commit again:\n")
        parts.append(f"1. Run `{validator}` on the offending files\n")
        parts.append("2. Apply the suggested patches with `git apply -p0 <patch>`.\n\n")
        parts.append("\n".join(patch.render() for patch in report.patches))

    if report.failures:
        if report.violations:
            parts.append("\n")
        parts.append("The following files could not be validated:\n")
        for failure in report.failures:
            parts.append(f"* `{failure.path}` ({failure.kind}): {failure.message}\n")

    return printable("".join(parts))


def render_patch_file(report: ViolationReport) -> str:
    """Concatenate all diffs into a single patch for `git apply -p0`."""
    return "".join(v.diff for v in report.violations)


def write_report_artifacts(out_dir: Path, outcome: CheckOutcome, validator: str) -> tuple[Path, Path]:
    """Write STYLE_CHECK_REPORT.json and STYLE_CHECK_REPORT.md.

    Returns:
        Tuple of (json_path, md_path)
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    payload = {
        "schema_version": "1.0",
        "status": outcome.status,
        "validator": validator,
        "checked_files": outcome.checked_files,
        "offending_files": outcome.report.offending_files,
        "violations": [asdict(v) for v in outcome.report.violations],
        "failures": [asdict(f) for f in outcome.report.failures],
    }
    json_path = out_dir / REPORT_JSON_FILENAME
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)

    md_path = out_dir / REPORT_MD_FILENAME
    with open(md_path, "w", encoding="utf-8") as f:
        _write_markdown_report(f, outcome)

    return json_path, md_path


def _write_markdown_report(f: TextIO, outcome: CheckOutcome) -> None:
    """Write the same document the review sink receives."""
    f.write(f"{REPORT_HEADER}\n\n")
    status_emoji = "✅" if outcome.passed else "❌"
    f.write(f"**Status**: {status_emoji} {outcome.status.upper()}\n\n")
    f.write(f"**Checked files**: {len(outcome.checked_files)}\n\n")
    if outcome.message:
        f.write(f"{REPORT_SEPARATOR}\n\n")
        f.write(outcome.message)
        if not outcome.message.endswith("\n"):
            f.write("\n")
