"""Command runners for validator and git invocations."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from stylegate.errors import ValidatorError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str


class ExecError(RuntimeError):
    """Raised when a command returns non-zero in check mode."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        detail = (result.stderr or result.stdout).strip()
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{detail}")
        self.result = result


def _decode(data: bytes | None) -> str:
    # Binary capture keeps CRLF intact; text mode would normalize newlines.
    if not data:
        return ""
    return data.decode("utf-8", errors="surrogateescape")


def run_command(
    argv: list[str],
    *,
    cwd: Path,
    check: bool = True,
    timeout: float | None = None,
) -> ExecResult:
    """Run command and return structured result.

    stdout and stderr are decoded from raw bytes so line endings survive
    untouched. ``subprocess.TimeoutExpired`` and ``OSError`` propagate.
    """
    logger.debug("running %s (cwd=%s)", argv, cwd)
    completed = subprocess.run(
        argv,
        cwd=cwd,
        capture_output=True,
        stdin=subprocess.DEVNULL,
        timeout=timeout,
        check=False,
    )
    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
    )
    if check and result.returncode != 0:
        raise ExecError(result)
    return result


def run_git(
    args: list[str],
    *,
    repo_root: Path,
    check: bool = True,
) -> ExecResult:
    """Run git command rooted at repo."""
    return run_command(["git", *args], cwd=repo_root, check=check)


def run_validator(
    command: list[str],
    path: str,
    *,
    repo_root: Path,
    timeout: float | None = None,
) -> str:
    """Run the style validator on one file and return its stdout.

    Raises:
        ValidatorError: If the program cannot be started, times out, or exits non-zero
    """
    argv = [*command, path]
    try:
        result = run_command(argv, cwd=repo_root, check=False, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ValidatorError(
            f"`{command[0]}` did not finish within {timeout:g}s", timed_out=True
        ) from e
    except OSError as e:
        raise ValidatorError(f"could not run `{command[0]}`: {e.strerror or e}") from e

    if result.returncode != 0:
        detail = result.stderr.strip() or "no output on stderr"
        raise ValidatorError(
            f"`{command[0]}` exited with status {result.returncode}: {detail}",
            result,
        )
    return result.stdout
