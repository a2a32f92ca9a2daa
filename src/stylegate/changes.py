"""Collect the added and modified files of a change from git."""

from __future__ import annotations

import logging
from pathlib import Path

from stylegate.errors import GitError
from stylegate.exec import ExecError, run_git

logger = logging.getLogger(__name__)


def find_repo_root(start: Path) -> Path:
    """Resolve the top-level directory of the git work tree containing start.

    Raises:
        GitError: If start is not inside a git work tree
    """
    try:
        result = run_git(["rev-parse", "--show-toplevel"], repo_root=start)
    except (ExecError, OSError) as e:
        raise GitError(f"Not a git repository: {start}\n{e}") from e
    return Path(result.stdout.strip())


def _name_list(args: list[str], repo_root: Path) -> list[str]:
    try:
        result = run_git(args, repo_root=repo_root)
    except (ExecError, OSError) as e:
        raise GitError(f"Git command failed: {e}") from e
    return [Path(line).as_posix() for line in result.stdout.splitlines() if line.strip()]


def collect_changed_files(repo_root: Path, base: str | None = None) -> list[str]:
    """List added and modified files, relative to repo_root.

    Args:
        repo_root: Git work tree root
        base: Compare ``<base>...HEAD`` (the review's merge base); when None,
            compare the working tree against HEAD and include untracked files

    Returns:
        De-duplicated POSIX paths in git's output order

    Raises:
        GitError: If a git command fails
    """
    diff_args = ["-c", "core.quotePath=false", "diff", "--name-only", "--no-renames", "--diff-filter=AM"]
    if base:
        changed = _name_list([*diff_args, f"{base}...HEAD"], repo_root)
    else:
        changed = _name_list([*diff_args, "HEAD"], repo_root)
        changed += _name_list(["-c", "core.quotePath=false", "ls-files", "--others", "--exclude-standard"], repo_root)

    unique = list(dict.fromkeys(changed))
    logger.info("Found %d added or modified file(s)", len(unique))
    return unique
