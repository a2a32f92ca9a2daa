"""stylegate CLI - code style gate for changed files."""

import logging
from pathlib import Path

import typer
import yaml  # type: ignore[import-untyped]
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from stylegate import __version__
from stylegate.changes import collect_changed_files, find_repo_root
from stylegate.check import ConsoleSink, check
from stylegate.config import build_config
from stylegate.errors import GitError, StyleGateError
from stylegate.report import render_patch_file, write_report_artifacts

logger = logging.getLogger(__name__)

cli = typer.Typer(
    name="stylegate",
    help="stylegate - Fail code review when changed files drift from the style validator.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show stylegate version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Run an external formatter over changed files and report any diff as a patch."""


def _resolve_root(repo_root: Path | None, need_git: bool) -> Path:
    """Explicit --repo-root, else the enclosing git checkout, else cwd when git is optional."""
    if repo_root is not None:
        return repo_root.resolve()
    try:
        return find_repo_root(Path.cwd())
    except GitError:
        if need_git:
            raise
        logger.debug("Not inside a git checkout; using %s as the root", Path.cwd())
        return Path.cwd().resolve()


@cli.command(name="check")
def check_cmd(
    paths: list[str] | None = typer.Argument(
        None,
        help="Changed files to check, relative to the repo root. Defaults to git's added and modified files.",
    ),
    validator: str | None = typer.Option(
        None,
        "--validator",
        help="Style validator program (default: clang-format)",
    ),
    validator_args: list[str] | None = typer.Option(
        None,
        "--validator-arg",
        help="Extra argument passed to the validator before the file path (repeatable)",
    ),
    file_extensions: list[str] | None = typer.Option(
        None,
        "--ext",
        help="File extension to check, e.g. .py (repeatable; default: .h .m .mm)",
    ),
    ignore_patterns: list[str] | None = typer.Option(
        None,
        "--ignore",
        help="Regex of paths to skip, e.g. '^Pods/' (repeatable)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: .stylegate.yaml/.toml or [tool.stylegate] at the repo root)",
    ),
    repo_root: Path | None = typer.Option(
        None,
        "--repo-root",
        help="Override repository root path",
    ),
    base: str | None = typer.Option(
        None,
        "--base",
        help="Compare <base>...HEAD instead of the working tree",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Seconds allowed per validator run (default: 60)",
    ),
    jobs: int | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Files to validate in parallel (default: 1)",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Directory for STYLE_CHECK_REPORT.json and STYLE_CHECK_REPORT.md",
    ),
    patch: Path | None = typer.Option(
        None,
        "--patch",
        help="Write all suggested changes to this file for `git apply -p0`",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each validator run"),
) -> None:
    """Check changed files against the style validator.

    Exit codes:
      0 - No violations
      2 - Violations found or files could not be validated
      1 - Tooling error
    """
    _configure_logging(verbose)

    if paths and base:
        err_console.print("[red]❌ --base selects files from git and cannot be combined with PATHS[/red]")
        raise typer.Exit(code=1)

    try:
        root = _resolve_root(repo_root, need_git=not paths)
        config = build_config(
            {
                "validator": validator,
                "validator_args": validator_args or None,
                "file_extensions": file_extensions or None,
                "ignore_file_patterns": ignore_patterns or None,
                "timeout": timeout,
                "jobs": jobs,
            },
            repo_root=root,
            config_path=config_path,
        )
        changes = list(paths) if paths else collect_changed_files(root, base=base)
        outcome = check(changes, config, sink=ConsoleSink(console), repo_root=root)
    except StyleGateError as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if out is not None:
        json_path, md_path = write_report_artifacts(out, outcome, config.validator)
        err_console.print(f"Reports written to:\n  {json_path}\n  {md_path}")

    if patch is not None and outcome.report.violations:
        patch.parent.mkdir(parents=True, exist_ok=True)
        patch.write_text(render_patch_file(outcome.report), encoding="utf-8", errors="surrogateescape")
        err_console.print(f"Patch written to: {patch}")

    if not outcome.passed:
        raise typer.Exit(code=2)

    err_console.print(f"[green]✅ Code style OK ({len(outcome.checked_files)} file(s) checked)[/green]")


@cli.command(name="config")
def config_cmd(
    config_path: Path | None = typer.Option(None, "--config", help="Config file to load"),
    repo_root: Path | None = typer.Option(None, "--repo-root", help="Override repository root path"),
) -> None:
    """Print the effective configuration as YAML."""
    try:
        root = _resolve_root(repo_root, need_git=False)
        config = build_config(repo_root=root, config_path=config_path)
    except StyleGateError as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if config.source is not None:
        err_console.print(f"# loaded from {config.source}", soft_wrap=True, markup=False)
    typer.echo(yaml.safe_dump(config.to_dict(), sort_keys=False), nl=False)


if __name__ == "__main__":
    cli()
