"""Exception types raised by stylegate."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stylegate.exec import ExecResult


class StyleGateError(RuntimeError):
    """Base class for stylegate errors."""


class ConfigError(StyleGateError):
    """Raised when the check configuration is unusable."""


class GitError(StyleGateError):
    """Raised when the change set cannot be read from git."""


class ValidatorError(StyleGateError):
    """Raised when the validator cannot produce formatted output for a file.

    ``result`` is None when the program could not be started at all.
    """

    def __init__(self, message: str, result: ExecResult | None = None, *, timed_out: bool = False):
        super().__init__(message)
        self.result = result
        self.timed_out = timed_out
