"""Result types for style checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from stylegate.diffing import code_fence, printable

FailureKind = Literal["validator_failure", "timeout", "io_error"]


@dataclass(frozen=True)
class PatchBlock:
    """Markdown patch for one file."""

    title: str
    body: str

    def render(self) -> str:
        """Render as a level-4 heading followed by a fenced diff block."""
        body = printable(self.body.rstrip("\n"))
        fence = code_fence(body)
        return f"#### {printable(self.title)}\n{fence}diff\n{body}\n{fence}\n"


@dataclass(frozen=True)
class FileViolation:
    """A file whose formatted output differs from its current content."""

    path: str
    diff: str

    @property
    def patch(self) -> PatchBlock:
        return PatchBlock(title=self.path, body=self.diff)


@dataclass(frozen=True)
class FileFailure:
    """A file the validator could not check."""

    path: str
    kind: FailureKind
    message: str


@dataclass
class ViolationReport:
    """Per-file outcomes of a resolver run, in input order."""

    violations: list[FileViolation] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def offending_files(self) -> list[str]:
        return [v.path for v in self.violations]

    @property
    def patches(self) -> list[PatchBlock]:
        return [v.patch for v in self.violations]

    @property
    def clean(self) -> bool:
        return not self.violations and not self.failures


@dataclass
class CheckOutcome:
    """Verdict of a full check invocation."""

    status: Literal["passed", "failed"]
    report: ViolationReport
    checked_files: list[str] = field(default_factory=list)
    message: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == "passed"
