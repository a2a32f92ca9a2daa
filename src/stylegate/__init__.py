"""stylegate - code style gate for code review."""

__version__ = "0.1.0"

from stylegate.check import ReportSink, check
from stylegate.config import CheckConfiguration, build_config
from stylegate.types import CheckOutcome, FileFailure, FileViolation, PatchBlock, ViolationReport

__all__ = [
    "CheckConfiguration",
    "CheckOutcome",
    "FileFailure",
    "FileViolation",
    "PatchBlock",
    "ReportSink",
    "ViolationReport",
    "__version__",
    "build_config",
    "check",
]
