"""Pytest configuration and fixtures for stylegate tests."""
import sys
from pathlib import Path

import pytest

from stylegate.config import CheckConfiguration

# Stand-in validator: prints formatted/<path> when present, else the file itself.
# A sibling <path>.fail under formatted/ makes it exit 3; <path>.hang makes it sleep.
FAKE_VALIDATOR = """\
import sys
import time
from pathlib import Path

formatted_dir = Path(sys.argv[1])
path = sys.argv[-1]
if (formatted_dir / (path + ".fail")).exists():
    sys.stderr.write("fake-format: cannot parse " + path + "\\n")
    sys.exit(3)
if (formatted_dir / (path + ".hang")).exists():
    time.sleep(30)
source = formatted_dir / path
if not source.exists():
    source = Path(path)
sys.stdout.buffer.write(source.read_bytes())
"""


def _write(target: Path, content: str | bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content if isinstance(content, bytes) else content.encode("utf-8"))


class FakeValidator:
    """Writes working-tree files and the output the fake validator should produce."""

    def __init__(self, root: Path):
        self.root = root
        self.formatted_dir = root.parent / f"{root.name}-formatted"
        self.formatted_dir.mkdir(parents=True, exist_ok=True)
        self.script = root.parent / f"{root.name}-fake_format.py"
        self.script.write_text(FAKE_VALIDATOR, encoding="utf-8")

    def write(self, path: str, content: str | bytes) -> None:
        _write(self.root / path, content)

    def formats_to(self, path: str, content: str | bytes) -> None:
        _write(self.formatted_dir / path, content)

    def fails_on(self, path: str) -> None:
        target = self.formatted_dir / (path + ".fail")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.touch()

    def hangs_on(self, path: str) -> None:
        target = self.formatted_dir / (path + ".hang")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.touch()

    def config(self, **overrides) -> CheckConfiguration:
        options = {
            "validator": sys.executable,
            "validator_args": (str(self.script), str(self.formatted_dir)),
        }
        options.update(overrides)
        return CheckConfiguration(**options)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def fake_validator(workspace: Path) -> FakeValidator:
    return FakeValidator(workspace)


def pytest_sessionfinish(session, exitstatus):
    """Fail a --cov run that wrote no .coverage data, e.g. when tests import src/ by path."""
    if not any("--cov" in str(arg) for arg in session.config.args):
        return
    if not any(Path.cwd().glob(".coverage*")):
        pytest.exit("--cov was given but no coverage data was written", returncode=1)
