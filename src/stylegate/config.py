"""Check configuration: defaults, config files and caller overrides.

Configuration is merged in three layers, later layers winning:

1. Built-in defaults (clang-format over Objective-C sources)
2. A config file (.stylegate.yaml, .stylegate.yml, .stylegate.toml, or
   [tool.stylegate] in pyproject.toml)
3. Explicit overrides from the caller or CLI

Unrecognized keys are ignored at every layer.
"""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from stylegate.errors import ConfigError
from stylegate.schemas.validator import validate_data

logger = logging.getLogger(__name__)

DEFAULT_VALIDATOR = "clang-format"
DEFAULT_FILE_EXTENSIONS: tuple[str, ...] = (".h", ".m", ".mm")
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_JOBS = 1

CONFIG_FILENAMES: tuple[str, ...] = (
    ".stylegate.yaml",
    ".stylegate.yml",
    ".stylegate.toml",
)

# camelCase spellings accepted alongside the canonical snake_case keys.
KEY_ALIASES = {
    "validatorArgs": "validator_args",
    "fileExtensions": "file_extensions",
    "ignoreFilePatterns": "ignore_file_patterns",
    "ignorePatterns": "ignore_file_patterns",
}


@dataclass(frozen=True)
class CheckConfiguration:
    """Immutable settings for one check invocation."""

    validator: str = DEFAULT_VALIDATOR
    validator_args: tuple[str, ...] = ()
    file_extensions: tuple[str, ...] = DEFAULT_FILE_EXTENSIONS
    ignore_file_patterns: tuple[re.Pattern[str], ...] = ()
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    jobs: int = DEFAULT_JOBS
    source: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.validator.strip():
            raise ConfigError("validator must be a non-empty program name")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")

    @property
    def command(self) -> list[str]:
        """Validator argv prefix; the file path is appended per file."""
        return [self.validator, *self.validator_args]

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> CheckConfiguration:
        """Build a configuration from a raw options mapping, merged over defaults."""
        options = normalize_keys(data)

        validator: Any = options.get("validator", DEFAULT_VALIDATOR)
        validator_args = _as_str_tuple(options.get("validator_args", ()), "validator_args")
        if isinstance(validator, (list, tuple)):
            if not validator:
                raise ConfigError("validator must be a non-empty program name")
            parts = _as_str_tuple(validator, "validator")
            validator, validator_args = parts[0], parts[1:] + validator_args
        if not isinstance(validator, str):
            raise ConfigError(f"validator must be a string, got {type(validator).__name__}")

        extensions = _as_str_tuple(
            options.get("file_extensions", DEFAULT_FILE_EXTENSIONS), "file_extensions"
        )
        patterns = compile_patterns(options.get("ignore_file_patterns", ()))

        timeout = options.get("timeout", DEFAULT_TIMEOUT_SECONDS)
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
            raise ConfigError(f"timeout must be a number, got {timeout!r}")

        jobs = options.get("jobs", DEFAULT_JOBS)
        if isinstance(jobs, bool) or not isinstance(jobs, int):
            raise ConfigError(f"jobs must be an integer, got {jobs!r}")

        return cls(
            validator=validator.strip(),
            validator_args=validator_args,
            file_extensions=normalize_extensions(extensions),
            ignore_file_patterns=patterns,
            timeout=float(timeout) if timeout is not None else None,
            jobs=jobs,
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the effective settings."""
        return {
            "validator": self.validator,
            "validator_args": list(self.validator_args),
            "file_extensions": list(self.file_extensions),
            "ignore_file_patterns": [p.pattern for p in self.ignore_file_patterns],
            "timeout": self.timeout,
            "jobs": self.jobs,
        }


def normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases onto canonical keys; canonical keys win."""
    options: dict[str, Any] = {}
    for key, value in data.items():
        canonical = KEY_ALIASES.get(key, key)
        if canonical != key and canonical in data:
            continue
        options[canonical] = value
    return options


def normalize_extensions(extensions: tuple[str, ...]) -> tuple[str, ...]:
    """Ensure a leading dot on each extension and drop duplicates, keeping order."""
    seen: dict[str, None] = {}
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        seen.setdefault(ext, None)
    return tuple(seen)


def compile_patterns(raw: Any) -> tuple[re.Pattern[str], ...]:
    """Compile ignore patterns given as regex strings or precompiled patterns."""
    if isinstance(raw, (str, re.Pattern)):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        raise ConfigError(f"ignore_file_patterns must be a list, got {type(raw).__name__}")

    compiled: dict[str, re.Pattern[str]] = {}
    for item in raw:
        if isinstance(item, re.Pattern):
            compiled.setdefault(item.pattern, item)
            continue
        if not isinstance(item, str):
            raise ConfigError(f"ignore pattern must be a string, got {item!r}")
        try:
            compiled.setdefault(item, re.compile(item))
        except re.error as e:
            raise ConfigError(f"Invalid ignore pattern {item!r}: {e}") from e
    return tuple(compiled.values())


def _as_str_tuple(raw: Any, name: str) -> tuple[str, ...]:
    if isinstance(raw, str):
        return (raw,)
    if not isinstance(raw, (list, tuple)):
        raise ConfigError(f"{name} must be a list of strings, got {type(raw).__name__}")
    for item in raw:
        if not isinstance(item, str):
            raise ConfigError(f"{name} entries must be strings, got {item!r}")
    return tuple(raw)


def discover_config_file(repo_root: Path) -> Path | None:
    """Find the config file at the repository root.

    Priority order:
    1. .stylegate.yaml / .stylegate.yml
    2. .stylegate.toml
    3. pyproject.toml, only if it carries a [tool.stylegate] table
    """
    for name in CONFIG_FILENAMES:
        candidate = repo_root / name
        if candidate.is_file():
            return candidate

    pyproject = repo_root / "pyproject.toml"
    if pyproject.is_file():
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError:
            logger.warning("Ignoring unreadable %s", pyproject)
            return None
        if "stylegate" in data.get("tool", {}):
            return pyproject
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Read and schema-check a config file, returning its raw options.

    Raises:
        ConfigError: If the file is missing, malformed or fails schema validation
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path.suffix == ".toml":
        try:
            with open(path, "rb") as f:
                data: Any = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed TOML config at {path}: {e}") from e
        if path.name == "pyproject.toml":
            data = data.get("tool", {}).get("stylegate", {})
    else:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML config at {path}: {e}") from e
        if data is None:
            data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config structure in {path}: expected a mapping at top level")

    errors = validate_data(data, "style_config")
    if errors:
        raise ConfigError(
            f"Invalid config in {path}:\n" + "\n".join(f"  - {msg}" for msg in errors)
        )

    return data


def build_config(
    overrides: dict[str, Any] | None = None,
    *,
    repo_root: Path | None = None,
    config_path: Path | None = None,
) -> CheckConfiguration:
    """Build the effective configuration.

    Args:
        overrides: Caller options; keys whose value is None are treated as absent
        repo_root: Where to look for a config file when config_path is not given
        config_path: Explicit config file

    Returns:
        Immutable CheckConfiguration

    Raises:
        ConfigError: If any layer is invalid
    """
    merged: dict[str, Any] = {}

    path = config_path
    if path is None and repo_root is not None:
        path = discover_config_file(repo_root)
    if path is not None:
        logger.debug("Loading config from %s", path)
        merged.update(normalize_keys(load_config_file(path)))

    if overrides:
        given = normalize_keys({k: v for k, v in overrides.items() if v is not None})
        # Arguments from the file belong to the file's validator.
        if "validator" in given and "validator_args" not in given:
            merged.pop("validator_args", None)
        merged.update(given)

    return CheckConfiguration.from_dict(merged, source=path)
