"""Schema registry with package-data-only loading.

Schemas ship inside the stylegate.schemas package, so lookups do not depend
on the current working directory.
"""

import json
from functools import lru_cache
from importlib.resources import files
from typing import Any

SCHEMA_SUFFIX = ".schema.json"


def available_schemas() -> tuple[str, ...]:
    """Sorted canonical names (without .schema.json suffix) of bundled schemas."""
    names = [
        item.name.removesuffix(SCHEMA_SUFFIX)
        for item in files("stylegate.schemas").iterdir()
        if item.name.endswith(SCHEMA_SUFFIX)
    ]
    return tuple(sorted(names))


@lru_cache(maxsize=None)
def get_schema_json(name: str) -> dict[str, Any]:
    """Load schema as parsed JSON dictionary.

    Args:
        name: Schema name (with or without .schema.json suffix)

    Raises:
        KeyError: If schema not found
        ValueError: If schema JSON is malformed
    """
    canonical_name = name.removesuffix(SCHEMA_SUFFIX)
    if canonical_name not in available_schemas():
        raise KeyError(
            f"Schema '{canonical_name}' not found in stylegate package data. "
            f"Available schemas: {', '.join(available_schemas())}"
        )

    text = (files("stylegate.schemas") / f"{canonical_name}{SCHEMA_SUFFIX}").read_text(encoding="utf-8")
    try:
        res: dict[str, Any] = json.loads(text)
        return res
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Schema '{canonical_name}' contains invalid JSON: {e}\n"
            f"This may indicate a corrupted installation. Try reinstalling stylegate."
        ) from e
