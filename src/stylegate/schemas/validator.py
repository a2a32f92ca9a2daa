"""Schema validation for stylegate config data."""

from typing import Any

from jsonschema.validators import Draft202012Validator

from stylegate.schemas.registry import get_schema_json


def validate_data(data: dict[str, Any], schema_name: str) -> list[str]:
    """Check data against a bundled schema.

    Returns:
        One message per violation, prefixed with the dotted path of the
        offending key; empty when the data is valid

    Raises:
        KeyError: If schema not found in package data
    """
    validator = Draft202012Validator(get_schema_json(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    return [
        f"{'.'.join(str(p) for p in e.path)}: {e.message}" if e.path else e.message
        for e in errors
    ]
