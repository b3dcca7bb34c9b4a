"""vschema: validate and coerce in-memory values against declarative schemas.

Every operation accepts a built Schema or any shorthand understood by
vschema.dsl.to_schema():

    from vschema import coerce, validate
    from vschema.dsl import optional

    user = {"name": str, "age": int, optional("email"): str}

    validate(user, {"name": "Ann", "age": "41"})
    # ErrorDetails(failing_value='41', reason='is not an instance of int', key_path=('age',), ...)

    coerce(user, {"name": "Ann", "age": "41", "extra": True})
    # ({'name': 'Ann', 'age': 41}, None)
"""

from typing import Any

from vschema.contracts import (
    ErrorDetails,
    ErrorKind,
    InvalidSchemaError,
    MapKey,
    ValidationError,
)
from vschema.core.config import DEFAULT_SETTINGS, CoercionSettings, load_settings
from vschema.dsl import DSL, optional, schema, to_schema
from vschema.engine import coerce_node, validate_node


def validate(schema: Any, value: Any) -> ErrorDetails | None:
    """Return the first failure of value against schema, or None."""
    return validate_node(to_schema(schema), value)


def validate_strict(schema: Any, value: Any) -> None:
    """Raise ValidationError if value does not conform to schema."""
    error = validate(schema, value)
    if error is not None:
        raise ValidationError(error)


def is_valid(schema: Any, value: Any) -> bool:
    """Whether value conforms to schema."""
    return validate(schema, value) is None


def coerce(
    schema: Any, value: Any, settings: CoercionSettings | None = None
) -> tuple[Any, ErrorDetails | None]:
    """Coerce value into the shape of schema.

    Returns:
        (coerced value, None) on success; (value unchanged, error) on failure
    """
    if settings is None:
        settings = DEFAULT_SETTINGS
    return coerce_node(to_schema(schema), value, settings)


def coerce_strict(schema: Any, value: Any, settings: CoercionSettings | None = None) -> Any:
    """Return the coerced value, raising ValidationError on failure."""
    coerced, error = coerce(schema, value, settings)
    if error is not None:
        raise ValidationError(error)
    return coerced


__all__ = [
    "CoercionSettings",
    "DSL",
    "ErrorDetails",
    "ErrorKind",
    "InvalidSchemaError",
    "MapKey",
    "ValidationError",
    "coerce",
    "coerce_strict",
    "is_valid",
    "load_settings",
    "optional",
    "schema",
    "to_schema",
    "validate",
    "validate_strict",
]
