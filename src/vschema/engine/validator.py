# src/vschema/engine/validator.py
"""Validation engine.

Walks a schema/value pair depth-first and returns the first failure. For
composite schemas the structural checks (type, length, key set) run before
any element is visited, and elements are visited in iteration order.
"""

from collections.abc import Mapping
from typing import Any

from vschema.contracts.enums import ErrorKind
from vschema.contracts.errors import ErrorDetails, MapKey
from vschema.schemas import (
    AnySchema,
    BooleanSchema,
    EitherSchema,
    EnumSchema,
    FixedMapSchema,
    FixedSequenceSchema,
    GenericMapSchema,
    GenericSetSchema,
    MaybeSchema,
    PredicateSchema,
    ScalarSchema,
    Schema,
    VariableSequenceSchema,
)

SEQUENCE_TYPES = (list, tuple)
SET_TYPES = (set, frozenset)


def is_instance_of(value: Any, type_: type) -> bool:
    """isinstance() that refuses bool where a number is expected."""
    if isinstance(value, bool) and type_ in (int, float):
        return False
    return isinstance(value, type_)


def wrong_type(value: Any, expected: str) -> ErrorDetails:
    return ErrorDetails(value, f"is not {expected}", kind=ErrorKind.WRONG_TYPE)


def validate_node(schema: Schema, value: Any) -> ErrorDetails | None:
    """Validate value against schema.

    Args:
        schema: Built schema (shorthand is not accepted here)
        value: Any in-memory value

    Returns:
        None if value conforms, else the first failure with its key path
    """
    match schema:
        case ScalarSchema():
            if is_instance_of(value, schema.type_):
                return None
            return wrong_type(value, f"an instance of {schema.type_.__name__}")

        case FixedSequenceSchema():
            if not isinstance(value, SEQUENCE_TYPES):
                return wrong_type(value, "a sequence")
            if len(value) != len(schema.items):
                return ErrorDetails(
                    value,
                    f"does not have exactly {len(schema.items)} elements",
                    kind=ErrorKind.WRONG_LENGTH,
                )
            for index, (item_schema, element) in enumerate(zip(schema.items, value)):
                error = validate_node(item_schema, element)
                if error is not None:
                    return error.extend_key_path(index)
            return None

        case VariableSequenceSchema():
            if not isinstance(value, SEQUENCE_TYPES):
                return wrong_type(value, "a sequence")
            for index, element in enumerate(value):
                error = validate_node(schema.item, element)
                if error is not None:
                    return error.extend_key_path(index)
            return None

        case FixedMapSchema():
            if not isinstance(value, Mapping):
                return wrong_type(value, "a map")
            return validate_map_fields(schema, value)

        case GenericMapSchema():
            if not isinstance(value, Mapping):
                return wrong_type(value, "a map")
            for key, element in value.items():
                error = validate_node(schema.key_schema, key)
                if error is not None:
                    return error.extend_key_path(MapKey(key))
                error = validate_node(schema.value_schema, element)
                if error is not None:
                    return error.extend_key_path(key)
            return None

        case GenericSetSchema():
            if not isinstance(value, SET_TYPES):
                return wrong_type(value, "a set")
            # Sets have no positional index, so no path segment is added
            for element in value:
                error = validate_node(schema.item, element)
                if error is not None:
                    return error
            return None

        case PredicateSchema():
            if schema.test is not None and schema.test(value):
                return None
            reason = "does not satisfy predicate"
            if schema.name is not None:
                reason = f"{reason} {schema.name!r}"
            return ErrorDetails(value, reason, kind=ErrorKind.PREDICATE_FAILED)

        case EnumSchema():
            if schema.subschema is not None:
                error = validate_node(schema.subschema, value)
                if error is not None:
                    return error
            return check_membership(schema, value)

        case EitherSchema():
            error = None
            for alternative in schema.alternatives:
                error = validate_node(alternative, value)
                if error is None:
                    return None
            # Every alternative failed: the last one's error is reported
            return error

        case MaybeSchema():
            if value is None:
                return None
            return validate_node(schema.subschema, value)

        case BooleanSchema():
            if value is True or value is False:
                return None
            return wrong_type(value, "a boolean")

        case AnySchema():
            return None

        case _:
            return schema.validate(value)


def validate_map_fields(schema: FixedMapSchema, value: Mapping[Any, Any]) -> ErrorDetails | None:
    """Check the key set of a fixed map, then each declared value."""
    unexpected = [key for key in value if schema.field_for(key) is None]
    if unexpected:
        return ErrorDetails(
            value,
            f"has unexpected keys {unexpected!r}",
            kind=ErrorKind.UNEXPECTED_KEYS,
        )

    missing = [key for key in schema.required_keys if key not in value]
    if missing:
        return ErrorDetails(
            value,
            f"is missing required keys {missing!r}",
            kind=ErrorKind.MISSING_KEYS,
        )

    for map_field in schema.fields:
        if map_field.key not in value:
            continue
        error = validate_node(map_field.schema, value[map_field.key])
        if error is not None:
            return error.extend_key_path(map_field.key)
    return None


def check_membership(schema: EnumSchema, value: Any) -> ErrorDetails | None:
    """Members match on exact type as well as equality, so True is not 1."""
    if any(type(member) is type(value) and member == value for member in schema.members):
        return None
    return ErrorDetails(
        value,
        f"is not one of {list(schema.members)!r}",
        kind=ErrorKind.NOT_ENUM_MEMBER,
    )
