# src/vschema/engine/coercer.py
"""Coercion engine.

Walks a schema/value pair depth-first, converting values of a close type
into the exact shape the schema expects. Where no conversion applies, the
value is validated as-is, so values that already conform pass through
unchanged.

Failure policy: the first failure aborts the whole walk. The ORIGINAL value
is returned alongside the path-prefixed error, never a partially converted
one.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from vschema.contracts.enums import ErrorKind
from vschema.contracts.errors import ErrorDetails, MapKey
from vschema.core.config import CoercionSettings
from vschema.engine.validator import (
    SEQUENCE_TYPES,
    SET_TYPES,
    check_membership,
    is_instance_of,
    validate_node,
    wrong_type,
)
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

logger = logging.getLogger(__name__)

CoercionResult = tuple[Any, ErrorDetails | None]

BOOLEAN_TEXT = {"true": True, "false": False}


def coerce_node(schema: Schema, value: Any, settings: CoercionSettings) -> CoercionResult:
    """Coerce value into the shape described by schema.

    Args:
        schema: Built schema (shorthand is not accepted here)
        value: Any in-memory value
        settings: Which conversions may be attempted

    Returns:
        (coerced value, None) on success, (value, error) on failure
    """
    match schema:
        case ScalarSchema():
            return coerce_scalar(schema, value, settings)

        case BooleanSchema():
            if settings.parse_booleans and isinstance(value, str) and value in BOOLEAN_TEXT:
                return BOOLEAN_TEXT[value], None
            return value, validate_node(schema, value)

        case FixedSequenceSchema():
            candidate = as_sequence(value, settings)
            if not isinstance(candidate, SEQUENCE_TYPES):
                return value, wrong_type(value, "a sequence")
            if len(candidate) != len(schema.items):
                return value, ErrorDetails(
                    value,
                    f"does not have exactly {len(schema.items)} elements",
                    kind=ErrorKind.WRONG_LENGTH,
                )
            return coerce_elements(value, candidate, schema.items, settings)

        case VariableSequenceSchema():
            candidate = as_sequence(value, settings)
            if not isinstance(candidate, SEQUENCE_TYPES):
                return value, wrong_type(value, "a sequence")
            return coerce_elements(value, candidate, [schema.item] * len(candidate), settings)

        case FixedMapSchema():
            if not isinstance(value, Mapping):
                return value, wrong_type(value, "a map")
            return coerce_map_fields(schema, value, settings)

        case GenericMapSchema():
            if not isinstance(value, Mapping):
                return value, wrong_type(value, "a map")
            coerced_map: dict[Any, Any] = {}
            for key, element in value.items():
                new_key, error = coerce_node(schema.key_schema, key, settings)
                if error is not None:
                    return value, error.extend_key_path(MapKey(key))
                new_element, error = coerce_node(schema.value_schema, element, settings)
                if error is not None:
                    return value, error.extend_key_path(key)
                if new_key in coerced_map:
                    return value, ErrorDetails(
                        key,
                        "collides with another key after coercion",
                        kind=ErrorKind.COERCION_FAILED,
                    ).extend_key_path(MapKey(key))
                coerced_map[new_key] = new_element
            return coerced_map, None

        case GenericSetSchema():
            return coerce_set(schema, value, settings)

        case EnumSchema():
            candidate = value
            if schema.subschema is not None:
                candidate, error = coerce_node(schema.subschema, value, settings)
                if error is not None:
                    return value, error
            error = check_membership(schema, candidate)
            if error is not None:
                return value, error
            return candidate, None

        case EitherSchema():
            error = None
            for alternative in schema.alternatives:
                coerced, error = coerce_node(alternative, value, settings)
                if error is None:
                    return coerced, None
                logger.debug("Alternative %r rejected %r: %s", alternative, value, error)
            # Every alternative failed: the last one's error is reported
            return value, error

        case MaybeSchema():
            if value is None:
                return None, None
            return coerce_node(schema.subschema, value, settings)

        case PredicateSchema() | AnySchema():
            return value, validate_node(schema, value)

        case _:
            return schema.coerce(value, settings)


def coercion_failed(value: Any, target: type) -> ErrorDetails:
    return ErrorDetails(
        value,
        f"could not be coerced to {target.__name__}",
        kind=ErrorKind.COERCION_FAILED,
    )


def atom_text(member: Enum) -> str:
    """Textual form of an enum member: its value if textual, else its name."""
    if isinstance(member.value, str):
        return member.value
    return member.name


def coerce_scalar(schema: ScalarSchema, value: Any, settings: CoercionSettings) -> CoercionResult:
    target = schema.type_
    if is_instance_of(value, target):
        return value, None

    if target is str and isinstance(value, Enum) and settings.stringify_atoms:
        return atom_text(value), None

    if target in (int, float) and isinstance(value, str) and settings.parse_numbers:
        try:
            return target(value), None
        except ValueError:
            return value, coercion_failed(value, target)

    if target is float and is_instance_of(value, int) and settings.widen_integers:
        try:
            return float(value), None
        except OverflowError:
            return value, coercion_failed(value, target)

    if issubclass(target, Enum) and isinstance(value, str) and settings.stringify_atoms:
        try:
            return target(value), None
        except ValueError:
            pass
        try:
            return target[value], None
        except KeyError:
            return value, coercion_failed(value, target)

    logger.debug("No conversion from %s to %s; validating as-is", type(value).__name__, target.__name__)
    return value, validate_node(schema, value)


def as_sequence(value: Any, settings: CoercionSettings) -> Any:
    """Turn a set into a list, sorted when its elements are orderable."""
    if not (settings.convert_collections and isinstance(value, SET_TYPES)):
        return value
    try:
        return sorted(value)
    except TypeError:
        return list(value)


def coerce_elements(
    original: Any,
    candidate: list[Any] | tuple[Any, ...],
    item_schemas: Any,
    settings: CoercionSettings,
) -> CoercionResult:
    coerced: list[Any] = []
    for index, (item_schema, element) in enumerate(zip(item_schemas, candidate)):
        new_element, error = coerce_node(item_schema, element, settings)
        if error is not None:
            return original, error.extend_key_path(index)
        coerced.append(new_element)
    if isinstance(candidate, tuple):
        return tuple(coerced), None
    return coerced, None


def coerce_set(schema: GenericSetSchema, value: Any, settings: CoercionSettings) -> CoercionResult:
    candidate = value
    if settings.convert_collections and isinstance(value, SEQUENCE_TYPES):
        try:
            candidate = set(value)
        except TypeError:
            return value, ErrorDetails(
                value,
                "could not be coerced to set (unhashable elements)",
                kind=ErrorKind.COERCION_FAILED,
            )
    if not isinstance(candidate, SET_TYPES):
        return value, wrong_type(value, "a set")

    coerced: set[Any] = set()
    for element in candidate:
        new_element, error = coerce_node(schema.item, element, settings)
        if error is not None:
            return value, error
        try:
            coerced.add(new_element)
        except TypeError:
            return value, ErrorDetails(
                new_element,
                "could not be added to a set (unhashable)",
                kind=ErrorKind.COERCION_FAILED,
            )
    if isinstance(candidate, frozenset):
        return frozenset(coerced), None
    return coerced, None


def key_text(key: Any) -> str:
    if isinstance(key, Enum):
        return atom_text(key)
    return str(key)


def coerce_map_fields(
    schema: FixedMapSchema, value: Mapping[Any, Any], settings: CoercionSettings
) -> CoercionResult:
    """Match keys to the declared ones, strip the rest, coerce each value."""
    matched: dict[Any, Any] = {}
    textual: list[tuple[Any, Any]] = []
    unexpected: list[Any] = []

    for key, element in value.items():
        if schema.field_for(key) is not None:
            matched[key] = element
        elif settings.match_textual_keys and isinstance(key, str):
            textual.append((key, element))
        else:
            unexpected.append(key)

    if textual:
        declared_by_text = {key_text(f.key): f.key for f in schema.fields}
        for key, element in textual:
            declared = declared_by_text.get(key)
            if declared is None:
                unexpected.append(key)
            elif declared not in matched:
                # An exact key always wins over its textual form
                matched[declared] = element

    if unexpected:
        if not settings.strip_unknown_keys:
            return value, ErrorDetails(
                value,
                f"has unexpected keys {unexpected!r}",
                kind=ErrorKind.UNEXPECTED_KEYS,
            )
        logger.debug("Stripping undeclared keys %r", unexpected)

    missing = [key for key in schema.required_keys if key not in matched]
    if missing:
        return value, ErrorDetails(
            value,
            f"is missing required keys {missing!r}",
            kind=ErrorKind.MISSING_KEYS,
        )

    coerced: dict[Any, Any] = {}
    for map_field in schema.fields:
        if map_field.key not in matched:
            continue
        new_element, error = coerce_node(map_field.schema, matched[map_field.key], settings)
        if error is not None:
            return value, error.extend_key_path(map_field.key)
        coerced[map_field.key] = new_element
    return coerced, None
