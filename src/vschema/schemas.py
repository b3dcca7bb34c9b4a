# src/vschema/schemas.py
"""Schema variants.

Each variant is a frozen dataclass describing one shape constraint. Schemas
are built once and reused across any number of validate/coerce calls, and
may be shared between threads without locking.

Built-in variants carry no behaviour of their own: the validation and
coercion engines dispatch on their class. Custom variants subclass Schema
and override validate() (and optionally coerce()); the engines call those
methods for any class they do not recognise.

Children must already be Schema objects. Turning shorthand such as `int`
or `[str]` into schemas is the job of vschema.dsl.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from vschema.contracts.errors import InvalidSchemaError

if TYPE_CHECKING:
    from vschema.contracts.errors import ErrorDetails
    from vschema.core.config import CoercionSettings


class Schema:
    """Base class for all schema variants.

    Custom variants subclass this and implement validate(). The default
    coerce() performs no conversion and validates the value as-is.

    Example:
        @dataclass(frozen=True)
        class EvenInteger(Schema):
            dsl_name: ClassVar[str] = "even_integer"

            def validate(self, value):
                if isinstance(value, int) and value % 2 == 0:
                    return None
                return ErrorDetails(value, "is not an even integer")
    """

    # DSL method name, required only for variants registered through plugins
    dsl_name: ClassVar[str] = ""

    def validate(self, value: Any) -> "ErrorDetails | None":
        """Return the first failure in value, or None if it conforms."""
        raise NotImplementedError(f"{type(self).__name__} does not implement validate()")

    def coerce(
        self, value: Any, settings: "CoercionSettings"
    ) -> tuple[Any, "ErrorDetails | None"]:
        """Return (coerced value, None) or (original value, error)."""
        return value, self.validate(value)


class BuiltinSchema(Schema):
    """Variant handled directly by the engines."""

    def validate(self, value: Any) -> "ErrorDetails | None":
        from vschema.engine.validator import validate_node

        return validate_node(self, value)

    def coerce(
        self, value: Any, settings: "CoercionSettings"
    ) -> tuple[Any, "ErrorDetails | None"]:
        from vschema.engine.coercer import coerce_node

        return coerce_node(self, value, settings)


def _require_schema(owner: str, child: Any) -> None:
    if not isinstance(child, Schema):
        raise InvalidSchemaError(
            f"{owner} expects Schema children, got {child!r}. "
            f"Use vschema.dsl.to_schema() to build schemas from shorthand."
        )


def _tuple_of_schemas(owner: str, children: Any) -> tuple[Schema, ...]:
    children = tuple(children)
    for child in children:
        _require_schema(owner, child)
    return children


@dataclass(frozen=True, repr=False)
class ScalarSchema(BuiltinSchema):
    """Value must be an instance of type_.

    bool is never accepted where int or float is expected.
    """

    type_: type

    def __post_init__(self) -> None:
        if not isinstance(self.type_, type):
            raise InvalidSchemaError(f"ScalarSchema expects a class, got {self.type_!r}")

    def __repr__(self) -> str:
        return self.type_.__name__


@dataclass(frozen=True, repr=False)
class FixedSequenceSchema(BuiltinSchema):
    """Sequence whose element i conforms to items[i], with matching length."""

    items: tuple[Schema, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _tuple_of_schemas("FixedSequenceSchema", self.items))

    def __repr__(self) -> str:
        return "[" + ", ".join(repr(item) for item in self.items) + "]"


@dataclass(frozen=True, repr=False)
class VariableSequenceSchema(BuiltinSchema):
    """Sequence of any length whose every element conforms to item."""

    item: Schema

    def __post_init__(self) -> None:
        _require_schema("VariableSequenceSchema", self.item)

    def __repr__(self) -> str:
        return f"[{self.item!r}]"


@dataclass(frozen=True, repr=False)
class MapField:
    """One declared key of a fixed map."""

    key: Any
    schema: Schema
    required: bool = True

    def __post_init__(self) -> None:
        _require_schema("MapField", self.schema)

    def __repr__(self) -> str:
        key = repr(self.key) if self.required else f"optional({self.key!r})"
        return f"{key}: {self.schema!r}"


@dataclass(frozen=True, repr=False)
class FixedMapSchema(BuiltinSchema):
    """Map with a declared key set.

    Required keys must be present, optional keys may be omitted, and no
    other keys are allowed.
    """

    fields: tuple[MapField, ...]
    _by_key: dict[Any, MapField] = field(init=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        fields = tuple(self.fields)
        by_key: dict[Any, MapField] = {}
        for map_field in fields:
            if not isinstance(map_field, MapField):
                raise InvalidSchemaError(f"FixedMapSchema expects MapField entries, got {map_field!r}")
            if map_field.key in by_key:
                raise InvalidSchemaError(f"Duplicate key in fixed map schema: {map_field.key!r}")
            by_key[map_field.key] = map_field
        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "_by_key", by_key)

    @property
    def keys(self) -> frozenset[Any]:
        return frozenset(self._by_key)

    @property
    def required_keys(self) -> tuple[Any, ...]:
        return tuple(f.key for f in self.fields if f.required)

    def field_for(self, key: Any) -> MapField | None:
        return self._by_key.get(key)

    def __repr__(self) -> str:
        return "{" + ", ".join(repr(f) for f in self.fields) + "}"


@dataclass(frozen=True, repr=False)
class GenericMapSchema(BuiltinSchema):
    """Map of arbitrary size; every key and every value conforms."""

    key_schema: Schema
    value_schema: Schema

    def __post_init__(self) -> None:
        _require_schema("GenericMapSchema", self.key_schema)
        _require_schema("GenericMapSchema", self.value_schema)

    def __repr__(self) -> str:
        return f"hash_of({self.key_schema!r} => {self.value_schema!r})"


@dataclass(frozen=True, repr=False)
class GenericSetSchema(BuiltinSchema):
    """Set whose every element conforms to item."""

    item: Schema

    def __post_init__(self) -> None:
        _require_schema("GenericSetSchema", self.item)

    def __repr__(self) -> str:
        return f"set_of({self.item!r})"


@dataclass(frozen=True, repr=False)
class PredicateSchema(BuiltinSchema):
    """Value must make test return a truthy result.

    A predicate without a test accepts nothing.
    """

    test: Callable[[Any], Any] | None = None
    name: str | None = None

    def __repr__(self) -> str:
        if self.name is None:
            return "predicate"
        return f"predicate({self.name!r})"


@dataclass(frozen=True, repr=False)
class EnumSchema(BuiltinSchema):
    """Value must equal one of members.

    With a subschema, validation also checks the value against it, and
    coercion converts the value through it before the membership check.
    """

    members: tuple[Any, ...]
    subschema: Schema | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", tuple(self.members))
        if self.subschema is not None:
            _require_schema("EnumSchema", self.subschema)

    def __repr__(self) -> str:
        members = repr(list(self.members))
        if self.subschema is None:
            return f"enum({members})"
        return f"enum({members}, {self.subschema!r})"


@dataclass(frozen=True, repr=False)
class EitherSchema(BuiltinSchema):
    """Value must conform to at least one alternative, tried in order."""

    alternatives: tuple[Schema, ...]

    def __post_init__(self) -> None:
        alternatives = _tuple_of_schemas("EitherSchema", self.alternatives)
        if len(alternatives) < 2:
            raise InvalidSchemaError(
                f"either() needs at least two alternatives, got {len(alternatives)}"
            )
        object.__setattr__(self, "alternatives", alternatives)

    def __repr__(self) -> str:
        return "either(" + ", ".join(repr(a) for a in self.alternatives) + ")"


@dataclass(frozen=True, repr=False)
class MaybeSchema(BuiltinSchema):
    """Value is None or conforms to subschema."""

    subschema: Schema

    def __post_init__(self) -> None:
        _require_schema("MaybeSchema", self.subschema)

    def __repr__(self) -> str:
        return f"maybe({self.subschema!r})"


@dataclass(frozen=True, repr=False)
class BooleanSchema(BuiltinSchema):
    """Value is exactly True or False."""

    def __repr__(self) -> str:
        return "boolean"


@dataclass(frozen=True, repr=False)
class AnySchema(BuiltinSchema):
    """Every value conforms."""

    def __repr__(self) -> str:
        return "any"


BOOLEAN = BooleanSchema()
ANY = AnySchema()
