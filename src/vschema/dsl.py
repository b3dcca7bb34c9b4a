"""Schema construction layer: shorthand literals and the builder DSL.

Shorthand accepted by to_schema():

    int, str, float, MyEnum     -> ScalarSchema
    bool                        -> BOOLEAN
    object                      -> ANY
    list, tuple                 -> [any]
    set, frozenset              -> set_of(any)
    dict                        -> hash_of(any => any)
    [x]                         -> sequence of x, any length
    [x, y], (x,), (x, y)        -> fixed-length sequence
    {"a": x, optional("b"): y}  -> fixed map with required "a", optional "b"

The DSL adds the variants that have no literal form:

    s = schema(lambda d: {
        "name": str,
        "tags": d.set_of(str),
        d.optional("role"): d.enum(["admin", "user"]),
    })

Extensions registered with the ExtensionManager can contribute shorthand
converters and extra DSL methods.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from vschema.contracts.errors import InvalidSchemaError
from vschema.plugins.manager import ExtensionManager, get_default_manager
from vschema.schemas import (
    ANY,
    BOOLEAN,
    EitherSchema,
    EnumSchema,
    FixedMapSchema,
    FixedSequenceSchema,
    GenericMapSchema,
    GenericSetSchema,
    MapField,
    MaybeSchema,
    PredicateSchema,
    ScalarSchema,
    Schema,
    VariableSequenceSchema,
)

_COLLECTION_SHORTHAND: dict[type, Schema] = {
    bool: BOOLEAN,
    object: ANY,
    list: VariableSequenceSchema(ANY),
    tuple: VariableSequenceSchema(ANY),
    set: GenericSetSchema(ANY),
    frozenset: GenericSetSchema(ANY),
    dict: GenericMapSchema(ANY, ANY),
}

_MISSING = object()


@dataclass(frozen=True)
class OptionalKey:
    """Marks a fixed-map key as optional in dict shorthand."""

    key: Any

    def __repr__(self) -> str:
        return f"optional({self.key!r})"


def optional(key: Any) -> OptionalKey:
    """Mark key as optional inside a fixed-map literal."""
    return OptionalKey(key)


def to_schema(spec: Any, manager: ExtensionManager | None = None) -> Schema:
    """Build a schema from shorthand.

    Args:
        spec: A Schema, or any shorthand listed in the module docstring
        manager: Extension manager consulted for unrecognised shorthand

    Returns:
        The built schema (spec itself if it already is one)

    Raises:
        InvalidSchemaError: If spec is not a schema and no rule converts it
    """
    if isinstance(spec, Schema):
        return spec

    if manager is None:
        manager = get_default_manager()

    converted = manager.convert(spec)
    if converted is not None:
        return converted

    if isinstance(spec, type):
        if spec in _COLLECTION_SHORTHAND:
            return _COLLECTION_SHORTHAND[spec]
        return ScalarSchema(spec)

    if isinstance(spec, list):
        if len(spec) == 1:
            return VariableSequenceSchema(to_schema(spec[0], manager))
        return FixedSequenceSchema(tuple(to_schema(item, manager) for item in spec))

    if isinstance(spec, tuple):
        return FixedSequenceSchema(tuple(to_schema(item, manager) for item in spec))

    if isinstance(spec, Mapping):
        fields = []
        for key, child in spec.items():
            if isinstance(key, OptionalKey):
                fields.append(MapField(key.key, to_schema(child, manager), required=False))
            else:
                fields.append(MapField(key, to_schema(child, manager)))
        return FixedMapSchema(tuple(fields))

    raise InvalidSchemaError(f"Cannot build a schema from {spec!r}")


class DSL:
    """Builder methods for schemas without a literal form.

    Subclass to add domain-specific methods:

        class MyDSL(DSL):
            def even_integer(self):
                return self.predicate(lambda x: isinstance(x, int) and x % 2 == 0, "even")

    Methods contributed by extensions (and registered custom schema classes,
    by their dsl_name) are reachable as attributes as well.
    """

    def __init__(self, manager: ExtensionManager | None = None) -> None:
        self._manager = manager if manager is not None else get_default_manager()

    def __getattr__(self, name: str) -> Callable[..., Schema]:
        if name.startswith("_"):
            raise AttributeError(name)
        method = self._manager.get_dsl_method(name)
        if method is None:
            raise AttributeError(f"{type(self).__name__} has no schema builder {name!r}")

        def build(*args: Any, **kwargs: Any) -> Schema:
            return self.schema(method(*args, **kwargs))

        return build

    def schema(self, spec: Any) -> Schema:
        """Build a schema from shorthand using this DSL's extensions."""
        return to_schema(spec, self._manager)

    def hash_of(self, key_or_mapping: Any, value: Any = _MISSING) -> GenericMapSchema:
        """Map of arbitrary keys: hash_of({str: int}) or hash_of(str, int)."""
        if value is _MISSING:
            if not isinstance(key_or_mapping, Mapping) or len(key_or_mapping) != 1:
                raise InvalidSchemaError(
                    f"hash_of() expects a single-entry mapping, got {key_or_mapping!r}"
                )
            ((key_or_mapping, value),) = key_or_mapping.items()
        return GenericMapSchema(self.schema(key_or_mapping), self.schema(value))

    def set_of(self, item: Any) -> GenericSetSchema:
        return GenericSetSchema(self.schema(item))

    def predicate(
        self, test: Callable[[Any], Any] | str | None = None, name: str | None = None
    ) -> Any:
        """Build a predicate schema.

        predicate(fn, "name") builds directly. predicate("name") returns a
        decorator, so a named test can be written as a function:

            @d.predicate("is even")
            def even(x):
                return x % 2 == 0
        """
        if callable(test):
            return PredicateSchema(test, name)
        if test is not None:
            name = test

        def decorate(fn: Callable[[Any], Any]) -> PredicateSchema:
            return PredicateSchema(fn, name)

        return decorate

    def enum(self, members: Any, subschema: Any = None) -> EnumSchema:
        if subschema is None:
            return EnumSchema(tuple(members))
        return EnumSchema(tuple(members), self.schema(subschema))

    def either(self, *alternatives: Any) -> EitherSchema:
        return EitherSchema(tuple(self.schema(a) for a in alternatives))

    def maybe(self, item: Any) -> MaybeSchema:
        return MaybeSchema(self.schema(item))

    def boolean(self) -> Schema:
        return BOOLEAN

    def any(self) -> Schema:
        return ANY

    def optional(self, key: Any) -> OptionalKey:
        return OptionalKey(key)


def schema(build: Any, dsl: DSL | type[DSL] | None = None) -> Schema:
    """Build a schema from a DSL block or plain shorthand.

    Args:
        build: A callable taking the DSL and returning a schema or
            shorthand, or the shorthand itself
        dsl: DSL instance or subclass to pass to build (default: DSL())

    Returns:
        The built schema
    """
    if dsl is None:
        dsl = DSL()
    elif isinstance(dsl, type):
        dsl = dsl()
    if callable(build) and not isinstance(build, (type, Schema)):
        build = build(dsl)
    return dsl.schema(build)
