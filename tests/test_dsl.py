# tests/test_dsl.py
"""Tests for the schema construction layer."""

from enum import Enum

import pytest

from vschema.plugins.manager import ExtensionManager


class Color(Enum):
    RED = "red"


class TestToSchema:
    """Shorthand literals become schema objects."""

    def test_schema_passes_through(self) -> None:
        from vschema.dsl import to_schema
        from vschema.schemas import ScalarSchema

        schema = ScalarSchema(int)
        assert to_schema(schema) is schema

    def test_scalar_types(self) -> None:
        from vschema.dsl import to_schema
        from vschema.schemas import ScalarSchema

        assert to_schema(int) == ScalarSchema(int)
        assert to_schema(Color) == ScalarSchema(Color)

    def test_special_types(self) -> None:
        from vschema.dsl import to_schema
        from vschema.schemas import (
            ANY,
            BOOLEAN,
            GenericMapSchema,
            GenericSetSchema,
            VariableSequenceSchema,
        )

        assert to_schema(bool) is BOOLEAN
        assert to_schema(object) is ANY
        assert to_schema(list) == VariableSequenceSchema(ANY)
        assert to_schema(set) == GenericSetSchema(ANY)
        assert to_schema(frozenset) == GenericSetSchema(ANY)
        assert to_schema(dict) == GenericMapSchema(ANY, ANY)

    def test_lists(self) -> None:
        from vschema.dsl import to_schema
        from vschema.schemas import FixedSequenceSchema, ScalarSchema, VariableSequenceSchema

        assert to_schema([str]) == VariableSequenceSchema(ScalarSchema(str))
        assert to_schema([str, int]) == FixedSequenceSchema((ScalarSchema(str), ScalarSchema(int)))
        assert to_schema([]) == FixedSequenceSchema(())

    def test_tuples_are_fixed(self) -> None:
        from vschema.dsl import to_schema
        from vschema.schemas import FixedSequenceSchema, ScalarSchema

        assert to_schema((str,)) == FixedSequenceSchema((ScalarSchema(str),))

    def test_dicts(self) -> None:
        from vschema.dsl import optional, to_schema
        from vschema.schemas import FixedMapSchema, MapField, ScalarSchema

        schema = to_schema({"name": str, optional("age"): int})
        assert schema == FixedMapSchema(
            (MapField("name", ScalarSchema(str)), MapField("age", ScalarSchema(int), required=False))
        )

    def test_unrecognised_shorthand(self) -> None:
        from vschema.contracts import InvalidSchemaError
        from vschema.dsl import to_schema

        with pytest.raises(InvalidSchemaError, match="Cannot build a schema"):
            to_schema(42)

    def test_optional_repr(self) -> None:
        from vschema.dsl import optional

        assert repr(optional("a")) == "optional('a')"


class TestDSL:
    """Builder methods."""

    def test_hash_of_forms(self) -> None:
        from vschema.dsl import DSL
        from vschema.schemas import GenericMapSchema, ScalarSchema

        d = DSL()
        expected = GenericMapSchema(ScalarSchema(str), ScalarSchema(int))
        assert d.hash_of({str: int}) == expected
        assert d.hash_of(str, int) == expected

    def test_hash_of_rejects_multi_entry_mapping(self) -> None:
        from vschema.contracts import InvalidSchemaError
        from vschema.dsl import DSL

        with pytest.raises(InvalidSchemaError):
            DSL().hash_of({str: int, int: str})

    def test_predicate_decorator(self) -> None:
        from vschema.dsl import DSL
        from vschema.schemas import PredicateSchema

        d = DSL()

        @d.predicate("is even")
        def even(x: int) -> bool:
            return x % 2 == 0

        assert isinstance(even, PredicateSchema)
        assert even.name == "is even"
        assert even.test is not None
        assert even.test(4)

    def test_either_needs_two(self) -> None:
        from vschema.contracts import InvalidSchemaError
        from vschema.dsl import schema

        with pytest.raises(InvalidSchemaError):
            schema(lambda d: d.either(str))

    def test_unknown_builder(self) -> None:
        from vschema.dsl import DSL

        with pytest.raises(AttributeError, match="no_such_method"):
            DSL().no_such_method()


class TestSchemaFunction:
    """schema() runs DSL blocks."""

    def test_plain_shorthand(self) -> None:
        from vschema.dsl import schema
        from vschema.schemas import ScalarSchema

        assert schema(int) == ScalarSchema(int)
        assert schema({"a": int}) == schema(lambda d: {"a": int})

    def test_custom_dsl_class(self) -> None:
        from vschema import is_valid
        from vschema.dsl import DSL, schema

        class TestDSL(DSL):
            def even_integer(self):  # type: ignore[no-untyped-def]
                return self.predicate(lambda x: isinstance(x, int) and x % 2 == 0)

        s = schema(lambda d: d.even_integer(), TestDSL)
        assert is_valid(s, 6) is True
        assert is_valid(s, 7) is False

    def test_dsl_block_with_nested_builders(self) -> None:
        from vschema import is_valid
        from vschema.dsl import schema

        s = schema(
            lambda d: {
                "tags": d.set_of(str),
                "scores": d.hash_of({str: float}),
                d.optional("role"): d.enum(["admin", "user"]),
                "nickname": d.maybe(str),
                "flag": d.boolean(),
                "payload": d.any(),
            }
        )

        assert is_valid(
            s,
            {
                "tags": {"a"},
                "scores": {"x": 1.0},
                "nickname": None,
                "flag": False,
                "payload": [1, 2],
            },
        )


class TestExtensions:
    """Extensions contribute shorthand, DSL methods and schema types."""

    def test_shorthand_hook(self, extension_manager: ExtensionManager) -> None:
        from vschema.dsl import to_schema
        from vschema.plugins.hookspecs import hookimpl
        from vschema.schemas import PredicateSchema

        positive = PredicateSchema(lambda x: x > 0, "positive")

        class PositiveShorthand:
            @hookimpl
            def vschema_shorthand(self, spec):  # type: ignore[no-untyped-def]
                if spec == "positive":
                    return positive
                return None

        extension_manager.register(PositiveShorthand())

        assert to_schema({"n": "positive"}, extension_manager).field_for("n").schema is positive

    def test_dsl_method_hook(self, extension_manager: ExtensionManager) -> None:
        from vschema import is_valid
        from vschema.dsl import DSL, schema
        from vschema.plugins.hookspecs import hookimpl

        class ListOf:
            @hookimpl
            def vschema_dsl_methods(self):  # type: ignore[no-untyped-def]
                return {"list_of": lambda item: [item]}

        extension_manager.register(ListOf())

        s = schema(lambda d: d.list_of(int), DSL(extension_manager))
        assert is_valid(s, [1, 2])
        assert not is_valid(s, ["a"])

    def test_registered_schema_type_is_dsl_method(self, extension_manager: ExtensionManager) -> None:
        from dataclasses import dataclass
        from typing import ClassVar

        from vschema import validate
        from vschema.contracts import ErrorDetails
        from vschema.dsl import DSL, schema
        from vschema.plugins.hookspecs import hookimpl
        from vschema.schemas import Schema

        @dataclass(frozen=True)
        class MultipleOf(Schema):
            dsl_name: ClassVar[str] = "multiple_of"
            factor: int

            def validate(self, value):  # type: ignore[no-untyped-def]
                if isinstance(value, int) and value % self.factor == 0:
                    return None
                return ErrorDetails(value, f"is not a multiple of {self.factor}")

        class Multiples:
            @hookimpl
            def vschema_get_schema_types(self):  # type: ignore[no-untyped-def]
                return [MultipleOf]

        extension_manager.register(Multiples())

        s = schema(lambda d: [d.multiple_of(3)], DSL(extension_manager))
        assert validate(s, [3, 6]) is None
        error = validate(s, [3, 7])
        assert error is not None
        assert str(error) == "The value at [1] is not a multiple of 3: 7"
