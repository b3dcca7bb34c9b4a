"""Failure categories reported by the validation and coercion engines.

Every ErrorDetails produced by a built-in schema carries one of these.
Custom schemas may leave the kind unset.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of the first failure found in a value.

    Uses (str, Enum) so kinds compare equal to their plain string values
    when callers log or serialize them.

    Values:
        WRONG_TYPE: Value is not an instance of the expected type
        WRONG_LENGTH: Fixed-length sequence has the wrong number of elements
        UNEXPECTED_KEYS: Fixed map contains undeclared keys
        MISSING_KEYS: Fixed map lacks one or more required keys
        PREDICATE_FAILED: Predicate test returned a falsy result
        NOT_ENUM_MEMBER: Value is not one of the enum's members
        COERCION_FAILED: A conversion was attempted and could not be completed
    """

    WRONG_TYPE = "wrong_type"
    WRONG_LENGTH = "wrong_length"
    UNEXPECTED_KEYS = "unexpected_keys"
    MISSING_KEYS = "missing_keys"
    PREDICATE_FAILED = "predicate_failed"
    NOT_ENUM_MEMBER = "not_enum_member"
    COERCION_FAILED = "coercion_failed"
