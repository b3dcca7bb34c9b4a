"""Shared contracts for the error model.

Import pattern:
    from vschema.contracts import ErrorDetails, ErrorKind, ValidationError
"""

from vschema.contracts.enums import ErrorKind
from vschema.contracts.errors import (
    ErrorDetails,
    InvalidSchemaError,
    MapKey,
    ValidationError,
)

__all__ = [
    # enums
    "ErrorKind",
    # errors
    "ErrorDetails",
    "InvalidSchemaError",
    "MapKey",
    "ValidationError",
]
