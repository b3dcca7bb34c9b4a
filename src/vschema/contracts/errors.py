# src/vschema/contracts/errors.py
"""Error model shared by every schema variant.

ErrorDetails is created at the exact point of failure with an empty key
path. Each enclosing composite schema prepends its own key or index as the
error travels back up, always producing a new instance. Either schemas may
discard errors from failed branches, so an instance must never be mutated
after construction.
"""

from dataclasses import dataclass, replace
from typing import Any

from vschema.contracts.enums import ErrorKind


@dataclass(frozen=True)
class MapKey:
    """Path segment marking that a generic map KEY failed, not its value."""

    key: Any

    def __repr__(self) -> str:
        return f"MapKey({self.key!r})"


@dataclass(frozen=True)
class ErrorDetails:
    """Structured description of the first failure found in a value.

    Attributes:
        failing_value: The innermost value that failed
        reason: Human-readable reason, phrased to follow "The value ..."
        key_path: Keys/indices from the root to failing_value, outermost first
        kind: Failure category, None for errors built by custom schemas
    """

    failing_value: Any
    reason: str
    key_path: tuple[Any, ...] = ()
    kind: ErrorKind | None = None

    def extend_key_path(self, segment: Any) -> "ErrorDetails":
        """Return a copy with segment prepended to the key path."""
        return replace(self, key_path=(segment, *self.key_path))

    def __str__(self) -> str:
        if not self.key_path:
            return f"The root value {self.reason}: {self.failing_value!r}"
        return (
            f"The value at {list(self.key_path)!r} {self.reason}: "
            f"{self.failing_value!r}"
        )


class ValidationError(Exception):
    """Raised by validate_strict/coerce_strict when a value does not conform."""

    def __init__(self, details: ErrorDetails) -> None:
        super().__init__(str(details))
        self.details = details


class InvalidSchemaError(ValueError):
    """Raised when a schema cannot be constructed from the given parts."""

    pass
