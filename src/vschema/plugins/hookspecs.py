# src/vschema/plugins/hookspecs.py
"""pluggy hook specifications for vschema extensions.

Extensions implement these hooks to teach the schema construction layer
about custom schema variants, extra shorthand, and extra DSL methods.

Usage (implementing an extension):
    from vschema.plugins.hookspecs import hookimpl

    class MyExtension:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def vschema_get_schema_types(self):
            return [EvenInteger]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks extension implementations of those hooks.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from vschema.schemas import Schema

# Project name for pluggy
PROJECT_NAME = "vschema"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for extensions to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class VschemaSchemaSpec:
    """Hook specifications for custom schema variants."""

    @hookspec
    def vschema_get_schema_types(self) -> list[type["Schema"]]:  # type: ignore[empty-body]
        """Return custom schema classes.

        Each class must define a non-empty `dsl_name`; it becomes a DSL
        method that constructs the schema.

        Returns:
            List of Schema subclasses (not instances)
        """


class VschemaConstructionSpec:
    """Hook specifications for the schema construction layer."""

    @hookspec(firstresult=True)
    def vschema_shorthand(self, spec: Any) -> "Schema | None":
        """Build a schema from shorthand the core does not recognise.

        Args:
            spec: The shorthand value

        Returns:
            A Schema, or None to let other extensions try
        """

    @hookspec
    def vschema_dsl_methods(self) -> dict[str, Callable[..., Any]]:  # type: ignore[empty-body]
        """Return extra DSL builder methods.

        Returns:
            Mapping of method name to a callable returning a schema or shorthand
        """
