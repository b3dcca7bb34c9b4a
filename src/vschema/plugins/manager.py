# src/vschema/plugins/manager.py
"""Extension manager for registration and lookup.

Uses pluggy for hook-based extension registration.
"""

import logging
from collections.abc import Callable
from typing import Any

import pluggy

from vschema.plugins.hookspecs import (
    PROJECT_NAME,
    VschemaConstructionSpec,
    VschemaSchemaSpec,
)
from vschema.schemas import Schema

logger = logging.getLogger(__name__)


class ExtensionManager:
    """Manages extension registration and lookup.

    Usage:
        manager = ExtensionManager()
        manager.register(MyExtension())

        schema_cls = manager.get_schema_type_by_name("even_integer")
        built = manager.convert(some_shorthand)
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)

        # Register hookspecs
        self._pm.add_hookspecs(VschemaSchemaSpec)
        self._pm.add_hookspecs(VschemaConstructionSpec)

        # Caches - map name to class/callable for duplicate detection
        self._schema_types: dict[str, type[Schema]] = {}
        self._dsl_methods: dict[str, Callable[..., Any]] = {}

    def register(self, plugin: Any) -> None:
        """Register an extension.

        Args:
            plugin: Extension instance implementing hook methods

        Raises:
            ValueError: If the extension contributes invalid or duplicate names
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            self._pm.unregister(plugin)
            raise
        logger.debug("Registered vschema extension %r", plugin)

    def unregister(self, plugin: Any) -> None:
        """Remove a previously registered extension."""
        self._pm.unregister(plugin)
        self._refresh_caches()

    def _refresh_caches(self) -> None:
        """Refresh caches from hooks.

        Raises:
            ValueError: If a schema type lacks a name, or a name is registered twice
        """
        new_schema_types: dict[str, type[Schema]] = {}
        new_dsl_methods: dict[str, Callable[..., Any]] = {}

        for schema_types in self._pm.hook.vschema_get_schema_types():
            for cls in schema_types:
                if not (isinstance(cls, type) and issubclass(cls, Schema)):
                    raise ValueError(f"Schema extension {cls!r} must subclass vschema.schemas.Schema")
                name = cls.dsl_name
                if not name:
                    raise ValueError(
                        f"Schema extension {cls.__name__} must define 'dsl_name'. "
                        f"Add: dsl_name = 'your_schema_name' to the class."
                    )
                if name in new_schema_types:
                    raise ValueError(
                        f"Duplicate schema type name: '{name}'. "
                        f"Already registered by {new_schema_types[name].__name__}"
                    )
                new_schema_types[name] = cls

        for methods in self._pm.hook.vschema_dsl_methods():
            for name, method in methods.items():
                if name in new_dsl_methods or name in new_schema_types:
                    raise ValueError(f"Duplicate DSL method name: '{name}'")
                new_dsl_methods[name] = method

        # All validated, update caches
        self._schema_types = new_schema_types
        self._dsl_methods = new_dsl_methods

    # === Getters ===

    def get_schema_types(self) -> list[type[Schema]]:
        """Get all registered custom schema classes."""
        return list(self._schema_types.values())

    def get_schema_type_by_name(self, name: str) -> type[Schema] | None:
        """Get custom schema class by its DSL name."""
        return self._schema_types.get(name)

    def get_dsl_method(self, name: str) -> Callable[..., Any] | None:
        """Get a DSL builder method by name.

        Registered schema classes are returned as their own constructors.
        """
        method = self._dsl_methods.get(name)
        if method is not None:
            return method
        return self._schema_types.get(name)

    def dsl_method_names(self) -> list[str]:
        return sorted([*self._dsl_methods, *self._schema_types])

    # === Construction ===

    def convert(self, spec: Any) -> Schema | None:
        """Ask extensions to build a schema from unrecognised shorthand."""
        result = self._pm.hook.vschema_shorthand(spec=spec)
        if result is not None and not isinstance(result, Schema):
            raise ValueError(f"vschema_shorthand returned {result!r}, which is not a Schema")
        return result


_default_manager = ExtensionManager()


def get_default_manager() -> ExtensionManager:
    """Process-wide manager used when no manager is passed explicitly."""
    return _default_manager
