# src/vschema/plugins/__init__.py
"""Extension system: custom schema variants, shorthand and DSL methods via pluggy.

- Hookspecs: pluggy hook definitions
- Manager: Extension registration and lookup
"""

from vschema.plugins.hookspecs import hookimpl, hookspec
from vschema.plugins.manager import ExtensionManager, get_default_manager

__all__ = [
    "ExtensionManager",
    "get_default_manager",
    "hookimpl",
    "hookspec",
]
