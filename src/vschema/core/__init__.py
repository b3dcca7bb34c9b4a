"""Core infrastructure: coercion settings and their loading."""

from vschema.core.config import (
    DEFAULT_SETTINGS,
    CoercionSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "CoercionSettings",
    "DEFAULT_SETTINGS",
    "SettingsError",
    "load_settings",
]
