# src/vschema/core/config.py
"""
Coercion settings and loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction, so one instance can be
shared by every coerce call.
"""

from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field, ValidationError


class SettingsError(Exception):
    """Raised when coercion settings are invalid."""

    pass


class CoercionSettings(BaseModel):
    """Switches for the conversions the coercion engine may attempt.

    Every conversion is enabled by default. Disabling one makes the engine
    fall back to validating the value as-is wherever that conversion would
    have applied.

    Example YAML:
        parse_numbers: true
        parse_booleans: false
        strip_unknown_keys: false
    """

    model_config = {"frozen": True, "extra": "forbid"}

    parse_numbers: bool = Field(
        default=True,
        description="Parse text into int/float targets",
    )
    widen_integers: bool = Field(
        default=True,
        description="Convert int to float for float targets",
    )
    parse_booleans: bool = Field(
        default=True,
        description="Convert the exact strings 'true'/'false' to booleans",
    )
    stringify_atoms: bool = Field(
        default=True,
        description="Convert enum members to text and text to enum members",
    )
    convert_collections: bool = Field(
        default=True,
        description="Convert sets to sequences and sequences to sets",
    )
    match_textual_keys: bool = Field(
        default=True,
        description="Map textual keys of fixed maps back to the declared keys",
    )
    strip_unknown_keys: bool = Field(
        default=True,
        description="Drop undeclared fixed-map keys instead of failing",
    )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create settings from a dict with a clear error on validation failure.

        Args:
            config: Dictionary of setting values.

        Returns:
            Validated settings instance.

        Raises:
            SettingsError: If the settings are invalid.
        """
        try:
            return cls(**config)
        except ValidationError as e:
            raise SettingsError(f"Invalid coercion settings: {e}") from e


DEFAULT_SETTINGS = CoercionSettings()


def load_settings(config_path: Path) -> CoercionSettings:
    """Load settings from a YAML/TOML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (VSCHEMA_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic model - lowest priority

    Args:
        config_path: Path to the configuration file

    Returns:
        Validated CoercionSettings instance

    Raises:
        SettingsError: If the settings fail Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="VSCHEMA",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {
        "LOAD_DOTENV",
        "ENVIRONMENTS",
        "SETTINGS_FILES",
        "MERGE_ENABLED",
        "ENVVAR_PREFIX",
    }
    raw_config = {
        k.lower(): v
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys and not k.endswith("_FOR_DYNACONF")
    }
    return CoercionSettings.from_dict(raw_config)
