# tests/core/test_config.py
"""Tests for coercion settings and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestCoercionSettings:
    """Coercion settings validation."""

    def test_defaults_enable_everything(self) -> None:
        from vschema.core.config import CoercionSettings

        settings = CoercionSettings()
        assert settings.parse_numbers is True
        assert settings.widen_integers is True
        assert settings.parse_booleans is True
        assert settings.stringify_atoms is True
        assert settings.convert_collections is True
        assert settings.match_textual_keys is True
        assert settings.strip_unknown_keys is True

    def test_settings_are_frozen(self) -> None:
        from vschema.core.config import CoercionSettings

        settings = CoercionSettings()
        with pytest.raises(ValidationError):
            settings.parse_numbers = False  # type: ignore[misc]

    def test_unknown_fields_rejected(self) -> None:
        from vschema.core.config import CoercionSettings

        with pytest.raises(ValidationError):
            CoercionSettings(parse_dates=True)  # type: ignore[call-arg]

    def test_from_dict(self) -> None:
        from vschema.core.config import CoercionSettings

        settings = CoercionSettings.from_dict({"parse_booleans": False})
        assert settings.parse_booleans is False
        assert settings.parse_numbers is True

    def test_from_dict_wraps_errors(self) -> None:
        from vschema.core.config import CoercionSettings, SettingsError

        with pytest.raises(SettingsError, match="Invalid coercion settings"):
            CoercionSettings.from_dict({"parse_booleans": "sometimes"})


class TestLoadSettings:
    """Loading settings from file with environment overrides."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        from vschema.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parse_numbers: false
strip_unknown_keys: false
""")
        settings = load_settings(config_file)
        assert settings.parse_numbers is False
        assert settings.strip_unknown_keys is False
        assert settings.parse_booleans is True

    def test_load_with_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from vschema.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parse_booleans: true
""")
        # Environment variable should override YAML
        monkeypatch.setenv("VSCHEMA_PARSE_BOOLEANS", "false")

        settings = load_settings(config_file)
        assert settings.parse_booleans is False

    def test_load_validates_schema(self, tmp_path: Path) -> None:
        from vschema.core.config import SettingsError, load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parse_dates: true
""")
        with pytest.raises(SettingsError):
            load_settings(config_file)

    def test_load_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        from vschema.core.config import load_settings

        missing_file = tmp_path / "nonexistent.yaml"
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(missing_file)

    def test_loaded_settings_drive_coercion(self, tmp_path: Path) -> None:
        from vschema import coerce
        from vschema.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parse_numbers: false
""")
        settings = load_settings(config_file)

        value, error = coerce(int, "5", settings)
        assert value == "5"
        assert error is not None
