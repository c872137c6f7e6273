"""Unit tests for configuration management."""

import json

import pytest

from signcheck.config import (
    LogLevel,
    ParserConfig,
    Profile,
    ReportFormat,
    SigncheckConfig,
    ValidationConfig,
    create_default_config,
    find_config_file,
    load_config,
)


class TestSigncheckConfig:
    """Test complete SigncheckConfig model."""

    def test_defaults(self):
        """Test zero-config defaults."""
        config = create_default_config()

        assert config.validation.profiles == ["level1"]
        assert config.validation.fail_on_warnings is False
        assert config.parser.max_bytes == 10 * 1024 * 1024
        assert config.output.format == "table"
        assert config.logging.level == "warn"

    def test_config_from_dict(self):
        """Test camelCase aliases and enum values."""
        config = SigncheckConfig(**{
            "validation": {
                "profiles": ["level2-recipe", "level2-discovery"],
                "failOnWarnings": True
            },
            "parser": {"maxBytes": 2048},
            "output": {"format": "json"},
            "logging": {"level": "debug"}
        })

        assert config.validation.profiles == [Profile.LEVEL2_RECIPE.value, Profile.LEVEL2_DISCOVERY.value]
        assert config.validation.fail_on_warnings is True
        assert config.parser.max_bytes == 2048
        assert config.output.format == ReportFormat.JSON.value
        assert config.logging.level == LogLevel.DEBUG.value

    def test_populate_by_name(self):
        """Test snake_case field names are accepted too."""
        assert ValidationConfig(fail_on_warnings=True).fail_on_warnings is True
        assert ParserConfig(max_bytes=10).to_parser_config() == {"max_bytes": 10}

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            SigncheckConfig(**{"unknown": {}})

    @pytest.mark.parametrize("section,value", [
        ("validation", {"failOnWarning": True}),
        ("parser", {"maxByte": 10}),
        ("output", {"fromat": "json"}),
        ("logging", {"lvl": "debug"}),
    ])
    def test_misspelled_section_keys_forbidden(self, section, value):
        """Test unknown keys inside a section are rejected, not ignored."""
        with pytest.raises(ValueError):
            SigncheckConfig(**{section: value})

    def test_empty_profiles_rejected(self):
        with pytest.raises(ValueError, match="at least one validation profile"):
            ValidationConfig(profiles=[])

    def test_unknown_profile_rejected(self):
        with pytest.raises(ValueError):
            ValidationConfig(profiles=["level3"])

    def test_max_bytes_must_be_positive(self):
        with pytest.raises(ValueError, match="max_bytes must be >= 1"):
            ParserConfig(max_bytes=0)


class TestConfigLoading:
    """Test configuration discovery and loading."""

    def test_find_config_in_parent(self, tmp_path):
        """Test the search walks up the directory tree."""
        config_file = tmp_path / ".signcheck.json"
        config_file.write_text("{}", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config_file.resolve()

    def test_find_config_missing(self, tmp_path):
        """Test None when no file exists up to the root."""
        found = find_config_file(tmp_path)
        assert found is None or not str(found).startswith(str(tmp_path.resolve()))

    def test_load_config_file(self, tmp_path):
        config_file = tmp_path / ".signcheck.json"
        config_file.write_text(json.dumps({"validation": {"profiles": ["level2-discovery"]}}), encoding="utf-8")

        config = load_config(config_file)

        assert config.validation.profiles == ["level2-discovery"]

    def test_load_missing_file_falls_back_to_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.json")
        assert config == create_default_config()

    def test_load_invalid_json(self, tmp_path):
        config_file = tmp_path / ".signcheck.json"
        config_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(config_file)

    def test_load_invalid_content(self, tmp_path):
        config_file = tmp_path / ".signcheck.json"
        config_file.write_text(json.dumps({"parser": {"maxBytes": -1}}), encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to load config"):
            load_config(config_file)

    def test_load_misspelled_key(self, tmp_path):
        config_file = tmp_path / ".signcheck.json"
        config_file.write_text(json.dumps({"validation": {"failOnWarning": True}}), encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to load config"):
            load_config(config_file)
