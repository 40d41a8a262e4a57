"""Tests for generator configuration loading."""

import json

import pytest

from optionhandler.codegen.core.config import (
    ConfigError,
    ConfigManager,
    EXAMPLE_CONFIG,
    GPL_HEADER,
    GeneratorConfig,
    load_config,
)


class TestConfigManager:
    """Test ConfigManager class."""

    def setup_method(self):
        self.manager = ConfigManager()

    def test_defaults(self):
        config = self.manager.get_config("python")

        assert config.codec_module == "optionhandler.codec"
        assert config.module_case == "snake"
        assert config.add_comments is True
        assert config.copyright_year is None
        assert config.license_header == ""

    def test_unknown_language_uses_base_defaults(self):
        assert self.manager.get_config("cobol") == GeneratorConfig()

    def test_overrides(self):
        config = self.manager.get_config("python", {"add_comments": False, "copyright_year": 2020})

        assert config.add_comments is False
        assert config.copyright_year == 2020

    def test_config_file_then_overrides(self, tmp_path):
        path = tmp_path / "gen.json"
        path.write_text(json.dumps({"module_case": "original", "add_comments": False}))

        config = self.manager.get_config("python", {"add_comments": True}, path)

        assert config.module_case == "original"
        assert config.add_comments is True

    def test_unknown_keys_go_to_custom(self):
        config = self.manager.get_config("python", {"type_hints": False})

        assert config.custom == {"type_hints": False}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            self.manager.get_config("python", config_file=tmp_path / "missing.json")

    def test_not_json_extension(self, tmp_path):
        path = tmp_path / "gen.yaml"
        path.write_text("module_case: snake")

        with pytest.raises(ConfigError, match="must be JSON"):
            self.manager.get_config("python", config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "gen.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            self.manager.get_config("python", config_file=path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "gen.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            self.manager.get_config("python", config_file=path)

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "saved.json"
        config = GeneratorConfig(license_header=GPL_HEADER, copyright_year=2024, custom={"type_hints": False})

        self.manager.save_config(config, path)

        assert self.manager.get_config("python", config_file=path) == config

    def test_validate_config(self):
        assert self.manager.validate_config(GeneratorConfig()) == []

        warnings = self.manager.validate_config(
            GeneratorConfig(module_case="kebab", codec_module="not a module", copyright_year="2024")
        )
        assert len(warnings) == 3

    def test_list_languages(self):
        assert self.manager.list_languages() == ["python"]

    def test_example_config_is_valid(self):
        config = self.manager.get_config("python", EXAMPLE_CONFIG)

        assert self.manager.validate_config(config) == []
        assert config.license_header.startswith("This program is free software")


def test_load_config():
    config = load_config("python", {"copyright_year": 1999})

    assert isinstance(config, GeneratorConfig)
    assert config.copyright_year == 1999
