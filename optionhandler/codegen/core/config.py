"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, asdict


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Header settings
    license_header: str = ""
    copyright_year: Optional[int] = None  # None: current year

    # Runtime settings
    codec_module: str = "optionhandler.codec"

    # Output settings
    module_case: str = "snake"  # snake, original

    # Code settings
    add_comments: bool = True
    generate_properties: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["python"] = {
            "codec_module": "optionhandler.codec",
            "module_case": "snake",
            "add_comments": True,
            "generate_properties": True,
        }

    def get_config(self, language: str = "python",
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = self._configs.get(language, {}).copy()

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.module_case not in {"snake", "original"}:
            warnings.append(f"Invalid module_case: {config.module_case}")

        if not all(part.isidentifier() for part in config.codec_module.split(".")):
            warnings.append(f"Invalid codec_module: {config.codec_module}")

        if config.copyright_year is not None and not isinstance(config.copyright_year, int):
            warnings.append(f"Invalid copyright_year: {config.copyright_year}")

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: str = "python",
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)


# GPL v3 preamble, usable as license_header
GPL_HEADER = """\
This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <http://www.gnu.org/licenses/>."""

# Example configuration file for reference
EXAMPLE_CONFIG = {
    "license_header": GPL_HEADER,
    "module_case": "snake",
    "add_comments": True,
    "generate_properties": True,
}
