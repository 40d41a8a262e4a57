"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    OptionType,
    OptionDescriptor,
    ClassDefinition,
    SchemaError,
    InvalidDefinitionError,
    UnsupportedOptionKindError,
    OPTION_HANDLER_CAPABILITY,
    convert_definition,
    parse_option_type,
    is_option_handler_capability,
)
from .naming import NameSanitizer, NamingCase, derive_flag, trim_class, module_path
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema system - core data structures
    "OptionType",
    "OptionDescriptor",
    "ClassDefinition",
    "SchemaError",
    "InvalidDefinitionError",
    "UnsupportedOptionKindError",
    "OPTION_HANDLER_CAPABILITY",
    "convert_definition",
    "parse_option_type",
    "is_option_handler_capability",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "derive_flag",
    "trim_class",
    "module_path",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
