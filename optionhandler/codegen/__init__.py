"""
Option Handler Code Generation Module

Generates option handler classes from class definitions.
"""

from .registry import GeneratorRegistry, get_generator, list_supported_languages
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.schema import (
    OptionType,
    OptionDescriptor,
    ClassDefinition,
    SchemaError,
    InvalidDefinitionError,
    UnsupportedOptionKindError,
    convert_definition,
)
from .core.config import GeneratorConfig, ConfigManager, load_config
from .batch import BatchOptions, BatchReport, generate_batch, output_path


# Convenience functions
def generate_from_definition(data, language="python", config=None, source=None):
    """
    Generate code from a parsed JSON definition.

    Args:
        data: The definition as a dict
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or path)
        source: Where the definition came from, for error messages

    Returns:
        GenerationResult with generated code

    Raises:
        SchemaError: If the definition is invalid
    """
    definition = convert_definition(data, source=source)
    generator = get_generator(language, config)
    return generate_code(generator, definition)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "CodeGenerator",
    "GenerationResult",
    "OptionType",
    "OptionDescriptor",
    "ClassDefinition",
    "SchemaError",
    "InvalidDefinitionError",
    "UnsupportedOptionKindError",
    "GeneratorConfig",
    "ConfigManager",
    "BatchOptions",
    "BatchReport",
    "convert_definition",
    "generate_batch",
    "generate_code",
    "generate_from_definition",
    "get_generator",
    "list_supported_languages",
    "load_config",
    "output_path",
]
