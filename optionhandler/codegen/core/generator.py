"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...codec import OptionKind
from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import ClassDefinition, SchemaError
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, definition: ClassDefinition) -> str:
        """
        Generate the option handling code for one class definition.

        Args:
            definition: Validated class definition

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def module_filename(self, definition: ClassDefinition) -> str:
        """
        File name (without directories) for the generated code.

        Args:
            definition: Class definition being generated

        Returns:
            File name including the extension
        """
        pass

    def validate_definition(self, definition: ClassDefinition) -> List[str]:
        """
        Check a definition for issues that do not prevent generation.

        Language generators should override this to add language-specific checks.

        Args:
            definition: Definition to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not definition.options:
            warnings.append(f"Class '{definition.class_name}' declares no options")

        for option in definition.options:
            if not option.help:
                warnings.append(
                    f"Option {definition.class_name}.{option.property} has no help text"
                )
            # A missing flag always parses as False
            if option.type.element.kind == OptionKind.FLAG and option.default != "False":
                warnings.append(
                    f"Flag {definition.class_name}.{option.property} defaults to "
                    f"{option.default}, which the command line cannot switch off"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, definition: ClassDefinition
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        definition: Class definition to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    context = definition.source or definition.name
    try:
        warnings = generator.validate_definition(definition)
        code = generator.generate(definition)
        formatted_code = generator.format_code(code)
    except (GeneratorError, SchemaError, TemplateError) as e:
        logger.error("Code generation failed for %s: %s", context, e)
        return GenerationResult.error(
            f"Code generation failed for {context} ({definition.name}): {e}", exception=e
        )

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "class_name": definition.class_name,
        "module_filename": generator.module_filename(definition),
        "option_count": len(definition.options),
        "is_root": definition.is_root,
        "derived_flags": sum(1 for option in definition.options if option.flag_derived),
    }

    for warning in warnings:
        logger.warning("%s: %s", context, warning)

    return GenerationResult(formatted_code, warnings, metadata)
