"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    StrictUndefined,
)

from .naming import NamingCase, convert_case


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["snake_case"] = self._snake_case_filter
        self._env.filters["camel_case"] = self._camel_case_filter
        self._env.filters["pascal_case"] = self._pascal_case_filter
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter
        self._env.filters["py_str"] = self._py_str_filter
        self._env.filters["one_line"] = self._one_line_filter
        self._env.filters["docstring"] = self._docstring_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        return template_name in self._env.loader.list_templates()

    # Template filters for code generation

    def _snake_case_filter(self, value: str) -> str:
        """Convert string to snake_case."""
        return convert_case(str(value), NamingCase.SNAKE_CASE)

    def _camel_case_filter(self, value: str) -> str:
        """Convert string to camelCase."""
        return convert_case(str(value), NamingCase.CAMEL_CASE)

    def _pascal_case_filter(self, value: str) -> str:
        """Convert string to PascalCase."""
        return convert_case(str(value), NamingCase.PASCAL_CASE)

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent all lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "#") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else style for line in lines)

    def _py_str_filter(self, value: str) -> str:
        """Render a value as a Python string literal."""
        return repr(str(value))

    def _one_line_filter(self, value: str) -> str:
        """Collapse whitespace (including newlines) into single spaces."""
        return " ".join(str(value).split())

    def _docstring_filter(self, value: str) -> str:
        """Make text safe for use inside a triple-quoted docstring."""
        text = self._one_line_filter(value).replace("\\", "\\\\")
        return text.replace('"""', '\\"\\"\\"')


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
