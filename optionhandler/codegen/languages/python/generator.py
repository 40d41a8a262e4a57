"""
Python code generator implementation.

Generates an option handler superclass from a class definition using
templates. The generated class wires every declared option into
list_options/set_options/get_options via the option codec.
"""

import datetime
from typing import Dict, List, Any, Optional
from pathlib import Path

from ....codec import OptionKind
from ....logging_config import get_logger
from ...core.generator import CodeGenerator, GeneratorError
from ...core.schema import ClassDefinition, OptionDescriptor, is_option_handler_capability
from ...core.naming import NamingCase, create_option_sanitizer, convert_case
from ...core.config import GeneratorConfig
from .config import (
    PythonConfig,
    class_import,
    codec_import,
    extra_import,
    sort_imports,
)

logger = get_logger(__name__)

TEMPLATE_NAME = "option_handler.py.j2"

# Methods every generated class defines besides the per-option members
CLASS_MEMBERS = frozenset({"global_info", "list_options", "set_options", "get_options"})


def option_members(attribute: str) -> set:
    """Names the template defines for one option attribute."""
    return {
        attribute,
        f"_{attribute}",
        attribute.upper(),
        f"get_default_{attribute}",
        f"get_{attribute}",
        f"set_{attribute}",
        f"{attribute}_tip_text",
    }


class PythonGenerator(CodeGenerator):
    """Code generator for Python option handler classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        # Initialize Python-specific configuration
        self.python_config = PythonConfig(**self.config.custom)

        # Resolved once so that all files of a batch carry the same year
        self.copyright_year = (
            self.config.copyright_year or datetime.date.today().year
        )

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def module_filename(self, definition: ClassDefinition) -> str:
        """File name of the generated module (``AbstractMySVM`` -> ``abstract_my_svm.py``)."""
        if self.config.module_case == "original":
            stem = definition.class_name
        else:
            stem = convert_case(definition.class_name, NamingCase.SNAKE_CASE)
        return f"{stem}{self.file_extension}"

    def generate(self, definition: ClassDefinition) -> str:
        """Generate the complete module for one class definition."""
        imports = {"import logging", codec_import(self.config.codec_module)}
        bases = self._get_bases(definition, imports)

        options = []
        attributes = self.assign_attributes(definition)
        for option, attribute in zip(definition.options, attributes):
            options.append(self._generate_option_data(option, attribute, imports))

        for entry in definition.imports:
            imports.add(extra_import(entry))

        context = {
            "filename": self.module_filename(definition),
            "license_header": self.config.license_header,
            "year": self.copyright_year,
            "organization": definition.organization,
            "author": definition.author,
            "name": definition.name,
            "class_name": definition.class_name,
            "bases": bases,
            "imports": sort_imports(imports),
            "options": options,
            "is_root": definition.is_root,
            "add_comments": self.config.add_comments,
            "generate_properties": self.config.generate_properties,
            "type_hints": self.python_config.type_hints,
            "forward_init_args": self.python_config.forward_init_args,
        }

        logger.debug(
            "Rendering %s (%d options, root=%s)",
            definition.class_name,
            len(options),
            definition.is_root,
        )
        return self.render_template(TEMPLATE_NAME, context)

    def _get_bases(self, definition: ClassDefinition, imports: set) -> List[str]:
        """Base classes in declaration order, OptionHandler appended for roots."""
        bases = []
        seen = {}
        has_capability = False

        names = [definition.superclass] if definition.superclass else []
        names.extend(definition.implement)

        for dotted_name in names:
            if is_option_handler_capability(dotted_name):
                has_capability = True
                base = "codec.OptionHandler"
            else:
                info = class_import(dotted_name)
                if info["name"] in seen and seen[info["name"]] != dotted_name:
                    raise GeneratorError(
                        f"Base classes {seen[info['name']]} and {dotted_name} "
                        f"share the name {info['name']}"
                    )
                seen[info["name"]] = dotted_name
                imports.add(info["statement"])
                base = info["name"]

            if base not in bases:
                bases.append(base)

        if definition.is_root and not has_capability:
            bases.append("codec.OptionHandler")

        return bases

    def assign_attributes(self, definition: ClassDefinition) -> List[str]:
        """
        Attribute names of the options, in declaration order.

        An attribute is numbered when any member generated for it would
        replace a member of an earlier option, e.g. ``defaultFoo`` next to
        ``foo`` (both would define ``get_default_foo``).
        """
        sanitizer = create_option_sanitizer()
        claimed = set(CLASS_MEMBERS)
        attributes = []

        for option in definition.options:
            base = sanitizer.sanitize_name(option.property, NamingCase.SNAKE_CASE)
            attribute = base
            counter = 1
            while option_members(attribute) & claimed:
                attribute = f"{base}{counter}"
                counter += 1

            sanitizer.add_used_name(attribute)
            claimed |= option_members(attribute)
            attributes.append(attribute)

        return attributes

    def _generate_option_data(
        self, option: OptionDescriptor, attribute: str, imports: set
    ) -> Dict[str, Any]:
        """Generate option data for template."""
        constant = attribute.upper()

        imports.update(self.python_config.get_required_imports(option.type))

        element = option.type.element
        kind = f"codec.OptionKind.{element.kind.name}"
        base = ""
        if element.kind == OptionKind.OBJECT:
            base = f", base={element.class_name}"

        flag_ref = f"self.{constant}"
        default_call = f"self.get_default_{attribute}()"
        getter_call = f"self.get_{attribute}()"

        if option.type.is_array:
            parse_call = f"codec.parse_array(tokens, {flag_ref}, {default_call}, {kind}{base})"
            add_call = f"codec.add_array(result, {flag_ref}, {getter_call}, {kind})"
            list_call = f"codec.add_option(result, self.{attribute}_tip_text(), {default_call}, {flag_ref})"
        elif element.kind == OptionKind.FLAG:
            parse_call = f"codec.parse_flag(tokens, {flag_ref})"
            add_call = f"codec.add_flag(result, {flag_ref}, {getter_call})"
            list_call = f"codec.add_flag_option(result, self.{attribute}_tip_text(), {flag_ref})"
        else:
            parse_call = f"codec.parse(tokens, {flag_ref}, {default_call}, {kind}{base})"
            add_call = f"codec.add(result, {flag_ref}, {getter_call}, {kind})"
            list_call = f"codec.add_option(result, self.{attribute}_tip_text(), {default_call}, {flag_ref})"

        return {
            "property": option.property,
            "attribute": attribute,
            "constant": constant,
            "flag": option.flag,
            "default": option.default,
            "constraint": option.constraint,
            "tip_text": _up_first(option.help),
            "python_type": self.python_config.get_python_type(option.type),
            "type_name": str(option.type),
            "parse_call": parse_call,
            "add_call": add_call,
            "list_call": list_call,
        }

    def validate_definition(self, definition: ClassDefinition) -> List[str]:
        """Validate a definition for Python generation."""
        warnings = super().validate_definition(definition)

        # Check for renamed attributes
        attributes = self.assign_attributes(definition)
        for option, attribute in zip(definition.options, attributes):
            if attribute != convert_case(option.property, NamingCase.SNAKE_CASE):
                warnings.append(
                    f"Option {definition.class_name}.{option.property} "
                    f"renamed to {attribute}"
                )

        return warnings


def _up_first(text: str) -> str:
    """Upper-case the first character of a help text."""
    if not text:
        return text
    return text[0].upper() + text[1:]


# Factory functions
def create_python_generator(config: GeneratorConfig = None) -> PythonGenerator:
    """Create a Python generator, using the default python configuration if none is given."""
    if config is None:
        from ...core.config import load_config

        config = load_config("python")

    return PythonGenerator(config)
