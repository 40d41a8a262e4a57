"""
Core schema representation for code generation.

Converts a class definition (the parsed JSON description of a class and
its options) into a validated internal format the generators work with.
"""

import ast
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ...codec import OptionKind
from ...logging_config import get_logger
from .naming import derive_flag, trim_class

logger = get_logger(__name__)


# Dotted name of the option handling capability
OPTION_HANDLER_CAPABILITY = "optionhandler.codec.OptionHandler"

# Type names accepted in definitions, mapped to codec kinds
TYPE_ALIASES = {
    "int": OptionKind.INTEGER,
    "integer": OptionKind.INTEGER,
    "long": OptionKind.LONG,
    "float": OptionKind.FLOAT,
    "double": OptionKind.DOUBLE,
    "str": OptionKind.TEXT,
    "string": OptionKind.TEXT,
    "text": OptionKind.TEXT,
    "path": OptionKind.PATH,
    "file": OptionKind.PATH,
    "bool": OptionKind.FLAG,
    "boolean": OptionKind.FLAG,
    "flag": OptionKind.FLAG,
}

_DOTTED_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)+$")
_PROPERTY_RE = re.compile(r"^[a-z][A-Za-z0-9_]*$")


class SchemaError(Exception):
    """Base exception for class definition problems."""

    pass


class InvalidDefinitionError(SchemaError):
    """Raised when a class definition is missing fields or is malformed."""

    pass


class UnsupportedOptionKindError(SchemaError):
    """Raised when an option type cannot be mapped to a codec kind."""

    pass


@dataclass(frozen=True)
class OptionType:
    """Resolved type of an option: a codec kind, an object class or an array."""

    kind: Optional[OptionKind]
    item: Optional["OptionType"] = None
    class_name: Optional[str] = None

    @property
    def is_array(self) -> bool:
        return self.item is not None

    @property
    def element(self) -> "OptionType":
        """The element type for arrays, the type itself otherwise."""
        return self.item if self.item is not None else self

    def __str__(self) -> str:
        if self.is_array:
            return f"{self.item}[]"
        if self.kind == OptionKind.OBJECT:
            return self.class_name
        return self.kind.value


@dataclass
class OptionDescriptor:
    """Represents a single configurable parameter."""

    property: str
    type: OptionType
    flag: str
    default: str
    constraint: Optional[str] = None
    help: str = ""
    flag_derived: bool = False


@dataclass
class ClassDefinition:
    """Represents one generation unit."""

    name: str
    author: str
    organization: str
    package: str = ""
    prefix: str = ""
    suffix: str = ""
    superclass: str = ""
    implement: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    options: List[OptionDescriptor] = field(default_factory=list)
    is_root: bool = False
    source: Optional[str] = None

    @property
    def class_name(self) -> str:
        """Final class identifier: prefix + name + suffix."""
        return f"{self.prefix}{self.name}{self.suffix}"

    @property
    def qualified_name(self) -> str:
        if self.package:
            return f"{self.package}.{self.class_name}"
        return self.class_name

    def get_option(self, property_name: str) -> Optional[OptionDescriptor]:
        """Get option by property name."""
        for option in self.options:
            if option.property == property_name:
                return option
        return None

    def describe(self) -> str:
        """Human readable summary, used for verbose logging."""
        lines = [
            f"name: {self.name}",
            f"package: {self.package}",
            f"prefix: {self.prefix}",
            f"suffix: {self.suffix}",
            f"superclass: {self.superclass}",
            f"implement: {self.implement}",
            f"root: {self.is_root}",
            f"author: {self.author}",
            f"organization: {self.organization}",
            "options:",
        ]
        if not self.options:
            lines.append("-none-")
        for i, option in enumerate(self.options, 1):
            lines.append(
                f"{i}. property: {option.property}, type: {option.type}, "
                f"flag: {option.flag}, default: {option.default}"
            )
        return "\n".join(lines)


def is_option_handler_capability(name: str) -> bool:
    """Check whether a capability name denotes the option handler contract."""
    return name == OPTION_HANDLER_CAPABILITY or name == trim_class(
        OPTION_HANDLER_CAPABILITY
    )


def parse_option_type(type_name: str, context: str = "") -> OptionType:
    """
    Resolve a type string from a definition into an OptionType.

    Args:
        type_name: E.g. ``double``, ``mypkg.kernels.Kernel``, ``int[]``
        context: Prefix for error messages

    Returns:
        The resolved OptionType

    Raises:
        UnsupportedOptionKindError: If the type is not supported
    """
    if not isinstance(type_name, str) or not type_name.strip():
        raise UnsupportedOptionKindError(f"{context}missing or empty option type")

    text = type_name.strip()

    item_text = None
    if text.endswith("[]"):
        item_text = text[:-2].strip()
    elif text.lower().startswith("list[") and text.endswith("]"):
        item_text = text[5:-1].strip()

    if item_text is not None:
        item = parse_option_type(item_text, context)
        if item.is_array:
            raise UnsupportedOptionKindError(
                f"{context}nested arrays are not supported: {type_name}"
            )
        if item.kind == OptionKind.FLAG:
            raise UnsupportedOptionKindError(
                f"{context}arrays of boolean flags are not supported: {type_name}"
            )
        return OptionType(kind=None, item=item)

    kind = TYPE_ALIASES.get(text.lower())
    if kind is not None:
        return OptionType(kind=kind)

    if _DOTTED_NAME_RE.match(text):
        return OptionType(kind=OptionKind.OBJECT, class_name=text)

    raise UnsupportedOptionKindError(f"{context}unsupported option type: {type_name}")


def convert_definition(data: Dict[str, Any], source: Optional[str] = None) -> ClassDefinition:
    """
    Convert a parsed JSON definition into a validated ClassDefinition.

    Args:
        data: The JSON object describing the class
        source: Where the definition came from (for error messages)

    Returns:
        ClassDefinition ready for code generation

    Raises:
        InvalidDefinitionError: If required fields are missing or values are malformed
        UnsupportedOptionKindError: If an option type is not supported
    """
    where = f"{source}: " if source else ""

    if not isinstance(data, dict):
        raise InvalidDefinitionError(
            f"{where}definition must be a JSON object, got {type(data).__name__}"
        )

    for required in ("name", "author", "organization"):
        value = data.get(required)
        if not isinstance(value, str) or not value.strip():
            raise InvalidDefinitionError(f"{where}missing required field '{required}'")

    name = data["name"]
    where = f"{where}definition '{name}': "
    if not name.isidentifier():
        raise InvalidDefinitionError(f"{where}name is not a valid identifier")

    definition = ClassDefinition(
        name=name,
        author=data["author"],
        organization=data["organization"],
        package=_get_string(data, "package", where),
        prefix=_get_string(data, "prefix", where),
        suffix=_get_string(data, "suffix", where),
        superclass=_get_string(data, "superclass", where),
        implement=_get_string_list(data, "implement", where),
        imports=_get_string_list(data, "imports", where),
        source=source,
    )

    if not definition.class_name.isidentifier():
        raise InvalidDefinitionError(
            f"{where}class name '{definition.class_name}' is not a valid identifier"
        )

    # The package becomes output directories, bases become import statements
    _check_dotted_name(definition.package, "package", where)
    _check_dotted_name(definition.superclass, "superclass", where)
    for capability in definition.implement:
        _check_dotted_name(capability, "implement", where)

    options = data.get("options", [])
    if not isinstance(options, list):
        raise InvalidDefinitionError(f"{where}'options' must be a list")

    seen_properties = set()
    seen_flags = set()
    for index, option_data in enumerate(options, 1):
        option = _convert_option(option_data, f"{where}option #{index}: ")

        if option.property in seen_properties:
            raise InvalidDefinitionError(f"{where}duplicate property '{option.property}'")
        if option.flag in seen_flags:
            raise InvalidDefinitionError(f"{where}duplicate flag '{option.flag}'")

        seen_properties.add(option.property)
        seen_flags.add(option.flag)
        definition.options.append(option)

    definition.is_root = _determine_root(data, definition, where)

    logger.debug("Parsed definition:\n%s", definition.describe())
    return definition


def _convert_option(data: Any, where: str) -> OptionDescriptor:
    """Convert and validate a single option entry."""
    if not isinstance(data, dict):
        raise InvalidDefinitionError(f"{where}option must be a JSON object")

    for required in ("property", "type", "default"):
        if required not in data:
            raise InvalidDefinitionError(f"{where}missing required field '{required}'")

    property_name = data["property"]
    if not isinstance(property_name, str) or not _PROPERTY_RE.match(property_name):
        raise InvalidDefinitionError(
            f"{where}property must be an identifier starting with a lower-case letter: "
            f"{property_name!r}"
        )
    where = f"{where}'{property_name}': "

    option_type = parse_option_type(data["type"], where)

    flag = data.get("flag")
    flag_derived = flag is None or flag == ""
    if flag_derived:
        flag = derive_flag(property_name)
    if not isinstance(flag, str) or flag.startswith("-") or re.search(r"\s", flag):
        raise InvalidDefinitionError(
            f"{where}flag must be a non-empty string without leading dash or whitespace: {flag!r}"
        )

    default = _expression(data["default"], "default", where)

    constraint = data.get("constraint")
    if constraint is not None:
        constraint = _expression(constraint, "constraint", where)

    help_text = data.get("help", "")
    if not isinstance(help_text, str):
        raise InvalidDefinitionError(f"{where}'help' must be a string")

    return OptionDescriptor(
        property=property_name,
        type=option_type,
        flag=flag,
        default=default,
        constraint=constraint,
        help=help_text,
        flag_derived=flag_derived,
    )


def _expression(value: Any, key: str, where: str) -> str:
    """Validate that value is a Python expression; returns its source."""
    if isinstance(value, bool):
        value = "True" if value else "False"
    elif isinstance(value, (int, float)):
        value = repr(value)

    if not isinstance(value, str) or not value.strip():
        raise InvalidDefinitionError(f"{where}'{key}' must be a non-empty expression")

    try:
        ast.parse(value.strip(), mode="eval")
    except SyntaxError as e:
        raise InvalidDefinitionError(f"{where}invalid {key} expression {value!r}: {e.msg}") from e

    return value.strip()


def _get_string(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidDefinitionError(f"{where}'{key}' must be a string")
    return value.strip()


def _check_dotted_name(value: str, key: str, where: str):
    if value and not all(part.isidentifier() for part in value.split(".")):
        raise InvalidDefinitionError(f"{where}'{key}' is not a dotted name: {value!r}")


def _get_string_list(data: Dict[str, Any], key: str, where: str) -> List[str]:
    values = data.get(key, [])
    if values is None:
        return []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise InvalidDefinitionError(f"{where}'{key}' must be a list of strings")
    return [v.strip() for v in values]


def _determine_root(data: Dict[str, Any], definition: ClassDefinition, where: str) -> bool:
    """Decide once whether the class chains option handling to its parent."""
    if "root" in data:
        if not isinstance(data["root"], bool):
            raise InvalidDefinitionError(f"{where}'root' must be a boolean")
        if not data["root"] and not definition.superclass:
            raise InvalidDefinitionError(f"{where}non-root class requires a superclass")
        return data["root"]

    if any(is_option_handler_capability(name) for name in definition.implement):
        return True

    if not definition.superclass:
        logger.warning(
            "%sno superclass to chain option handling to, generating a root class",
            where,
        )
        return True

    return False
