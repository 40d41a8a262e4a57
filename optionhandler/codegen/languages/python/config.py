"""
Python-specific configuration and type mappings.

Maps codec kinds to Python annotations and builds the import statements
a generated option handler module needs.
"""

from typing import Dict, List, Set

from ....codec import OptionKind
from ...core.naming import module_path, trim_class
from ...core.schema import OptionType


# Python annotations for scalar kinds
PYTHON_TYPE_MAP = {
    OptionKind.INTEGER: "int",
    OptionKind.LONG: "int",
    OptionKind.FLOAT: "float",
    OptionKind.DOUBLE: "float",
    OptionKind.TEXT: "str",
    OptionKind.PATH: "pathlib.Path",
    OptionKind.FLAG: "bool",
}

# Modules the annotations above depend on
PYTHON_IMPORT_MAP = {
    "pathlib.Path": "import pathlib",
}


class PythonConfig:
    """Python-specific configuration, read from GeneratorConfig.custom."""

    def __init__(self, **kwargs):
        """Initialize Python configuration."""
        # Emit annotations on accessors
        self.type_hints = kwargs.get("type_hints", True)

        # Forward constructor arguments to the superclass
        self.forward_init_args = kwargs.get("forward_init_args", True)

    def get_python_type(self, option_type: OptionType) -> str:
        """Get the annotation for an option type."""
        if option_type.is_array:
            return f"list[{self.get_python_type(option_type.item)}]"
        if option_type.kind == OptionKind.OBJECT:
            return option_type.class_name
        return PYTHON_TYPE_MAP[option_type.kind]

    def get_required_imports(self, option_type: OptionType) -> Set[str]:
        """Get the imports needed to annotate and parse an option type."""
        element = option_type.element
        if element.kind == OptionKind.OBJECT:
            return {f"import {module_path(element.class_name)}"}

        python_type = PYTHON_TYPE_MAP[element.kind]
        if python_type in PYTHON_IMPORT_MAP:
            return {PYTHON_IMPORT_MAP[python_type]}
        return set()


def codec_import(codec_module: str) -> str:
    """
    Import statement binding the codec module to the name ``codec``.

    Args:
        codec_module: Dotted module path, e.g. ``optionhandler.codec``

    Returns:
        E.g. ``from optionhandler import codec``
    """
    parent = module_path(codec_module)
    name = trim_class(codec_module)
    alias = "" if name == "codec" else " as codec"
    if parent:
        return f"from {parent} import {name}{alias}"
    return f"import {name}{alias}"


def class_import(dotted_name: str) -> Dict[str, str]:
    """
    Import statement and local name for a superclass or capability.

    Args:
        dotted_name: E.g. ``mypkg.classifiers.AbstractClassifier``

    Returns:
        Dict with ``name`` (the local name) and ``statement`` (empty for bare names)
    """
    parent = module_path(dotted_name)
    name = trim_class(dotted_name)
    if not parent:
        return {"name": name, "statement": ""}
    return {"name": name, "statement": f"from {parent} import {name}"}


def extra_import(entry: str) -> str:
    """Turn an entry of a definition's ``imports`` list into a statement."""
    if entry.startswith("import ") or entry.startswith("from "):
        return entry
    return f"import {entry}"


def sort_imports(statements: Set[str]) -> List[str]:
    """Sort imports: plain ``import`` statements first, then ``from`` imports."""
    return sorted(
        (s for s in statements if s),
        key=lambda s: (0 if s.startswith("import ") else 1, s),
    )
