"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions, keyword conflicts,
flag derivation and dotted class name handling.
"""

import keyword
import re
from typing import Set, Dict
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in generated code.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = convert_case(cleaned, target_case)
        if converted[:1].isdigit():
            converted = f"_{converted}"
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_-]', '_', name)
        cleaned = cleaned.strip('_-')

        # Ensure doesn't start with number
        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "option"

        return cleaned

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name.lower() in self.reserved_words or name.lower() in self.builtin_types:
            name = f"{name}{suffix}"
        original_name = name

        counter = 1
        while name in self._used_names:
            name = f"{original_name}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names (and the cache built on them)."""
        self._used_names.clear()
        self._name_cache.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        snake = to_snake_case(name)
        parts = snake.split('_')
        return parts[0].lower() + ''.join(part.capitalize() for part in parts[1:])
    elif target_case == NamingCase.PASCAL_CASE:
        snake = to_snake_case(name)
        return ''.join(part.capitalize() for part in snake.split('_') if part)
    elif target_case == NamingCase.KEBAB_CASE:
        return to_snake_case(name).replace('_', '-')
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return to_snake_case(name).upper()
    else:
        return name


def to_snake_case(name: str) -> str:
    """Convert to snake_case (``MySVM`` -> ``my_svm``)."""
    name = name.replace('-', '_')

    # Split acronyms from a following word, then lower/digit from upper
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

    name = name.lower()
    name = re.sub(r'_+', '_', name)

    return name.strip('_')


def derive_flag(property_name: str) -> str:
    """
    Derive the option flag from a property name.

    A hyphen is inserted at every lower-to-upper case boundary and the
    result is lower-cased: ``multiClassStrategy`` -> ``multi-class-strategy``.
    """
    return re.sub(r'([a-z])([A-Z])', r'\1-\2', property_name).lower()


def trim_class(dotted_name: str) -> str:
    """Last component of a dotted name (``a.b.Klass`` -> ``Klass``)."""
    return dotted_name.rsplit('.', 1)[-1]


def module_path(dotted_name: str) -> str:
    """Module part of a dotted class name, empty if there is none."""
    if '.' not in dotted_name:
        return ''
    return dotted_name.rsplit('.', 1)[0]


# Python keywords (lower-cased, as the sanitizer compares lower-cased names)
PYTHON_RESERVED_WORDS = {word.lower() for word in keyword.kwlist}

# Builtins that generated attribute names should not shadow
PYTHON_BUILTIN_TYPES = {
    "int", "float", "str", "bool", "list", "dict", "set", "tuple", "bytes",
    "object", "type", "property", "super", "len", "print", "id", "hash",
    "format", "iter", "next", "range", "min", "max", "sum", "filter", "map",
}

# Names the generated option handler defines itself
PROTOCOL_NAMES = {
    "options", "default_options", "global_info", "list_options",
    "set_options", "get_options",
}


def create_option_sanitizer() -> NameSanitizer:
    """Create a name sanitizer for option property names."""
    return NameSanitizer(PYTHON_RESERVED_WORDS, PYTHON_BUILTIN_TYPES | PROTOCOL_NAMES)
