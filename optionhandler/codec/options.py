"""
Parse and serialize primitives of the option protocol.

Every option is keyed by a flag (no leading dash). Scalars travel as
``-flag value`` pairs, boolean flags as a bare ``-flag``, nested option
handlers as ``-flag "dotted.ClassName -opt value ..."`` and arrays as one
pair per element. Parsing consumes only the matched occurrences, so options
can be parsed in any order and unrelated tokens are left for the parent.
"""

import importlib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..logging_config import get_logger
from .errors import MalformedValueError
from .handler import OptionHandler
from .tokens import TokenSequence, join_options, split_options

logger = get_logger(__name__)


class OptionKind(Enum):
    """Value kinds understood by the codec."""

    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    TEXT = "text"
    PATH = "path"
    FLAG = "flag"
    OBJECT = "object"


@dataclass(frozen=True)
class OptionDescription:
    """Help entry for a single option, as returned by list_options()."""

    description: str
    name: str
    num_arguments: int
    synopsis: str

    def __str__(self) -> str:
        return f"{self.synopsis}\n{self.description}"


# Parsing


def parse(
    tokens: TokenSequence,
    flag: str,
    default: Any,
    kind: OptionKind,
    base: Optional[type] = None,
) -> Any:
    """
    Parse the first unconsumed occurrence of an option.

    Args:
        tokens: Token sequence to consume from
        flag: Option name without the leading dash
        default: Value returned when the option is absent
        kind: Kind of the value
        base: Required base class for OBJECT options

    Returns:
        The parsed value, or ``default`` if the option is not present

    Raises:
        MalformedValueError: If the raw value cannot be converted
    """
    if kind == OptionKind.FLAG:
        return parse_flag(tokens, flag)

    raw = tokens.take_value(flag)
    if raw is None:
        return default
    return decode(raw, kind, flag=flag, base=base)


def parse_flag(tokens: TokenSequence, flag: str) -> bool:
    """Return True if the bare ``-flag`` is present (and consume it)."""
    return tokens.take_flag(flag)


def parse_array(
    tokens: TokenSequence,
    flag: str,
    default: Any,
    kind: OptionKind,
    base: Optional[type] = None,
) -> Any:
    """
    Collect every occurrence of an option, left to right.

    Args:
        tokens: Token sequence to consume from
        flag: Option name without the leading dash
        default: Value returned when the option does not occur at all
        kind: Kind of the elements
        base: Required base class for OBJECT elements

    Returns:
        List of parsed elements, or a copy of ``default`` if there were none
    """
    if kind == OptionKind.FLAG:
        raise ValueError("Arrays of boolean flags are not supported")

    values = []
    while True:
        raw = tokens.take_value(flag)
        if raw is None:
            break
        values.append(decode(raw, kind, flag=flag, base=base))

    if not values:
        return list(default) if default is not None else None
    return values


def decode(
    raw: str,
    kind: OptionKind,
    flag: Optional[str] = None,
    base: Optional[type] = None,
) -> Any:
    """Convert a raw token into a value of the given kind."""
    try:
        if kind in (OptionKind.INTEGER, OptionKind.LONG):
            return int(raw)
        elif kind in (OptionKind.FLOAT, OptionKind.DOUBLE):
            return float(raw)
    except ValueError as e:
        raise MalformedValueError(flag, raw) from e

    if kind == OptionKind.TEXT:
        return raw
    elif kind == OptionKind.PATH:
        return Path(raw)
    elif kind == OptionKind.OBJECT:
        return from_command_line(raw, base=base, flag=flag)

    raise ValueError(f"Cannot decode values of kind {kind.value}")


# Serializing


def add(result: List[str], flag: str, value: Any, kind: OptionKind) -> None:
    """Append ``-flag value`` (or just ``-flag`` for a set boolean flag)."""
    if kind == OptionKind.FLAG:
        add_flag(result, flag, value)
        return

    result.append(f"-{flag}")
    result.append(encode(value, kind))


def add_flag(result: List[str], flag: str, value: bool) -> None:
    """Append the bare ``-flag`` if value is true."""
    if value:
        result.append(f"-{flag}")


def add_array(
    result: List[str], flag: str, values: Sequence[Any], kind: OptionKind
) -> None:
    """Append one ``-flag value`` pair per element."""
    if kind == OptionKind.FLAG:
        raise ValueError("Arrays of boolean flags are not supported")

    for value in values:
        add(result, flag, value, kind)


def add_all(result: list, items) -> None:
    """Append the options (or option descriptions) of a parent class."""
    result.extend(items)


def encode(value: Any, kind: OptionKind) -> str:
    """Textual form of a value, the inverse of decode()."""
    if kind in (OptionKind.INTEGER, OptionKind.LONG):
        return str(int(value))
    elif kind in (OptionKind.FLOAT, OptionKind.DOUBLE):
        return repr(float(value))
    elif kind == OptionKind.OBJECT:
        return to_command_line(value)
    return str(value)


# Nested option handlers


def to_command_line(obj: Any) -> str:
    """
    Build the command line for an object: class name plus its options.

    Args:
        obj: Object to describe

    Returns:
        E.g. ``mypkg.kernels.GaussianKernel -gamma 0.1``
    """
    cls = type(obj)
    tokens = [f"{cls.__module__}.{cls.__qualname__}"]
    if isinstance(obj, OptionHandler):
        tokens.extend(obj.get_options())
    return join_options(tokens)


def from_command_line(
    cmdline: str, base: Optional[type] = None, flag: Optional[str] = None
) -> Any:
    """
    Instantiate an object from its command line.

    The first token names the class; option handlers receive the remaining
    tokens through set_options().

    Args:
        cmdline: Class name and options
        base: Class the instantiated object must derive from
        flag: Flag the command line was read from, for error messages

    Returns:
        The configured object

    Raises:
        MalformedValueError: If the class cannot be resolved or instantiated,
            or if not all options were accepted
    """
    if not cmdline.strip():
        raise MalformedValueError(flag, cmdline, "Empty command line supplied!")

    tokens = split_options(cmdline)
    classname, options = tokens[0], tokens[1:]
    cls = resolve_class(classname, flag=flag)

    if base is not None and not (isinstance(cls, type) and issubclass(cls, base)):
        raise MalformedValueError(
            flag,
            cmdline,
            f"Class {classname} is not a subclass of {base.__module__}.{base.__qualname__}",
        )

    try:
        obj = cls()
    except Exception as e:
        raise MalformedValueError(
            flag, cmdline, f"Failed to instantiate {classname}: {e}"
        ) from e

    if isinstance(obj, OptionHandler):
        leftover = obj.set_options(options)
        if leftover:
            raise MalformedValueError(
                flag, cmdline, f"Illegal options for {classname}: {join_options(leftover)}"
            )
    elif options:
        raise MalformedValueError(
            flag, cmdline, f"Class {classname} does not accept options"
        )

    logger.debug("Instantiated %s from command line", classname)
    return obj


def resolve_class(classname: str, flag: Optional[str] = None) -> type:
    """
    Look up a class by its dotted name (module path plus qualified name).

    Raises:
        MalformedValueError: If no such class exists
    """
    parts = classname.split(".")
    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        try:
            target = importlib.import_module(module_name)
        except ImportError:
            continue

        try:
            for attribute in parts[split_at:]:
                target = getattr(target, attribute)
        except AttributeError:
            break
        return target

    raise MalformedValueError(flag, classname, f"Unknown class: {classname}")


# Listing


def add_option(result: list, text: str, default: Any, flag: str) -> None:
    """Append the help entry for an option that takes a value."""
    result.append(
        OptionDescription(
            description=f"\t{text}\n\t(default: {format_default(default)})",
            name=flag,
            num_arguments=1,
            synopsis=f"-{flag} <value>",
        )
    )


def add_flag_option(result: list, text: str, flag: str) -> None:
    """Append the help entry for a boolean flag."""
    result.append(
        OptionDescription(
            description=f"\t{text}",
            name=flag,
            num_arguments=0,
            synopsis=f"-{flag}",
        )
    )


def format_default(value: Any) -> str:
    """Render a default value for help output."""
    if isinstance(value, OptionHandler):
        return to_command_line(value)
    if isinstance(value, (list, tuple)):
        return " ".join(format_default(item) for item in value)
    return str(value)


def describe_options(handler: OptionHandler) -> str:
    """Format the option listing of a handler as help text."""
    return "\n\n".join(str(description) for description in handler.list_options())
