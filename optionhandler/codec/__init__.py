"""
Option codec.

Runtime implementation of the option token protocol. Generated option
handlers import this module and call its parse/add operations.
"""

from .errors import OptionError, MalformedValueError
from .handler import OptionHandler
from .tokens import TokenSequence, split_options, join_options
from .options import (
    OptionKind,
    OptionDescription,
    parse,
    parse_flag,
    parse_array,
    decode,
    add,
    add_flag,
    add_array,
    add_all,
    encode,
    to_command_line,
    from_command_line,
    resolve_class,
    add_option,
    add_flag_option,
    format_default,
    describe_options,
)

__all__ = [
    # Contract
    "OptionHandler",
    "OptionKind",
    "OptionDescription",
    # Tokens
    "TokenSequence",
    "split_options",
    "join_options",
    # Parsing
    "parse",
    "parse_flag",
    "parse_array",
    "decode",
    # Serializing
    "add",
    "add_flag",
    "add_array",
    "add_all",
    "encode",
    # Nested handlers
    "to_command_line",
    "from_command_line",
    "resolve_class",
    # Listing
    "add_option",
    "add_flag_option",
    "format_default",
    "describe_options",
    # Errors
    "OptionError",
    "MalformedValueError",
]
