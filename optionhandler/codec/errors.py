"""Exceptions raised by the option codec."""

from typing import Optional


class OptionError(Exception):
    """Base exception for option protocol errors."""

    pass


class MalformedValueError(OptionError, ValueError):
    """Raised when a token cannot be turned into a value of the expected kind."""

    def __init__(
        self, flag: Optional[str], value: Optional[str], message: Optional[str] = None
    ):
        self.flag = flag
        self.value = value
        if message is None:
            message = f"Malformed value for -{flag}: {value!r}"
        super().__init__(message)
