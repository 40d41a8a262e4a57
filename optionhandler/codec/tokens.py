"""
Token sequences for the option protocol.

A token sequence is the flat list of strings exchanged with an option
handler, e.g. ``["-capacity", "2.5", "-debug"]``. Parsing consumes tokens;
instead of blanking entries of a shared list, a TokenSequence keeps the
input immutable and tracks consumption in a bitmap, so the tokens left for
a parent class are available as an explicit value via ``remaining()``.
"""

import shlex
import string
from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import MalformedValueError


class TokenSequence:
    """Immutable tokens plus a consumed-bitmap."""

    def __init__(self, tokens: Iterable[str] = ()):
        self._tokens = tuple(str(token) for token in tokens)
        self._consumed = [False] * len(self._tokens)

    @classmethod
    def from_command_line(cls, cmdline: str) -> "TokenSequence":
        """Create a sequence by splitting a command line string."""
        return cls(split_options(cmdline))

    @property
    def tokens(self) -> tuple:
        """All tokens, consumed or not."""
        return self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.remaining())

    def __repr__(self) -> str:
        return f"TokenSequence({self.remaining()!r})"

    def is_consumed(self, index: int) -> bool:
        """Check whether the token at index has been consumed."""
        return self._consumed[index]

    def find(self, flag: str) -> int:
        """
        Locate the first unconsumed occurrence of ``-flag``.

        Args:
            flag: Option name without the leading dash

        Returns:
            Index of the occurrence or -1 if there is none
        """
        wanted = f"-{flag}"
        for index, token in enumerate(self._tokens):
            if not self._consumed[index] and token == wanted:
                return index
        return -1

    def take_flag(self, flag: str) -> bool:
        """Consume a bare ``-flag``; returns whether it was present."""
        index = self.find(flag)
        if index < 0:
            return False
        self._consumed[index] = True
        return True

    def take_value(self, flag: str) -> Optional[str]:
        """
        Consume ``-flag value`` and return the raw value.

        Args:
            flag: Option name without the leading dash

        Returns:
            The raw value, or None if the flag does not occur (anymore)

        Raises:
            MalformedValueError: If the flag is not followed by an unconsumed token
        """
        index = self.find(flag)
        if index < 0:
            return None

        value_index = index + 1
        if value_index >= len(self._tokens) or self._consumed[value_index]:
            raise MalformedValueError(flag, None, f"No value given for -{flag} option.")

        self._consumed[index] = True
        self._consumed[value_index] = True
        return self._tokens[value_index]

    def remaining(self) -> List[str]:
        """Unconsumed tokens in their original order."""
        return [
            token
            for token, consumed in zip(self._tokens, self._consumed)
            if not consumed
        ]


def split_options(cmdline: str) -> List[str]:
    """
    Split a command line into tokens, honouring quotes and escapes.

    Args:
        cmdline: Command line such as ``pkg.Kernel -gamma 0.1 -name "a b"``

    Returns:
        List of tokens

    Raises:
        MalformedValueError: If the quoting is unbalanced
    """
    try:
        return shlex.split(cmdline, posix=True)
    except ValueError as e:
        raise MalformedValueError(None, cmdline, f"Cannot split options: {e}") from e


def join_options(tokens: Sequence[str]) -> str:
    """Join tokens into a command line, quoting where required."""
    return " ".join(_quote(str(token)) for token in tokens)


def _quote(token: str) -> str:
    """Quote tokens that would not survive split_options unchanged."""
    if token and not any(char in _SPECIAL_CHARS for char in token):
        return token
    return shlex.quote(token)


# Characters that shlex treats specially in POSIX mode
_SPECIAL_CHARS = frozenset(string.whitespace + "'\"\\")
