"""
The option handler contract.

Classes that can be configured through option tokens implement three
methods: enumerate the available options, apply a token sequence and
emit a token sequence that reproduces the current state.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence


class OptionHandler(ABC):
    """Abstract base class for objects configurable via option tokens."""

    @abstractmethod
    def list_options(self) -> list:
        """
        Describe the available options.

        Returns:
            List of OptionDescription objects
        """
        pass

    @abstractmethod
    def set_options(self, options: Sequence[str]) -> List[str]:
        """
        Parse a token sequence into internal state.

        Args:
            options: Tokens such as ``["-capacity", "2.5"]``

        Returns:
            The tokens that were not consumed
        """
        pass

    @abstractmethod
    def get_options(self) -> List[str]:
        """
        Serialize the current state.

        Returns:
            Tokens suitable for passing to set_options
        """
        pass
