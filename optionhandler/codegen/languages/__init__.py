"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .python import PythonGenerator, create_python_generator

__all__ = [
    "PythonGenerator",
    "create_python_generator",
]
