"""
Python code generator module.

Generates Python option handler classes from class definitions.
"""

from .generator import PythonGenerator, create_python_generator
from .config import PythonConfig, PYTHON_TYPE_MAP

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Configuration
    "PythonConfig",
    "PYTHON_TYPE_MAP",
]
