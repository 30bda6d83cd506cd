"""
Python code generator module.

Generates a Python module of analytics event factories from a Mammoth schema.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import create_python_sanitizer, python_string
from .config import PythonConfig, PYTHON_TYPE_MAP

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "create_python_sanitizer",
    "python_string",
    # Configuration
    "PythonConfig",
    "PYTHON_TYPE_MAP",
]
