"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .kotlin import KotlinGenerator, create_kotlin_generator
from .python import PythonGenerator, create_python_generator

__all__ = [
    "KotlinGenerator",
    "create_kotlin_generator",
    "PythonGenerator",
    "create_python_generator",
]
