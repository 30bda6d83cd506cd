"""
Kotlin code generator module.

Generates a Kotlin object of analytics event functions from a Mammoth schema.
"""

from .generator import KotlinGenerator, create_kotlin_generator
from .naming import KOTLIN_RESERVED_WORDS, escape_identifier, kotlin_string
from .config import KotlinConfig, KOTLIN_TYPE_MAP

__all__ = [
    # Generator
    "KotlinGenerator",
    "create_kotlin_generator",
    # Naming
    "KOTLIN_RESERVED_WORDS",
    "escape_identifier",
    "kotlin_string",
    # Configuration
    "KotlinConfig",
    "KOTLIN_TYPE_MAP",
]
