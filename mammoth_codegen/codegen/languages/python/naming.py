"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and the builtins generated code relies on.
"""

import json

from ...core.naming import NameSanitizer


# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Builtins the generated functions call or annotate with
PYTHON_BUILTIN_TYPES = {
    "str",
    "int",
    "bool",
    "staticmethod",
    "Enum",
}


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python."""
    return NameSanitizer(PYTHON_RESERVED_WORDS, PYTHON_BUILTIN_TYPES)


def python_string(value: str) -> str:
    """Double-quoted Python string literal."""
    # JSON string escapes are a subset of Python's
    return json.dumps(value, ensure_ascii=False)
