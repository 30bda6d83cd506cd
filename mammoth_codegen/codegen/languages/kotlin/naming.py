"""
Kotlin-specific naming utilities.

Kotlin accepts any hard keyword as an identifier once it is wrapped in
backticks, so generated names are escaped rather than renamed.
"""

# Kotlin hard keywords
KOTLIN_RESERVED_WORDS = {
    "as",
    "break",
    "class",
    "continue",
    "do",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "in",
    "interface",
    "is",
    "null",
    "object",
    "package",
    "return",
    "super",
    "this",
    "throw",
    "true",
    "try",
    "typealias",
    "typeof",
    "val",
    "var",
    "when",
    "while",
}


def escape_identifier(name: str) -> str:
    """Backtick-quote names that collide with a Kotlin keyword."""
    if name in KOTLIN_RESERVED_WORDS:
        return f"`{name}`"
    return name


def kotlin_string(value: str) -> str:
    """Kotlin string literal for any Python string."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'
