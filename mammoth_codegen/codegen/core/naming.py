"""
Naming utilities for safe code generation.

Maps raw schema names onto generated identifiers, and handles keyword
conflicts and case conversion for the target languages.
"""

import re
from typing import Set, Dict
from enum import Enum


def normalize(name: str) -> str:
    """
    Turn a snake/space-cased schema name into concatenated upper-camel segments.

    ``"event_type"`` -> ``"EventType"``, ``"Some Screen_open"`` -> ``"SomeScreenOpen"``.
    Only the first letter of each segment changes, so already normalized
    names come back unchanged.
    """
    segments = name.replace(" ", "").split("_")
    return "".join(segment[:1].upper() + segment[1:] for segment in segments)


def decapitalize(identifier: str) -> str:
    """Lowercase only the first character."""
    return identifier[:1].lower() + identifier[1:]


def enum_constant_name(raw: str) -> str:
    """Enum member identifier: spaces removed, upper-cased (``screen_open`` -> ``SCREEN_OPEN``)."""
    # str.upper does not depend on the process locale
    return raw.replace(" ", "").upper()


def type_name(raw: str) -> str:
    return normalize(raw)


def function_name(raw: str) -> str:
    return decapitalize(normalize(raw))


def parameter_name(raw: str) -> str:
    return decapitalize(normalize(raw))


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    PRESERVE = "preserve"     # keep identifier as generated


class NameSanitizer:
    """Handles name sanitization and case conversion for one target language."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin names that generated code must not shadow
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in target language.

        The same input always maps to the same output until ``reset`` is
        called; distinct inputs that collide get a numeric suffix.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)

        # Case conversion strips leading underscores, so guard digits afterwards
        if converted[:1].isdigit():
            converted = f"_{converted}"

        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name)
        cleaned = cleaned.strip('_')

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        # Split acronym runs from the following word (HTTPCode -> HTTP_Code)
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)

        return name.strip('_')

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name in self.reserved_words or name in self.builtin_types:
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{suffix}{counter}"
            counter += 1

        return name

    def reset(self):
        """Forget every name handed out so far."""
        self._name_cache.clear()
        self._used_names.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)
