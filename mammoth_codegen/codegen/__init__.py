"""
Mammoth Code Generation Module

Generates analytics event code in various languages from a Mammoth schema.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.errors import (
    GeneratorError,
    InvalidValueError,
    InvalidEventTypeError,
    MissingEventTypeError,
    DuplicateIdentifierError,
)
from .core.schema import Schema, SchemaError, load_schema
from .core.config import GeneratorConfig, ConfigManager, load_config

ConfigSource = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


def generate(
    schema: Schema,
    output_class_name: str = "AnalyticsEvent",
    include_schema_metadata: bool = True,
    language: str = "kotlin",
) -> str:
    """
    Generate the source text for a decoded schema.

    Args:
        schema: Decoded schema
        output_class_name: Name of the generated object/class
        include_schema_metadata: Whether events carry schema id and version
        language: Target language name or alias

    Returns:
        Generated code string

    Raises:
        GeneratorError: Any of the typed generation errors
    """
    generator = get_generator(
        language,
        {
            "output_class_name": output_class_name,
            "include_schema_metadata": include_schema_metadata,
        },
    )
    return generator.format_code(generator.generate(schema))


def generate_from_document(
    document, language: str = "kotlin", config: ConfigSource = None
) -> GenerationResult:
    """
    Decode a schema document and generate code for it.

    Args:
        document: Schema JSON as a mapping, str or bytes
        language: Target language name
        config: Generator configuration, override dict or config file path

    Returns:
        GenerationResult with generated code; decode and generation errors
        are captured in the result
    """
    try:
        schema = load_schema(document)
        generator = get_generator(language, config)
    except (SchemaError, RegistryError) as e:
        return GenerationResult.error(str(e), exception=e)

    return generate_code(generator, schema)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "InvalidValueError",
    "InvalidEventTypeError",
    "MissingEventTypeError",
    "DuplicateIdentifierError",
    "Schema",
    "SchemaError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "load_schema",
    "generate",
    "generate_from_document",
    "generate_code",
    "get_generator",
    "get_language_info",
    "is_language_supported",
    "list_supported_languages",
]
