"""
Core code generation components.

Provides the schema model, the language-neutral definitions and the base
classes used by all language generators.
"""

from .errors import (
    GeneratorError,
    InvalidValueError,
    InvalidEventTypeError,
    MissingEventTypeError,
    DuplicateIdentifierError,
)
from .generator import CodeGenerator, GenerationResult, generate_code
from .schema import (
    Schema,
    Event,
    Parameter,
    Value,
    Tag,
    Type,
    PrimitiveType,
    EnumTypeRef,
    SchemaError,
    load_schema,
)
from .definitions import (
    SourceFile,
    EventFunction,
    EventRecord,
    EnumDefinition,
    ParameterDefinition,
    ExpressionKind,
)
from .builder import build_source_file
from .enums import build_enum_definition
from .events import build_event_function
from .naming import NameSanitizer, NamingCase, normalize, decapitalize
from .config import (
    GeneratorConfig,
    SchemaConventions,
    ConfigManager,
    ConfigError,
    load_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Errors
    "GeneratorError",
    "InvalidValueError",
    "InvalidEventTypeError",
    "MissingEventTypeError",
    "DuplicateIdentifierError",
    # Schema model
    "Schema",
    "Event",
    "Parameter",
    "Value",
    "Tag",
    "Type",
    "PrimitiveType",
    "EnumTypeRef",
    "SchemaError",
    "load_schema",
    # Definitions and builders
    "SourceFile",
    "EventFunction",
    "EventRecord",
    "EnumDefinition",
    "ParameterDefinition",
    "ExpressionKind",
    "build_source_file",
    "build_enum_definition",
    "build_event_function",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "normalize",
    "decapitalize",
    # Configuration system
    "GeneratorConfig",
    "SchemaConventions",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
