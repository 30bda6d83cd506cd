"""
Kotlin code generator implementation.

Renders event functions inside a Kotlin object and string-enum types as
Kotlin enum classes, using templates.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.definitions import (
    EnumDefinition,
    EventFunction,
    EventRecord,
    Expression,
    ExpressionKind,
    Literal,
    ParameterDefinition,
    ParameterExpression,
    SourceFile,
)
from ...core.generator import CodeGenerator
from ...core.naming import type_name
from ...core.schema import PrimitiveType
from .config import KOTLIN_IMPORT_MAP, KotlinConfig
from .naming import escape_identifier, kotlin_string

logger = get_logger(__name__)


class KotlinGenerator(CodeGenerator):
    """Code generator for Kotlin analytics event objects."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Kotlin generator with configuration."""
        super().__init__(config)

        self.kotlin_config = KotlinConfig(**self.config.language_config)
        self.template_engine.add_filter("kotlin_string", kotlin_string)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "kotlin"

    @property
    def file_extension(self) -> str:
        """Return Kotlin file extension."""
        return ".kt"

    @property
    def default_output_filename(self) -> str:
        return self.config.output_file or "MammothEvents.kt"

    def get_template_directory(self) -> Path:
        """Return the Kotlin templates directory."""
        return Path(__file__).parent / "templates"

    def render_source(self, source: SourceFile) -> str:
        """Render the complete Kotlin file."""
        logger.debug(
            "Rendering %d functions and %d enums as Kotlin",
            len(source.functions),
            len(source.enums),
        )
        functions = [self._render_function(function) for function in source.functions]
        enums = [self._render_enum(definition) for definition in source.enums]

        context = {
            "header": "\n".join(source.header_lines),
            "package_name": self.config.package_name,
            "imports": self._get_imports(source),
            "schema_version": source.schema_version,
            "schema_version_constant": self.kotlin_config.schema_version_constant,
            "object_name": escape_identifier(source.object_name),
            "functions": functions,
            "enums": enums,
        }
        return self.render_template("file.kt.j2", context)

    def _render_function(self, function: EventFunction) -> str:
        """Render one event function."""
        config = self.kotlin_config

        arguments = [
            {
                "name": config.business_argument,
                "value": self._render_raw_event(function.business),
            }
        ]
        if function.publish is not None:
            arguments.append(
                {
                    "name": config.publish_argument,
                    "value": self._render_raw_event(function.publish),
                }
            )
        if function.explicit_consumer_tags is not None:
            tags = ", ".join(kotlin_string(tag) for tag in function.explicit_consumer_tags)
            arguments.append(
                {"name": config.consumer_tags_argument, "value": f"listOf({tags})"}
            )

        context = {
            "name": escape_identifier(function.identifier),
            "description_lines": self._description_lines(function.description),
            "parameters": [self._render_parameter(p) for p in function.parameters],
            "return_type": config.dual_event_type,
            "arguments": arguments,
        }
        return self.render_fragment("function.kt.j2", context)

    def _render_raw_event(self, record: EventRecord) -> str:
        context = {
            "raw_event_type": self.kotlin_config.raw_event_type,
            "name": record.name,
            "entries": [
                {"key": entry.key, "value": self._render_expression(entry.value)}
                for entry in record.entries
            ],
        }
        return self.render_fragment("raw_event.kt.j2", context)

    def _render_enum(self, definition: EnumDefinition) -> str:
        context = {
            "name": escape_identifier(definition.identifier),
            "value_field": escape_identifier(definition.value_field),
            "constants": [
                {"name": escape_identifier(c.identifier), "value": c.value}
                for c in definition.constants
            ],
        }
        return self.render_fragment("enum.kt.j2", context)

    def _render_parameter(self, parameter: ParameterDefinition) -> str:
        rendered = f"{escape_identifier(parameter.identifier)}: {self._get_type(parameter)}"
        if parameter.has_default:
            default = self.kotlin_config.get_default_expression(parameter.default)
            rendered = f"{rendered} = {default}"
        return rendered

    def _render_expression(self, expression: Expression) -> str:
        if isinstance(expression, Literal):
            return kotlin_string(expression.text)
        if isinstance(expression, ParameterExpression):
            identifier = escape_identifier(expression.identifier)
            if expression.kind is ExpressionKind.IDENTITY:
                return identifier
            if expression.kind is ExpressionKind.STRINGIFY:
                return f"{identifier}.toString()"
            return f"{identifier}.{escape_identifier(self.config.conventions.enum_value_field)}"
        return self.kotlin_config.schema_version_constant

    def _get_type(self, parameter: ParameterDefinition) -> str:
        if isinstance(parameter.type, PrimitiveType):
            return self.kotlin_config.get_kotlin_type(parameter.type)
        return escape_identifier(type_name(parameter.type.name))

    def _description_lines(self, description: str) -> List[str]:
        if not self.config.add_comments or not description.strip():
            return []
        text = description.replace("*/", "*&#47;").replace("/*", "&#47;*")
        return text.strip().split("\n")

    def _get_imports(self, source: SourceFile) -> List[str]:
        """Qualified names of the kotlin types the file refers to."""
        types_used = set()

        if source.schema_version is not None or source.enums:
            types_used.add("String")

        for function in source.functions:
            for parameter in function.parameters:
                if isinstance(parameter.type, PrimitiveType):
                    types_used.add(self.kotlin_config.get_kotlin_type(parameter.type))

        return sorted(KOTLIN_IMPORT_MAP[t] for t in types_used)

    def get_language_settings(self) -> Dict[str, Any]:
        """Settings shown by ``--list-languages``."""
        return {
            "package_name": self.config.package_name,
            "dual_event_type": self.kotlin_config.dual_event_type,
            "raw_event_type": self.kotlin_config.raw_event_type,
        }


def create_kotlin_generator(config: Optional[GeneratorConfig] = None) -> KotlinGenerator:
    """Create a Kotlin generator with default configuration."""
    if config is None:
        from ...core.config import load_config

        config = load_config("kotlin")

    return KotlinGenerator(config)
