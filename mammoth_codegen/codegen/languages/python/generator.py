"""
Python code generator implementation.

Generates a Python module with one class of static event factories and an
``Enum`` per string-enum type, using templates.
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
from ...core.naming import NameSanitizer, NamingCase, type_name
from ...core.schema import PrimitiveType, Schema, iter_enum_types
from .config import PythonConfig
from .naming import create_python_sanitizer, python_string

logger = get_logger(__name__)


class PythonGenerator(CodeGenerator):
    """Code generator for Python analytics event modules."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        # One naming scope per namespace of the generated module
        self.module_names = create_python_sanitizer()
        self.method_names = create_python_sanitizer()
        self.local_names = create_python_sanitizer()

        # Initialize Python-specific configuration
        self.python_config = PythonConfig(**self.config.language_config)
        self.template_engine.add_filter("python_string", python_string)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    @property
    def default_output_filename(self) -> str:
        return self.config.output_file or "mammoth_events.py"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def render_source(self, source: SourceFile) -> str:
        """Render the complete Python module."""
        logger.debug(
            "Rendering %d functions and %d enums as Python",
            len(source.functions),
            len(source.enums),
        )
        # Reset state
        self._reset_module_scope(self.module_names, source.object_name)
        self.method_names.reset()

        enums = [self._render_enum(definition) for definition in source.enums]
        functions = [self._render_function(function) for function in source.functions]

        context = {
            "header": "\n".join(source.header_lines),
            "enums": enums,
            "runtime_module": self.python_config.runtime_module,
            "runtime_imports": sorted(
                self.python_config.get_runtime_imports(source.has_defaults)
            ),
            "schema_version": source.schema_version,
            "schema_version_constant": self.python_config.schema_version_constant,
            "class_name": source.object_name,
            "functions": functions,
        }
        return self.render_template("module.py.j2", context)

    def validate_schema(self, schema: Schema) -> List[str]:
        """Add enum types whose class name is already taken in the module."""
        warnings = super().validate_schema(schema)

        scope = create_python_sanitizer()
        self._reset_module_scope(scope, self.config.output_class_name)
        for type_ in iter_enum_types(schema):
            identifier = type_name(type_.name)
            class_name = scope.sanitize_name(identifier, NamingCase.PRESERVE)
            if class_name != identifier:
                warnings.append(
                    f"Enum type '{type_.name}' is generated as '{class_name}' "
                    f"to avoid the Python name '{identifier}'"
                )

        return warnings

    def _reset_module_scope(self, scope: NameSanitizer, object_name: str):
        """Forget enum class names and reserve the module's fixed names."""
        config = self.python_config
        scope.reset()
        for name in (
            "annotations",
            config.dual_event_type,
            config.raw_event_type,
            config.context_type,
            config.schema_version_constant,
            object_name,
        ):
            scope.add_used_name(name)

    def _render_function(self, function: EventFunction) -> str:
        """Render one static event factory."""
        config = self.python_config
        name = self.method_names.sanitize_name(function.identifier, NamingCase.SNAKE_CASE)

        # Parameters only have to be unique within their own function
        self.local_names.reset()
        parameters = [self._render_parameter(p) for p in function.parameters]
        defaults = [
            {
                "name": self._local_name(parameter.identifier),
                "expression": config.get_default_expression(parameter.default),
            }
            for parameter in function.parameters
            if parameter.has_default
        ]

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
            tags = ", ".join(python_string(tag) for tag in function.explicit_consumer_tags)
            arguments.append({"name": config.consumer_tags_argument, "value": f"[{tags}]"})

        context = {
            "name": name,
            "docstring": self._docstring(function.description),
            "parameters": parameters,
            "defaults": defaults,
            "return_type": config.dual_event_type,
            "arguments": arguments,
        }
        return self.render_fragment("function.py.j2", context)

    def _render_raw_event(self, record: EventRecord) -> str:
        context = {
            "raw_event_type": self.python_config.raw_event_type,
            "name": record.name,
            "entries": [
                {"key": entry.key, "value": self._render_expression(entry.value)}
                for entry in record.entries
            ],
        }
        return self.render_fragment("raw_event.py.j2", context)

    def _render_enum(self, definition: EnumDefinition) -> str:
        context = {
            "name": self._class_name(definition.identifier),
            "constants": [
                {"name": c.identifier, "value": c.value} for c in definition.constants
            ],
        }
        return self.render_fragment("enum.py.j2", context)

    def _render_parameter(self, parameter: ParameterDefinition) -> str:
        name = self._local_name(parameter.identifier)
        if parameter.has_default:
            # Resolved from the runtime context when the caller passes nothing
            return f"{name}: {self._get_type(parameter, is_optional=True)} = None"
        return f"{name}: {self._get_type(parameter)}"

    def _render_expression(self, expression: Expression) -> str:
        if isinstance(expression, Literal):
            return python_string(expression.text)
        if isinstance(expression, ParameterExpression):
            name = self._local_name(expression.identifier)
            if expression.kind is ExpressionKind.IDENTITY:
                return name
            if expression.kind is ExpressionKind.STRINGIFY:
                if expression.type is PrimitiveType.BOOLEAN:
                    # Same spelling as the other targets: "true" / "false"
                    return f"str({name}).lower()"
                return f"str({name})"
            # Python enums always carry their wire string in .value
            return f"{name}.value"
        return self.python_config.schema_version_constant

    def _local_name(self, identifier: str) -> str:
        return self.local_names.sanitize_name(identifier, NamingCase.SNAKE_CASE)

    def _class_name(self, identifier: str) -> str:
        return self.module_names.sanitize_name(identifier, NamingCase.PRESERVE)

    def _get_type(self, parameter: ParameterDefinition, is_optional: bool = False) -> str:
        if isinstance(parameter.type, PrimitiveType):
            return self.python_config.get_python_type(parameter.type, is_optional)
        enum_type = self._class_name(type_name(parameter.type.name))
        return f"{enum_type} | None" if is_optional else enum_type

    def _docstring(self, description: str) -> Optional[str]:
        if not self.config.add_comments or not description.strip():
            return None

        text = description.strip().replace("\\", "\\\\")
        if text.endswith('"'):
            text = text[:-1] + '\\"'
        text = text.replace('"""', '\\"\\"\\"')

        lines = text.split("\n")
        if len(lines) == 1:
            return f'"""{text}"""'
        return "\n".join([f'"""{lines[0]}'] + lines[1:] + ['"""'])

    def get_language_settings(self) -> Dict[str, Any]:
        """Settings shown by ``--list-languages``."""
        return {
            "runtime_module": self.python_config.runtime_module,
            "dual_event_type": self.python_config.dual_event_type,
            "raw_event_type": self.python_config.raw_event_type,
        }


def create_python_generator(config: Optional[GeneratorConfig] = None) -> PythonGenerator:
    """Create a Python generator with default configuration."""
    if config is None:
        from ...core.config import load_config

        config = load_config("python")

    return PythonGenerator(config)
