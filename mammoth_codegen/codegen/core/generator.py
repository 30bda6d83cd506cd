"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .builder import build_source_file, find_identifier_conflicts
from .config import GeneratorConfig
from .definitions import SourceFile
from .errors import GeneratorError
from .schema import EnumTypeRef, Schema, describe_schema, iter_enum_types
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'kotlin', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.kt', '.py')."""
        pass

    @property
    def default_output_filename(self) -> str:
        """File name used when the configuration does not name one."""
        return self.config.output_file or f"MammothEvents{self.file_extension}"

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def generate(self, schema: Schema) -> str:
        """
        Generate code for a whole schema.

        Args:
            schema: Decoded schema

        Returns:
            Generated code as a string
        """
        source = build_source_file(schema, self.config)
        return self.render_source(source)

    @abstractmethod
    def render_source(self, source: SourceFile) -> str:
        """
        Render the language-neutral definitions as source text.

        Args:
            source: Definitions built from the schema

        Returns:
            Generated code for the whole file
        """
        pass

    def validate_schema(self, schema: Schema) -> List[str]:
        """
        Report problems that do not stop generation but break the output.

        Language generators may extend this with language-specific checks.

        Args:
            schema: Schema to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        enum_names = {type_.name for type_ in iter_enum_types(schema)}

        for event in schema.events:
            parameters = list(event.parameters) + [v.parameter for v in event.values]
            for parameter in parameters:
                if (
                    isinstance(parameter.type, EnumTypeRef)
                    and parameter.type.name not in enum_names
                ):
                    warnings.append(
                        f"Parameter {event.name}.{parameter.name} refers to "
                        f"'{parameter.type.name}', which has no string enum"
                    )

        if not self.config.strict_identifiers:
            # Strict mode turns these into errors while building
            try:
                source = build_source_file(schema, self.config)
            except GeneratorError:
                # generate() reports the same error
                return warnings
            for scope, identifier in find_identifier_conflicts(source):
                warnings.append(f"Duplicate identifier '{identifier}' in {scope}")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    def get_language_settings(self) -> Dict[str, Any]:
        """Language-specific settings worth showing to users."""
        return {}

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def render_fragment(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template meant for embedding, without its trailing newline."""
        return self.render_template(template_name, context).rstrip("\n")

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, schema: Schema) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        schema: Schema to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata; on failure the
        result carries no code at all
    """
    try:
        warnings = generator.validate_schema(schema)

        code = generator.generate(schema)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "output_class_name": generator.config.output_class_name,
            "include_schema_metadata": generator.config.include_schema_metadata,
            **describe_schema(schema),
        }

        for warning in warnings:
            logger.warning(warning)

        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
