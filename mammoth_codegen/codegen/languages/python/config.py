"""
Python-specific configuration and type mappings.

Names the runtime module and types the generated Python module imports.
"""

from typing import Dict, Set

from ...core.errors import GeneratorError
from ...core.schema import PrimitiveType


# Python type mappings
PYTHON_TYPE_MAP = {
    PrimitiveType.STRING: "str",
    PrimitiveType.INTEGER: "int",
    PrimitiveType.BOOLEAN: "bool",
}

# Runtime-context calls backing the reserved parameters
DEFAULT_PROVIDERS = {
    "screen_name": "AnalyticsContext.current_screen_name()",
    "previous_screen_name": "AnalyticsContext.previous_screen_name()",
    "modal_name": "AnalyticsContext.current_modal_name()",
}


class PythonConfig:
    """Python-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Python configuration."""
        # Runtime module and the names imported from it
        self.runtime_module = kwargs.get("runtime_module", "analytics")
        self.dual_event_type = kwargs.get("dual_event_type", "DualEvent")
        self.raw_event_type = kwargs.get("raw_event_type", "RawEvent")
        self.context_type = kwargs.get("context_type", "AnalyticsContext")

        # Generated names
        self.schema_version_constant = kwargs.get(
            "schema_version_constant", "_SCHEMA_VERSION"
        )
        self.business_argument = kwargs.get("business_argument", "business")
        self.publish_argument = kwargs.get("publish_argument", "publish")
        self.consumer_tags_argument = kwargs.get(
            "consumer_tags_argument", "explicit_consumer_tags"
        )

        providers: Dict[str, str] = dict(DEFAULT_PROVIDERS)
        providers.update(kwargs.get("default_providers", {}))
        self.default_providers = providers

    def get_python_type(self, primitive: PrimitiveType, is_optional: bool = False) -> str:
        """Get Python type string for a primitive parameter type."""
        python_type = PYTHON_TYPE_MAP[primitive]
        if is_optional:
            python_type = f"{python_type} | None"
        return python_type

    def get_default_expression(self, reserved_name: str) -> str:
        """Expression providing the default of a reserved parameter."""
        try:
            return self.default_providers[reserved_name]
        except KeyError:
            raise GeneratorError(f"No default provider configured for '{reserved_name}'")

    def get_runtime_imports(self, uses_context: bool) -> Set[str]:
        """Names imported from the runtime module."""
        names = {self.dual_event_type, self.raw_event_type}
        if uses_context:
            names.add(self.context_type)
        return names
