"""
Kotlin-specific configuration and type mappings.

Names the runtime types the generated Kotlin code is compiled against.
"""

from typing import Dict

from ...core.errors import GeneratorError
from ...core.schema import PrimitiveType


# Kotlin type mappings
KOTLIN_TYPE_MAP = {
    PrimitiveType.STRING: "String",
    PrimitiveType.INTEGER: "Int",
    PrimitiveType.BOOLEAN: "Boolean",
}

# Qualified names imported when a type is referenced
KOTLIN_IMPORT_MAP = {
    "String": "kotlin.String",
    "Int": "kotlin.Int",
    "Boolean": "kotlin.Boolean",
}

# Runtime-context properties backing the reserved parameters
DEFAULT_PROVIDERS = {
    "screen_name": "Analytics.currentScreenName",
    "previous_screen_name": "Analytics.previousScreenName",
    "modal_name": "Analytics.currentModalName",
}


class KotlinConfig:
    """Kotlin-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Kotlin configuration."""
        # Runtime types
        self.dual_event_type = kwargs.get("dual_event_type", "Analytics.Event")
        self.raw_event_type = kwargs.get("raw_event_type", "RawEvent")

        # Generated names
        self.schema_version_constant = kwargs.get(
            "schema_version_constant", "mammothSchemaVersion"
        )
        self.business_argument = kwargs.get("business_argument", "business")
        self.publish_argument = kwargs.get("publish_argument", "publish")
        self.consumer_tags_argument = kwargs.get(
            "consumer_tags_argument", "explicitConsumerTags"
        )

        providers: Dict[str, str] = dict(DEFAULT_PROVIDERS)
        providers.update(kwargs.get("default_providers", {}))
        self.default_providers = providers

    def get_kotlin_type(self, primitive: PrimitiveType) -> str:
        """Get Kotlin type name for a primitive parameter type."""
        return KOTLIN_TYPE_MAP[primitive]

    def get_default_expression(self, reserved_name: str) -> str:
        """Expression providing the default of a reserved parameter."""
        try:
            return self.default_providers[reserved_name]
        except KeyError:
            raise GeneratorError(f"No default provider configured for '{reserved_name}'")
