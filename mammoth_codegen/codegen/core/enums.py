"""
Enumerated type generation for string-enum schema types.
"""

from collections import Counter
from typing import List, Optional

from ...logging_config import get_logger
from .config import SchemaConventions
from .definitions import EnumConstant, EnumDefinition
from .naming import enum_constant_name, type_name
from .schema import Type

logger = get_logger(__name__)


def build_enum_definition(
    type_: Type, conventions: Optional[SchemaConventions] = None
) -> Optional[EnumDefinition]:
    """
    Build the enumerated type for one schema type.

    Args:
        type_: Schema type
        conventions: Reserved names (only ``enum_value_field`` is used)

    Returns:
        EnumDefinition with one constant per string, or None for types
        without a string enum
    """
    if type_.string_enum is None:
        return None

    conventions = conventions or SchemaConventions()
    constants = tuple(
        EnumConstant(identifier=enum_constant_name(entry), value=entry)
        for entry in type_.string_enum
    )
    logger.debug("Enum %s: %d constants", type_.name, len(constants))

    return EnumDefinition(
        identifier=type_name(type_.name),
        constants=constants,
        value_field=conventions.enum_value_field,
    )


def find_duplicate_constants(definition: EnumDefinition) -> List[str]:
    """Constant identifiers that occur more than once, in first-seen order."""
    counts = Counter(constant.identifier for constant in definition.constants)
    return [identifier for identifier, count in counts.items() if count > 1]
