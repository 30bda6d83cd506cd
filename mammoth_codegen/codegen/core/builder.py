"""
Assembles the language-neutral SourceFile for a whole schema.
"""

from collections import Counter
from typing import List, Optional, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig
from .definitions import SourceFile
from .enums import build_enum_definition, find_duplicate_constants
from .errors import DuplicateIdentifierError
from .events import build_event_function
from .schema import Schema

logger = get_logger(__name__)

GENERATOR_ATTRIBUTION = ("Generated with mammoth-codegen", "Do not edit manually.")


def header_lines(schema: Schema) -> Tuple[str, ...]:
    """Header comment lines: schema identity, then the fixed attribution."""
    return (
        f"{schema.project_id} schema version {schema.version_number}",
    ) + GENERATOR_ATTRIBUTION


def build_source_file(
    schema: Schema, config: Optional[GeneratorConfig] = None
) -> SourceFile:
    """
    Build every definition of the generated file.

    Any error aborts the whole schema; nothing is built partially.

    Args:
        schema: Decoded schema
        config: Generator configuration

    Returns:
        SourceFile with functions in event order and enums in type order
    """
    config = config or GeneratorConfig()

    functions = tuple(build_event_function(event, config) for event in schema.events)
    enums = tuple(
        definition
        for definition in (
            build_enum_definition(type_, config.conventions) for type_ in schema.types
        )
        if definition is not None
    )

    source = SourceFile(
        header_lines=header_lines(schema),
        object_name=config.output_class_name,
        functions=functions,
        enums=enums,
        schema_version=(
            str(schema.version_number) if config.include_schema_metadata else None
        ),
    )

    if config.strict_identifiers:
        conflicts = find_identifier_conflicts(source)
        if conflicts:
            scope, identifier = conflicts[0]
            raise DuplicateIdentifierError(scope, identifier)

    logger.info(
        "Built %d event functions and %d enums for %s v%s",
        len(functions),
        len(enums),
        schema.project_id,
        schema.version_number,
    )
    return source


def find_identifier_conflicts(source: SourceFile) -> List[Tuple[str, str]]:
    """
    Generated identifiers that would clash in the output.

    Returns:
        (scope, identifier) pairs, in emission order
    """
    conflicts = []

    function_counts = Counter(function.identifier for function in source.functions)
    conflicts.extend(
        (f"object {source.object_name}", identifier)
        for identifier, count in function_counts.items()
        if count > 1
    )

    enum_counts = Counter(definition.identifier for definition in source.enums)
    conflicts.extend(
        ("top-level types", identifier)
        for identifier, count in enum_counts.items()
        if count > 1
    )

    for definition in source.enums:
        conflicts.extend(
            (f"enum {definition.identifier}", identifier)
            for identifier in find_duplicate_constants(definition)
        )

    return conflicts
