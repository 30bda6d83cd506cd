"""
Event function generation.

Each schema event becomes one function whose result carries a business
event (always), a publish event (only for events with an ``event_type``
value) and the names of explicitly targeted consumers.
"""

from typing import List, Optional, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig, SchemaConventions
from .definitions import (
    EventFunction,
    EventRecord,
    ExpressionKind,
    Literal,
    MapEntry,
    ParameterDefinition,
    ParameterExpression,
    SchemaVersionReference,
)
from .errors import (
    DuplicateIdentifierError,
    InvalidEventTypeError,
    InvalidValueError,
    MissingEventTypeError,
)
from .naming import function_name, parameter_name
from .schema import EnumTypeRef, Event, Parameter, PrimitiveType, Value

logger = get_logger(__name__)


def build_event_function(
    event: Event, config: Optional[GeneratorConfig] = None
) -> EventFunction:
    """
    Build the generated function for one event.

    Args:
        event: Schema event
        config: Generator configuration (metadata switch, reserved names)

    Returns:
        EventFunction definition

    Raises:
        InvalidValueError: A static value has no (or more than one) payload
        InvalidEventTypeError: The event_type value is not a string-enum member
        MissingEventTypeError: No event_type value while a publish event is required
        DuplicateIdentifierError: Two parameters share a raw name
    """
    config = config or GeneratorConfig()
    conventions = config.conventions

    _check_unique_parameters(event)

    event_type_value = _find_event_type_value(event, conventions)
    if event_type_value is None and config.require_publish_event:
        raise MissingEventTypeError(event.name)

    business = EventRecord(
        name=event.name,
        entries=tuple(
            [MapEntry(v.parameter.name, Literal(publish_value(v))) for v in event.values]
            + [MapEntry(p.name, parameter_expression(p)) for p in event.parameters]
            + _metadata_entries(
                event,
                config,
                conventions.business_event_id_key,
                conventions.business_schema_version_key,
            )
        ),
    )

    publish = None
    if event_type_value is not None:
        publish = EventRecord(
            name=event_type_value.string_enum_value,
            entries=tuple(
                [
                    MapEntry(v.parameter.publish_name, Literal(publish_value(v)))
                    for v in event.values
                    if v is not event_type_value
                ]
                + [
                    MapEntry(p.publish_name, parameter_expression(p))
                    for p in event.parameters
                ]
                + _metadata_entries(
                    event,
                    config,
                    conventions.publish_event_id_key,
                    conventions.publish_schema_version_key,
                )
            ),
        )

    function = EventFunction(
        identifier=function_name(event.name),
        description=event.description,
        event_id=event.id,
        parameters=build_parameters(event.parameters, conventions),
        business=business,
        publish=publish,
        explicit_consumer_tags=explicit_consumer_tags(event, conventions),
    )
    logger.debug(
        "Event %s -> %s (publish=%s)",
        event.name,
        function.identifier,
        publish.name if publish else None,
    )
    return function


def build_parameters(
    parameters: Tuple[Parameter, ...], conventions: SchemaConventions
) -> Tuple[ParameterDefinition, ...]:
    """Function parameters, non-defaulted first, declaration order kept within each group."""
    definitions = [
        ParameterDefinition(
            identifier=parameter_name(p.name),
            name=p.name,
            type=p.type,
            description=p.description,
            default=p.name if p.name in conventions.defaulted_parameters else None,
        )
        for p in parameters
    ]
    # sorted() is stable
    return tuple(sorted(definitions, key=lambda d: d.has_default))


def publish_value(value: Value) -> str:
    """String form of a static value's single payload."""
    payloads = value.payloads()
    if not payloads:
        raise InvalidValueError(value.parameter.name)
    if len(payloads) > 1:
        slots = ", ".join(slot for slot, _ in payloads)
        raise InvalidValueError(value.parameter.name, f"several values set: {slots}")

    slot, payload = payloads[0]
    if slot == "boolean":
        return "true" if payload else "false"
    return str(payload)


def parameter_expression(parameter: Parameter) -> ParameterExpression:
    """How the parameter's runtime value is turned into a map string."""
    if parameter.type is PrimitiveType.STRING:
        kind = ExpressionKind.IDENTITY
    elif isinstance(parameter.type, EnumTypeRef):
        kind = ExpressionKind.ENUM_VALUE
    else:
        kind = ExpressionKind.STRINGIFY
    return ParameterExpression(
        identifier=parameter_name(parameter.name), type=parameter.type, kind=kind
    )


def explicit_consumer_tags(
    event: Event, conventions: SchemaConventions
) -> Optional[Tuple[str, ...]]:
    """Names of tags addressed to explicit consumers, or None when there are none."""
    marker = conventions.consumer_tag_marker.lower()
    names = tuple(tag.name for tag in event.tags if marker in tag.tag_class.lower())
    return names or None


def _find_event_type_value(
    event: Event, conventions: SchemaConventions
) -> Optional[Value]:
    matches = [
        value
        for value in event.values
        if value.parameter.name == conventions.event_type_parameter
    ]
    if not matches:
        return None
    if len(matches) > 1:
        raise InvalidEventTypeError(event.name, "is set more than once")

    value = matches[0]
    if value.string_enum_value is None or len(value.payloads()) != 1:
        raise InvalidEventTypeError(event.name)
    return value


def _metadata_entries(
    event: Event, config: GeneratorConfig, id_key: str, version_key: str
) -> List[MapEntry]:
    if not config.include_schema_metadata:
        return []
    return [
        MapEntry(id_key, Literal(str(event.id))),
        MapEntry(version_key, SchemaVersionReference()),
    ]


def _check_unique_parameters(event: Event):
    seen_names = set()
    seen_identifiers = set()
    for parameter in event.parameters:
        identifier = parameter_name(parameter.name)
        if parameter.name in seen_names:
            raise DuplicateIdentifierError(
                f"parameters of event {event.name}", parameter.name
            )
        if identifier in seen_identifiers:
            raise DuplicateIdentifierError(
                f"parameters of event {event.name}", identifier
            )
        seen_names.add(parameter.name)
        seen_identifiers.add(identifier)
