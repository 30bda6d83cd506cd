"""
Language-neutral definitions of the code to generate.

The enum and event generators build these frozen structures; language
generators only render them. Identifiers stored here follow the schema's
naming rules (upper-camel types, lower-camel functions and parameters,
upper-case enum members); language generators may re-case them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union
from enum import Enum

from .schema import ParameterType


class ExpressionKind(Enum):
    """How a caller-supplied parameter becomes a string in the event map."""

    IDENTITY = "identity"  # String parameters pass through
    STRINGIFY = "stringify"  # Integer and Boolean parameters are converted
    ENUM_VALUE = "enum_value"  # Enum parameters contribute their wire value


@dataclass(frozen=True)
class Literal:
    """A string known at generation time."""

    text: str


@dataclass(frozen=True)
class ParameterExpression:
    """Reference to a function parameter, converted to a string."""

    identifier: str
    type: ParameterType
    kind: ExpressionKind


@dataclass(frozen=True)
class SchemaVersionReference:
    """Reference to the generated schema-version constant."""

    pass


Expression = Union[Literal, ParameterExpression, SchemaVersionReference]


@dataclass(frozen=True)
class MapEntry:
    key: str
    value: Expression


@dataclass(frozen=True)
class EventRecord:
    """A named event with its string parameter map, in emission order."""

    name: str
    entries: Tuple[MapEntry, ...] = ()

    def keys(self) -> Tuple[str, ...]:
        return tuple(entry.key for entry in self.entries)

    def get(self, key: str) -> Optional[Expression]:
        for entry in self.entries:
            if entry.key == key:
                return entry.value
        return None


@dataclass(frozen=True)
class ParameterDefinition:
    """One parameter of a generated event function."""

    identifier: str
    name: str  # Raw schema name
    type: ParameterType
    description: str = ""
    # Reserved parameter name whose runtime-context provider supplies the default
    default: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class EventFunction:
    """A generated function returning the dual business/publish event."""

    identifier: str
    description: str
    event_id: int
    parameters: Tuple[ParameterDefinition, ...]
    business: EventRecord
    publish: Optional[EventRecord] = None
    explicit_consumer_tags: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class EnumConstant:
    identifier: str
    value: str  # Original wire string


@dataclass(frozen=True)
class EnumDefinition:
    identifier: str
    constants: Tuple[EnumConstant, ...]
    value_field: str = "value"


@dataclass(frozen=True)
class SourceFile:
    """Everything one generated source file contains, in emission order."""

    header_lines: Tuple[str, ...]
    object_name: str
    functions: Tuple[EventFunction, ...]
    enums: Tuple[EnumDefinition, ...]
    schema_version: Optional[str] = None  # None when metadata is excluded

    @property
    def has_defaults(self) -> bool:
        return any(
            parameter.has_default
            for function in self.functions
            for parameter in function.parameters
        )
