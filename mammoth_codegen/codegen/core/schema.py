"""
Core schema representation for code generation.

Decodes the analytics schema document into an immutable internal model
that the enum and event generators consume.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from enum import Enum


class SchemaError(Exception):
    """Exception raised when a schema document cannot be decoded."""

    pass


class PrimitiveType(Enum):
    """Built-in parameter types understood by every target language."""

    STRING = "String"
    INTEGER = "Integer"
    BOOLEAN = "Boolean"


@dataclass(frozen=True)
class EnumTypeRef:
    """Parameter type pointing at a schema Type by its raw name."""

    name: str


ParameterType = Union[PrimitiveType, EnumTypeRef]


def resolve_parameter_type(type_name: str) -> ParameterType:
    """Map a raw ``typeName`` onto the closed set of parameter types."""
    try:
        return PrimitiveType(type_name)
    except ValueError:
        return EnumTypeRef(type_name)


@dataclass(frozen=True)
class Parameter:
    """A typed event parameter supplied by the caller."""

    name: str  # Schema/wire identifier
    type: ParameterType
    description: str = ""
    publish_name: str = ""  # Key used in the publish representation

    @property
    def type_name(self) -> str:
        """Raw type name as it appears in the schema document."""
        if isinstance(self.type, PrimitiveType):
            return self.type.value
        return self.type.name


@dataclass(frozen=True)
class Value:
    """A statically known parameter assignment of an event."""

    parameter: Parameter
    string_value: Optional[str] = None
    integer_value: Optional[int] = None
    boolean_value: Optional[bool] = None
    string_enum_value: Optional[str] = None

    def payloads(self) -> List[Tuple[str, Any]]:
        """Return the payload slots that are set, as (slot, value) pairs."""
        slots = [
            ("string", self.string_value),
            ("integer", self.integer_value),
            ("boolean", self.boolean_value),
            ("string_enum", self.string_enum_value),
        ]
        return [(slot, value) for slot, value in slots if value is not None]


@dataclass(frozen=True)
class Tag:
    """Free-form event tag; ``tag_class`` is the document's ``class`` key."""

    name: str
    tag_class: str = ""


@dataclass(frozen=True)
class Event:
    """One trackable occurrence."""

    id: int
    name: str
    description: str = ""
    values: Tuple[Value, ...] = ()
    parameters: Tuple[Parameter, ...] = ()
    tags: Tuple[Tag, ...] = ()


@dataclass(frozen=True)
class Type:
    """Schema type; only types carrying a string enum produce code."""

    name: str
    string_enum: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class Schema:
    """Decoded event/type catalogue for one project and version."""

    project_id: str
    version_number: int
    events: Tuple[Event, ...] = field(default_factory=tuple)
    types: Tuple[Type, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> "Schema":
        """Decode a schema document, ignoring fields this model does not know."""
        return _SchemaDecoder().decode(document)


class _SchemaDecoder:
    """Walks a raw document and builds the frozen model, tracking field paths."""

    def decode(self, document: Any) -> Schema:
        root = self._mapping(document, "schema")
        events = self._list(root, "events", "schema", required=True)
        types = self._list(root, "types", "schema")
        return Schema(
            project_id=self._require(root, "projectId", str, "schema"),
            version_number=self._require(root, "versionNumber", int, "schema"),
            events=tuple(
                self._event(item, f"events[{i}]") for i, item in enumerate(events)
            ),
            types=tuple(
                self._type(item, f"types[{i}]") for i, item in enumerate(types)
            ),
        )

    def _event(self, raw: Any, path: str) -> Event:
        node = self._mapping(raw, path)
        values = self._list(node, "values", path)
        parameters = self._list(node, "parameters", path)
        tags = self._list(node, "tags", path)
        return Event(
            id=self._require(node, "id", int, path),
            name=self._require(node, "name", str, path),
            description=self._optional(node, "description", str, path) or "",
            values=tuple(
                self._value(item, f"{path}.values[{i}]")
                for i, item in enumerate(values)
            ),
            parameters=tuple(
                self._parameter(item, f"{path}.parameters[{i}]")
                for i, item in enumerate(parameters)
            ),
            tags=tuple(
                self._tag(item, f"{path}.tags[{i}]") for i, item in enumerate(tags)
            ),
        )

    def _value(self, raw: Any, path: str) -> Value:
        node = self._mapping(raw, path)
        return Value(
            parameter=self._parameter(node.get("parameter"), f"{path}.parameter"),
            string_value=self._optional(node, "stringValue", str, path),
            integer_value=self._optional(node, "integerValue", int, path),
            boolean_value=self._optional(node, "booleanValue", bool, path),
            string_enum_value=self._optional(node, "stringEnumValue", str, path),
        )

    def _parameter(self, raw: Any, path: str) -> Parameter:
        node = self._mapping(raw, path)
        name = self._require(node, "name", str, path)
        return Parameter(
            name=name,
            type=resolve_parameter_type(self._require(node, "typeName", str, path)),
            description=self._optional(node, "description", str, path) or "",
            publish_name=self._optional(node, "publishName", str, path) or name,
        )

    def _tag(self, raw: Any, path: str) -> Tag:
        node = self._mapping(raw, path)
        return Tag(
            name=self._require(node, "name", str, path),
            tag_class=self._optional(node, "class", str, path) or "",
        )

    def _type(self, raw: Any, path: str) -> Type:
        node = self._mapping(raw, path)
        string_enum = node.get("stringEnum")
        if string_enum is not None:
            if not isinstance(string_enum, list) or not all(
                isinstance(entry, str) for entry in string_enum
            ):
                raise SchemaError(f"{path}.stringEnum must be a list of strings")
            string_enum = tuple(string_enum)
        return Type(name=self._require(node, "name", str, path), string_enum=string_enum)

    # Primitive accessors

    def _mapping(self, raw: Any, path: str) -> Mapping[str, Any]:
        if not isinstance(raw, Mapping):
            raise SchemaError(f"{path} must be an object, got {type(raw).__name__}")
        return raw

    def _list(
        self, node: Mapping[str, Any], key: str, path: str, required: bool = False
    ) -> List[Any]:
        raw = node.get(key)
        if raw is None:
            if required:
                raise SchemaError(f"{path}.{key} is required")
            return []
        if not isinstance(raw, list):
            raise SchemaError(f"{path}.{key} must be a list")
        return raw

    def _require(self, node: Mapping[str, Any], key: str, kind: type, path: str) -> Any:
        value = self._optional(node, key, kind, path)
        if value is None:
            raise SchemaError(f"{path}.{key} is required")
        return value

    def _optional(
        self, node: Mapping[str, Any], key: str, kind: type, path: str
    ) -> Any:
        value = node.get(key)
        if value is None:
            return None
        # bool is an int subclass; keep the two JSON kinds apart
        if kind is int and isinstance(value, bool):
            raise SchemaError(f"{path}.{key} must be an integer")
        if not isinstance(value, kind):
            raise SchemaError(
                f"{path}.{key} must be of type {kind.__name__}, "
                f"got {type(value).__name__}"
            )
        return value


def load_schema(document: Union[Mapping[str, Any], str, bytes]) -> Schema:
    """
    Decode a schema document into the internal model.

    Args:
        document: Parsed JSON mapping, or raw JSON text/bytes

    Returns:
        Schema: Immutable schema model

    Raises:
        SchemaError: If the document is not valid JSON or misses required fields
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaError(f"Schema document is not valid UTF-8: {e}") from e

    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid JSON in schema document: {e}") from e

    return Schema.from_dict(document)


def iter_enum_types(schema: Schema) -> List[Type]:
    """Types that produce an enumerated type, in schema order."""
    return [type_ for type_ in schema.types if type_.string_enum is not None]


def describe_schema(schema: Schema) -> Dict[str, Any]:
    """Summary counters used for generation metadata and CLI output."""
    return {
        "project_id": schema.project_id,
        "version_number": schema.version_number,
        "event_count": len(schema.events),
        "enum_count": len(iter_enum_types(schema)),
    }
