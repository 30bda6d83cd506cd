import pytest

from mammoth_codegen.codegen.core.config import GeneratorConfig, SchemaConventions
from mammoth_codegen.codegen.core.definitions import (
    ExpressionKind,
    Literal,
    ParameterExpression,
    SchemaVersionReference,
)
from mammoth_codegen.codegen.core.errors import (
    DuplicateIdentifierError,
    InvalidEventTypeError,
    InvalidValueError,
    MissingEventTypeError,
)
from mammoth_codegen.codegen.core.events import build_event_function, publish_value
from mammoth_codegen.codegen.core.schema import (
    EnumTypeRef,
    Event,
    Parameter,
    PrimitiveType,
    Tag,
    Value,
    load_schema,
)

from conftest import EVENT_TYPE, make_document, make_event, make_parameter, make_value


def _event(**kwargs) -> Event:
    document = make_document([make_event(**kwargs)])
    return load_schema(document).events[0]


def test_whitelabel_event(whitelabel_schema):
    function = build_event_function(whitelabel_schema.events[0])

    assert function.identifier == "someScreenOpen"
    assert function.description == "Some screen was opened"
    assert function.parameters == ()
    assert function.explicit_consumer_tags is None

    assert function.business.name == "SomeScreenOpen"
    assert function.business.keys() == ("event_type", "schema_event_id", "schema_version")
    assert function.business.get("event_type") == Literal("screen_open")
    assert function.business.get("schema_event_id") == Literal("0")
    assert function.business.get("schema_version") == SchemaVersionReference()

    assert function.publish.name == "screen_open"
    assert function.publish.keys() == ("achievement_id", "score")


def test_route_event_maps(route_schema):
    function = build_event_function(route_schema.events[0])

    assert function.business.keys() == (
        "event_type",
        "source",
        "is_first",
        "screen_name",
        "result_count",
        "has_results",
        "transport",
        "modal_name",
        "schema_event_id",
        "schema_version",
    )
    assert function.business.get("is_first") == Literal("true")
    assert function.business.get("result_count") == ParameterExpression(
        "resultCount", PrimitiveType.INTEGER, ExpressionKind.STRINGIFY
    )
    assert function.business.get("transport") == ParameterExpression(
        "transport", EnumTypeRef("transport_type"), ExpressionKind.ENUM_VALUE
    )
    assert function.business.get("screen_name").kind is ExpressionKind.IDENTITY

    # Publish keys use publishName and never repeat the event type
    assert function.publish.name == "element_tap"
    assert function.publish.keys() == (
        "origin",
        "is_first",
        "screen_name",
        "count",
        "has_results",
        "transport",
        "modal_name",
        "achievement_id",
        "score",
    )
    assert function.publish.get("achievement_id") == Literal("7")


def test_defaulted_parameters_go_last_in_declaration_order(route_schema):
    function = build_event_function(route_schema.events[0])

    assert [p.identifier for p in function.parameters] == [
        "resultCount",
        "hasResults",
        "transport",
        "screenName",
        "modalName",
    ]
    assert [p.default for p in function.parameters] == [
        None,
        None,
        None,
        "screen_name",
        "modal_name",
    ]


def test_default_ordering_with_count_between_defaults():
    event = _event(
        event_id=1,
        name="Open",
        parameters=[
            make_parameter("screen_name"),
            make_parameter("count", "Integer"),
            make_parameter("modal_name"),
        ],
    )
    function = build_event_function(event)
    assert [p.name for p in function.parameters] == ["count", "screen_name", "modal_name"]


def test_consumer_tags_are_filtered_by_class(route_schema):
    function = build_event_function(route_schema.events[0])
    assert function.explicit_consumer_tags == ("Braze",)


def test_consumer_tag_marker_is_case_insensitive():
    event = _event(
        event_id=1,
        name="Open",
        tags=[
            {"name": "Braze", "class": "Braze/SDK"},
            {"name": "Firebase", "class": "sdk"},
            {"name": "Internal", "class": "Analytics"},
        ],
    )
    assert build_event_function(event).explicit_consumer_tags == ("Braze", "Firebase")


def test_no_event_type_means_no_publish(route_schema):
    function = build_event_function(route_schema.events[1])

    assert function.publish is None
    assert function.explicit_consumer_tags is None
    assert function.business.keys() == ("schema_event_id", "schema_version")


def test_metadata_switch_removes_both_keys(route_schema):
    config = GeneratorConfig(include_schema_metadata=False)
    function = build_event_function(route_schema.events[0], config)

    assert "schema_event_id" not in function.business.keys()
    assert "schema_version" not in function.business.keys()
    assert "achievement_id" not in function.publish.keys()
    assert "score" not in function.publish.keys()

    bare = build_event_function(route_schema.events[1], config)
    assert bare.business.entries == ()


def test_missing_event_type_can_be_required(route_schema):
    config = GeneratorConfig(require_publish_event=True)
    with pytest.raises(MissingEventTypeError, match="AppStart"):
        build_event_function(route_schema.events[1], config)


def test_event_type_must_be_a_string_enum_value():
    event = _event(
        event_id=1, name="Open", values=[make_value(EVENT_TYPE, stringValue="screen_open")]
    )
    with pytest.raises(InvalidEventTypeError, match="Open"):
        build_event_function(event)


def test_event_type_set_twice_is_rejected():
    event = _event(
        event_id=1,
        name="Open",
        values=[
            make_value(EVENT_TYPE, stringEnumValue="screen_open"),
            make_value(EVENT_TYPE, stringEnumValue="element_tap"),
        ],
    )
    with pytest.raises(InvalidEventTypeError, match="more than once"):
        build_event_function(event)


def test_value_without_payload_is_rejected():
    event = _event(event_id=1, name="Open", values=[make_value(make_parameter("source"))])
    with pytest.raises(InvalidValueError, match="Parameter: source"):
        build_event_function(event)


def test_value_with_two_payloads_is_rejected():
    parameter = Parameter("source", PrimitiveType.STRING)
    value = Value(parameter, string_value="map", integer_value=1)
    with pytest.raises(InvalidValueError, match="several values"):
        publish_value(value)


def test_publish_value_spelling():
    parameter = Parameter("p", PrimitiveType.STRING)
    assert publish_value(Value(parameter, integer_value=0)) == "0"
    assert publish_value(Value(parameter, integer_value=-12)) == "-12"
    assert publish_value(Value(parameter, boolean_value=False)) == "false"
    assert publish_value(Value(parameter, string_value="")) == ""
    assert publish_value(Value(parameter, string_enum_value="bus")) == "bus"


def test_duplicate_parameter_names_are_rejected():
    event = _event(
        event_id=1,
        name="Open",
        parameters=[make_parameter("label"), make_parameter("label", "Integer")],
    )
    with pytest.raises(DuplicateIdentifierError, match="label"):
        build_event_function(event)


def test_parameters_collapsing_to_one_identifier_are_rejected():
    event = _event(
        event_id=1,
        name="Open",
        parameters=[make_parameter("screen_name"), make_parameter("screenName")],
    )
    with pytest.raises(DuplicateIdentifierError, match="screenName"):
        build_event_function(event)


def test_custom_conventions_rename_reserved_keys():
    conventions = SchemaConventions(
        event_type_parameter="source",
        publish_event_id_key="event_id",
        defaulted_parameters=(),
    )
    event = Event(
        id=3,
        name="Search",
        values=(Value(Parameter("source", EnumTypeRef("s")), string_enum_value="map"),),
        parameters=(Parameter("screen_name", PrimitiveType.STRING, publish_name="screen_name"),),
        tags=(Tag("Braze", "Sdk"),),
    )
    function = build_event_function(event, GeneratorConfig(conventions=conventions))

    assert function.publish.name == "map"
    assert function.publish.keys() == ("screen_name", "event_id", "score")
    assert not function.parameters[0].has_default
