import json

import pytest

from mammoth_codegen.codegen.core.schema import (
    EnumTypeRef,
    PrimitiveType,
    Schema,
    SchemaError,
    describe_schema,
    iter_enum_types,
    load_schema,
)

from conftest import make_document, make_event, make_parameter


def test_decodes_whitelabel_document(whitelabel_document):
    schema = Schema.from_dict(whitelabel_document)

    assert schema.project_id == "whitelabel"
    assert schema.version_number == 1
    assert len(schema.events) == 1

    event = schema.events[0]
    assert event.id == 0
    assert event.name == "SomeScreenOpen"
    assert event.description == "Some screen was opened"
    assert event.parameters == ()

    value = event.values[0]
    assert value.parameter.name == "event_type"
    assert value.parameter.type == EnumTypeRef("event_type")
    assert value.string_enum_value == "screen_open"
    assert value.payloads() == [("string_enum", "screen_open")]

    assert schema.types[0].string_enum == ("screen_open", "element_tap")


def test_accepts_json_text_and_bytes(whitelabel_document):
    text = json.dumps(whitelabel_document)
    assert load_schema(text) == load_schema(text.encode("utf-8"))
    assert load_schema(text) == load_schema(whitelabel_document)


def test_unknown_fields_are_ignored(whitelabel_document):
    whitelabel_document["owner"] = "growth"
    whitelabel_document["events"][0]["deprecated"] = False
    schema = load_schema(whitelabel_document)
    assert schema.events[0].name == "SomeScreenOpen"


def test_primitive_type_names_resolve_to_primitives():
    document = make_document(
        [
            make_event(
                1,
                "Tap",
                parameters=[
                    make_parameter("label"),
                    make_parameter("count", "Integer"),
                    make_parameter("enabled", "Boolean"),
                    make_parameter("kind", "tap_kind"),
                ],
            )
        ]
    )
    types = [p.type for p in load_schema(document).events[0].parameters]
    assert types == [
        PrimitiveType.STRING,
        PrimitiveType.INTEGER,
        PrimitiveType.BOOLEAN,
        EnumTypeRef("tap_kind"),
    ]


def test_publish_name_defaults_to_name():
    parameter = {"name": "screen_name", "typeName": "String"}
    document = make_document([make_event(1, "Open", parameters=[parameter])])
    assert load_schema(document).events[0].parameters[0].publish_name == "screen_name"


def test_tag_class_key():
    document = make_document(
        [make_event(1, "Open", tags=[{"name": "Braze", "class": "Sdk"}, {"name": "Bare"}])]
    )
    tags = load_schema(document).events[0].tags
    assert tags[0].tag_class == "Sdk"
    assert tags[1].tag_class == ""


def test_missing_required_field_reports_path():
    document = make_document([make_event(1, "Open", parameters=[{"name": "x"}])])
    with pytest.raises(SchemaError, match=r"events\[0\]\.parameters\[0\]\.typeName is required"):
        load_schema(document)


def test_missing_events_is_an_error():
    with pytest.raises(SchemaError, match="events is required"):
        load_schema({"projectId": "p", "versionNumber": 1})


def test_boolean_is_not_an_integer():
    document = make_document([make_event(True, "Open")])
    with pytest.raises(SchemaError, match=r"events\[0\]\.id must be an integer"):
        load_schema(document)


def test_string_enum_must_hold_strings():
    document = make_document([], types=[{"name": "t", "stringEnum": ["a", 1]}])
    with pytest.raises(SchemaError, match="stringEnum"):
        load_schema(document)


def test_invalid_json_text():
    with pytest.raises(SchemaError, match="Invalid JSON"):
        load_schema("{not json")


def test_root_must_be_an_object():
    with pytest.raises(SchemaError, match="schema must be an object"):
        load_schema("[]")


def test_enum_types_and_summary(route_schema):
    assert [t.name for t in iter_enum_types(route_schema)] == ["event_type", "transport_type"]
    assert describe_schema(route_schema) == {
        "project_id": "whitelabel",
        "version_number": 3,
        "event_count": 2,
        "enum_count": 2,
    }
