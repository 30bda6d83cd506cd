import pytest

from mammoth_codegen.codegen.core.builder import (
    build_source_file,
    find_identifier_conflicts,
    header_lines,
)
from mammoth_codegen.codegen.core.config import GeneratorConfig
from mammoth_codegen.codegen.core.errors import DuplicateIdentifierError
from mammoth_codegen.codegen.core.schema import load_schema

from conftest import make_document, make_event


def test_source_file_layout(route_schema):
    source = build_source_file(route_schema)

    assert source.header_lines == (
        "whitelabel schema version 3",
        "Generated with mammoth-codegen",
        "Do not edit manually.",
    )
    assert source.object_name == "AnalyticsEvent"
    assert source.schema_version == "3"
    assert [f.identifier for f in source.functions] == ["routeSearch", "appStart"]
    # Types without a string enum produce nothing
    assert [e.identifier for e in source.enums] == ["EventType", "TransportType"]
    assert source.has_defaults


def test_metadata_off_drops_schema_version(whitelabel_schema):
    source = build_source_file(
        whitelabel_schema,
        GeneratorConfig(include_schema_metadata=False, output_class_name="Events"),
    )
    assert source.schema_version is None
    assert source.object_name == "Events"
    assert not source.has_defaults


def test_header_lines(whitelabel_schema):
    assert header_lines(whitelabel_schema)[0] == "whitelabel schema version 1"


def _colliding_schema():
    return load_schema(
        make_document(
            [make_event(1, "screen_open"), make_event(2, "ScreenOpen")],
            types=[
                {"name": "kind", "stringEnum": ["a b", "ab"]},
                {"name": "Kind", "stringEnum": ["x"]},
            ],
        )
    )


def test_identifier_conflicts_are_reported():
    source = build_source_file(_colliding_schema())

    assert find_identifier_conflicts(source) == [
        ("object AnalyticsEvent", "screenOpen"),
        ("top-level types", "Kind"),
        ("enum Kind", "AB"),
    ]
    # Kept as declared, nothing is renamed
    assert [f.identifier for f in source.functions] == ["screenOpen", "screenOpen"]


def test_strict_identifiers_turns_conflicts_into_errors():
    with pytest.raises(DuplicateIdentifierError, match="screenOpen"):
        build_source_file(_colliding_schema(), GeneratorConfig(strict_identifiers=True))
