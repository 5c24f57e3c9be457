from __future__ import annotations

import pytest

from schema_engine import SchemaNode, build_schema, is_valid, validate

NUMBER = SchemaNode(type="number")
STRING = SchemaNode(type="string")
POSITIVE = SchemaNode(exclusive_minimum=0)
SMALL = SchemaNode(maximum=10)


@pytest.mark.parametrize("value", [-5, 0, 5, 20, "x"])
def test_all_of_is_conjunction(value):
    combined = SchemaNode(all_of=[POSITIVE, SMALL])

    assert is_valid(value, combined) == (is_valid(value, POSITIVE) and is_valid(value, SMALL))


def test_all_of_reports_union_with_instance_paths():
    schema = SchemaNode(
        all_of=[
            SchemaNode(properties={"a": NUMBER}),
            SchemaNode(properties={"b": STRING}),
        ]
    )

    result = validate({"a": "x", "b": 1}, schema)

    assert [(e.path, e.keyword) for e in result] == [("/a", "type"), ("/b", "type")]


def test_any_of_stops_at_first_match():
    schema = SchemaNode(any_of=[STRING, NUMBER])

    assert is_valid(3, schema)
    assert is_valid("3", schema)


def test_any_of_failure_has_synthetic_error_and_nested_errors():
    schema = SchemaNode(any_of=[STRING, SchemaNode(type="boolean")])

    result = validate(5, schema)

    assert result.keywords == ("anyOf", "type", "type")
    assert result.first_error.message == "Value does not match any schema in anyOf"


def test_one_of_exactly_one_match():
    schema = SchemaNode(one_of=[STRING, NUMBER])

    assert is_valid(1, schema)
    assert is_valid("1", schema)


def test_one_of_ambiguity_yields_single_error_without_nested_errors():
    schema = SchemaNode(one_of=[NUMBER, POSITIVE])

    result = validate(5, schema)

    assert len(result) == 1
    assert result.first_error.keyword == "oneOf"
    assert "indices [0, 1]" in result.first_error.message


def test_one_of_no_match_includes_nested_errors():
    schema = SchemaNode(one_of=[STRING, SchemaNode(type="boolean")])

    result = validate(5, schema)

    assert result.keywords == ("oneOf", "type", "type")


def test_not():
    schema = SchemaNode(not_=STRING)

    assert is_valid(1, schema)
    result = validate("s", schema)
    assert result.keywords == ("not",)


def test_if_then_else():
    schema = build_schema(
        {
            "if": {"properties": {"country": {"const": "US"}}},
            "then": {"properties": {"zip": {"pattern": "^[0-9]{5}$"}}},
            "else": {"properties": {"zip": {"pattern": "^[A-Z0-9 ]+$"}}},
        }
    )

    assert is_valid({"country": "US", "zip": "12345"}, schema)
    assert is_valid({"country": "CA", "zip": "K1A 0B1"}, schema)

    then_failure = validate({"country": "US", "zip": "K1A"}, schema)
    assert then_failure.keywords == ("then", "pattern")
    assert then_failure.errors[1].path == "/zip"

    else_failure = validate({"country": "CA", "zip": "k1a"}, schema)
    assert else_failure.keywords == ("else", "pattern")


def test_conditional_without_branches_is_trivially_valid():
    assert is_valid("x", SchemaNode(if_=NUMBER))
    assert is_valid("x", SchemaNode(if_=STRING, else_=NUMBER))
    assert is_valid(1, SchemaNode(if_=STRING, then=NUMBER))


def test_composition_accumulates_with_type_specific_keywords():
    schema = SchemaNode(any_of=[STRING], minimum=10)

    result = validate(3, schema)

    assert set(result.keywords) == {"anyOf", "type", "minimum"}
