from __future__ import annotations

import base64
import json

import pytest

from schema_engine import EngineConfig, SchemaNode, SchemaValidator, is_valid, validate


class TestStrings:
    def test_length_counts_code_points(self):
        schema = SchemaNode(type="string", min_length=2, max_length=3)

        assert is_valid("né", schema)
        assert is_valid("😀😀😀", schema)
        assert validate("😀😀😀😀", schema).keywords == ("maxLength",)
        assert validate("a", schema).keywords == ("minLength",)

    def test_pattern_is_not_anchored(self):
        schema = SchemaNode(pattern="b+")

        assert is_valid("abbbc", schema)
        result = validate("ac", schema)
        assert result.keywords == ("pattern",)
        assert result.first_error.expected == "b+"

    def test_string_errors_accumulate(self):
        schema = SchemaNode(min_length=5, pattern="^[0-9]+$")

        assert set(validate("ab", schema).keywords) == {"minLength", "pattern"}

    def test_format_error_carries_reason(self):
        result = validate("not-an-email", SchemaNode(format="email"))

        assert result.keywords == ("format",)
        assert result.first_error.message.startswith("Invalid email format")

    def test_unknown_format_is_accepted(self):
        assert is_valid("anything", SchemaNode(format="x-custom"))

    def test_format_assertion_can_be_disabled(self):
        validator = SchemaValidator(config=EngineConfig(format_assertion=False))

        assert validator.is_valid("not-a-date", SchemaNode(format="date"))

    def test_keywords_only_apply_to_strings(self):
        assert is_valid(12345, SchemaNode(max_length=1, pattern="^x$", format="email"))


class TestContent:
    def test_base64(self):
        schema = SchemaNode(content_encoding="base64")

        assert is_valid(base64.b64encode(b"hello").decode(), schema)
        result = validate("not base64!", schema)
        assert result.keywords == ("contentEncoding",)

    def test_base64_json_payload(self):
        schema = SchemaNode(content_encoding="base64", content_media_type="application/json")

        assert is_valid(base64.b64encode(json.dumps({"a": 1}).encode()).decode(), schema)
        result = validate(base64.b64encode(b"hello").decode(), schema)
        assert result.keywords == ("contentMediaType",)
        assert result.first_error.message == "Decoded content is not valid JSON"

    def test_plain_json_media_type(self):
        schema = SchemaNode(content_media_type="application/json")

        assert is_valid('{"a": [1, 2]}', schema)
        assert validate("{a: 1}", schema).first_error.message == "Content is not valid JSON"

    def test_other_encodings_are_not_checked(self):
        assert is_valid("%%%", SchemaNode(content_encoding="quoted-printable"))


class TestNumbers:
    def test_inclusive_bounds(self):
        schema = SchemaNode(minimum=1, maximum=3)

        assert is_valid(1, schema)
        assert is_valid(3, schema)
        assert validate(0, schema).keywords == ("minimum",)
        assert validate(3.5, schema).keywords == ("maximum",)

    def test_exclusive_bounds(self):
        schema = SchemaNode(exclusive_minimum=1, exclusive_maximum=3)

        assert is_valid(2, schema)
        assert validate(1, schema).keywords == ("exclusiveMinimum",)
        assert validate(3, schema).keywords == ("exclusiveMaximum",)

    @pytest.mark.parametrize(
        "value, divisor, expected",
        [
            (0.3, 0.1, True),
            (0.7, 0.1, True),
            (0.35, 0.1, False),
            (0.9, 0.3, True),
            (10, 2.5, True),
            (7, 2, False),
            (1e308, 0.5, True),
            (0.0075, 0.0001, True),
        ],
    )
    def test_multiple_of_is_exact(self, value, divisor, expected):
        assert is_valid(value, SchemaNode(multiple_of=divisor)) is expected

    def test_multiple_of_integers_beyond_float_range(self):
        schema = SchemaNode(type="integer", multiple_of=5, minimum=0)

        assert is_valid(10**400, schema)
        assert validate(10**400 + 1, schema).keywords == ("multipleOf",)
        assert is_valid(10**400, SchemaNode(multiple_of=0.5))

    def test_number_keywords_skip_booleans(self):
        assert is_valid(True, SchemaNode(minimum=5))


class TestArrays:
    def test_length_bounds(self):
        schema = SchemaNode(min_items=1, max_items=2)

        assert validate([], schema).keywords == ("minItems",)
        assert validate([1, 2, 3], schema).keywords == ("maxItems",)

    def test_unique_items(self):
        schema = SchemaNode(type="array", unique_items=True)

        assert is_valid([1, 2, 3], schema)
        result = validate([1, 2, 1], schema)
        assert result.keywords == ("uniqueItems",)
        assert result.first_error.actual == [0, 2]

    def test_unique_items_uses_json_equality(self):
        schema = SchemaNode(unique_items=True)

        assert is_valid([1, True], schema)
        assert not is_valid([1, 1.0], schema)
        assert not is_valid([{"a": 1, "b": 2}, {"b": 2, "a": 1}], schema)

    def test_single_items_schema(self):
        result = validate([1, "a", 2, "b"], SchemaNode(items=SchemaNode(type="number")))

        assert [e.path for e in result] == ["/1", "/3"]

    def test_tuple_items_with_additional_items_false(self):
        schema = SchemaNode(
            items=[SchemaNode(type="number"), SchemaNode(type="string")],
            additional_items=False,
        )

        assert is_valid([1], schema)
        assert is_valid([1, "a"], schema)
        result = validate(["x", "a", 3], schema)
        assert [(e.path, e.keyword) for e in result] == [("/0", "type"), ("", "additionalItems")]

    def test_tuple_items_with_additional_items_schema(self):
        schema = SchemaNode(items=[SchemaNode(type="string")], additional_items=SchemaNode(type="number"))

        assert is_valid(["a", 1, 2], schema)
        assert [e.path for e in validate(["a", 1, "b"], schema)] == ["/2"]

    def test_contains_yields_single_error(self):
        schema = SchemaNode(contains=SchemaNode(type="string"))

        assert is_valid([1, "a"], schema)
        assert validate([1, 2, 3], schema).keywords == ("contains",)
        assert validate([], schema).keywords == ("contains",)


class TestObjects:
    def test_property_count(self):
        schema = SchemaNode(min_properties=1, max_properties=2)

        assert validate({}, schema).keywords == ("minProperties",)
        assert validate({"a": 1, "b": 2, "c": 3}, schema).keywords == ("maxProperties",)

    def test_required_reports_each_missing_name(self):
        schema = SchemaNode(required=["a", "b", "c"])

        result = validate({"b": 1}, schema)

        assert [e.expected for e in result] == ["a", "c"]
        assert all(e.path == "" for e in result)

    def test_property_names(self):
        schema = SchemaNode(property_names=SchemaNode(max_length=3))

        result = validate({"abc": 1, "abcd": 2}, schema)

        assert [(e.path, e.keyword) for e in result] == [("/abcd", "propertyNames")]

    def test_pattern_properties_may_overlap(self):
        schema = SchemaNode(
            pattern_properties={"^s_": SchemaNode(type="string"), "_x$": SchemaNode(max_length=1)}
        )

        assert is_valid({"s_x": "a", "other": 1}, schema)
        assert set(validate({"s_x": "ab"}, schema).keywords) == {"maxLength"}
        assert validate({"s_a": 1}, schema).first_error.path == "/s_a"

    def test_additional_properties_false(self):
        schema = SchemaNode(
            properties={"name": SchemaNode(type="string")},
            pattern_properties={"^x-": SchemaNode()},
            additional_properties=False,
        )

        assert is_valid({"name": "a", "x-extra": 1}, schema)
        result = validate({"name": "a", "age": 3}, schema)
        assert [(e.path, e.keyword) for e in result] == [("/age", "additionalProperties")]

    def test_additional_properties_schema(self):
        schema = SchemaNode(properties={"id": SchemaNode()}, additional_properties=SchemaNode(type="number"))

        assert is_valid({"id": "x", "score": 3}, schema)
        assert validate({"id": "x", "score": "high"}, schema).first_error.path == "/score"

    def test_property_dependencies(self):
        schema = SchemaNode(dependencies={"credit_card": ["billing_address", "name"]})

        assert is_valid({"name": "x"}, schema)
        result = validate({"credit_card": 1, "name": "x"}, schema)
        assert result.keywords == ("dependencies",)
        assert result.first_error.expected == "billing_address"

    def test_schema_dependencies(self):
        schema = SchemaNode(dependencies={"credit_card": SchemaNode(required=["billing_address"])})

        assert is_valid({"credit_card": 1, "billing_address": "x"}, schema)
        result = validate({"credit_card": 1}, schema)
        assert result.keywords == ("dependencies", "required")

    def test_object_errors_accumulate(self):
        schema = SchemaNode(
            required=["id"],
            properties={"age": SchemaNode(minimum=0)},
            additional_properties=False,
        )

        result = validate({"age": -1, "extra": True}, schema)

        assert set(result.keywords) == {"required", "minimum", "additionalProperties"}
