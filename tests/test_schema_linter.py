from __future__ import annotations

from schema_engine import SchemaNode, lint_schema
from schema_engine.linter import SchemaLinter
from schema_engine.models import ERROR, WARNING


def _paths(issues, severity=ERROR):
    return [i.path for i in issues if i.severity == severity]


def test_clean_tree_has_no_issues():
    node = SchemaNode(
        type="object",
        properties={"name": SchemaNode(type="string", min_length=1, max_length=10)},
        required=["name"],
    )

    assert lint_schema(node) == []


def test_programmatic_trees_are_checked_for_invariants():
    node = SchemaNode(
        type=["string", "string"],
        enum=[],
        any_of=[],
        required=["a", "a"],
    )

    assert set(_paths(lint_schema(node))) == {"/type", "/enum", "/anyOf", "/required"}


def test_issues_in_children_carry_schema_paths():
    node = SchemaNode(
        items=[SchemaNode(), SchemaNode(min_length=3, max_length=2)],
        definitions={"a/b": SchemaNode(minimum=2, maximum=1)},
        dependencies={"x": SchemaNode(pattern="(")},
    )

    assert set(_paths(lint_schema(node))) == {
        "/items/1/maxLength",
        "/definitions/a~1b/maximum",
        "/dependencies/x/pattern",
    }


def test_property_dependency_lists():
    node = SchemaNode(dependencies={"a": [], "b": ["c", "c"]})

    messages = [i.message for i in lint_schema(node)]

    assert "Property dependency array for a must not be empty" in messages
    assert "Duplicate dependency in property dependency array for b: c" in messages


def test_negative_counts():
    issues = lint_schema(SchemaNode(min_items=-1, max_properties=-2))

    assert set(_paths(issues)) == {"/minItems", "/maxProperties"}


def test_const_must_satisfy_its_node():
    issues = lint_schema(SchemaNode(type="integer", minimum=10, const=5))

    assert _paths(issues) == ["/const"]
    assert "const value violates its own schema" in issues[0].message


def test_default_mismatch_is_warning_only():
    issues = lint_schema(SchemaNode(type="string", max_length=2, default="toolong"))

    assert _paths(issues) == []
    assert _paths(issues, WARNING) == ["/default"]


def test_self_consistency_skipped_for_broken_nodes():
    issues = lint_schema(SchemaNode(pattern="[", const="x"))

    assert _paths(issues) == ["/pattern"]


def test_root_metadata_only_checked_at_root():
    node = SchemaNode(title="only a title")

    assert lint_schema(node) == []
    assert set(_paths(SchemaLinter(root=True).lint(node))) == {"/$schema", "/$id", "/description"}


def test_boolean_root_has_no_metadata_requirements():
    assert lint_schema(SchemaNode.always(), root=True) == []
