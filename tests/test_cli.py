from __future__ import annotations

import json

import pytest

from schema_engine.linter import lint_files
from schema_engine.linter.run_lint import main as lint_main
from schema_engine.run_validate import main as validate_main

PERSON_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$id": "https://example.com/person.schema.json",
    "title": "Person",
    "description": "A person record",
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "age": {"type": "integer", "minimum": 0},
    },
    "additionalProperties": False,
}


def _exit_code(func, argv):
    with pytest.raises(SystemExit) as excinfo:
        func(argv)
    return excinfo.value.code


@pytest.mark.usefixtures("restore_logging")
class TestValidateCommand:
    def test_valid_instance(self, write_json, capsys):
        schema = write_json("person.schema.json", PERSON_SCHEMA)
        instance = write_json("alice.json", {"name": "Alice", "age": 30})

        assert _exit_code(validate_main, [str(schema), str(instance)]) == 0
        assert "Validation succeeded for 1 document(s)." in capsys.readouterr().out

    def test_invalid_instance_json_report(self, write_json, capsys):
        schema = write_json("person.schema.json", PERSON_SCHEMA)
        instance = write_json("bad.json", {"age": -1, "extra": True})

        assert _exit_code(validate_main, [str(schema), str(instance), "--format", "json"]) == 1

        report = json.loads(capsys.readouterr().out)
        errors = report["results"][0]["errors"]
        assert {(e["path"], e["keyword"]) for e in errors} == {
            ("", "required"),
            ("/age", "minimum"),
            ("/extra", "additionalProperties"),
        }
        assert all("line" in e for e in errors)

    def test_first_error_only(self, write_json, capsys):
        schema = write_json("person.schema.json", PERSON_SCHEMA)
        instance = write_json("bad.json", {"age": -1, "extra": True})

        _exit_code(validate_main, [str(schema), str(instance), "--format", "json", "--first-error"])

        report = json.loads(capsys.readouterr().out)
        assert report["errors"] == 1

    def test_yaml_instance_with_line_numbers(self, tmp_path, write_json, capsys):
        schema = write_json("person.schema.json", PERSON_SCHEMA)
        instance = tmp_path / "bob.yaml"
        instance.write_text("name: Bob\nage: many\n", encoding="utf-8")

        assert _exit_code(validate_main, [str(schema), str(instance), "--format", "github-actions"]) == 1
        assert f"::error file={instance},line=2::Expected integer but got string" in capsys.readouterr().out

    def test_yaml_dates_validate_as_strings(self, tmp_path, write_json):
        schema = write_json(
            "event.schema.json",
            {"type": "object", "properties": {"d": {"type": "string", "format": "date"}}},
        )
        good = tmp_path / "good.yaml"
        good.write_text("d: 2024-01-01\n", encoding="utf-8")
        bad = tmp_path / "bad.yaml"
        bad.write_text("d: 2024-02-30\n", encoding="utf-8")

        assert _exit_code(validate_main, [str(schema), str(good)]) == 0
        assert _exit_code(validate_main, [str(schema), str(bad)]) == 1

    def test_directory_of_instances(self, tmp_path, write_json, capsys):
        schema = write_json("person.schema.json", PERSON_SCHEMA)
        write_json("people/a.json", {"name": "A"})
        write_json("people/b.json", {"name": "B"})

        assert _exit_code(validate_main, [str(schema), str(tmp_path / "people")]) == 0
        assert "2 document(s)" in capsys.readouterr().out

    def test_invalid_schema_is_reported(self, write_json, capsys):
        schema = write_json("broken.schema.json", {"minimum": 5, "maximum": 1})
        instance = write_json("x.json", 3)

        assert _exit_code(validate_main, [str(schema), str(instance)]) == 1
        assert "Invalid schema" in capsys.readouterr().out

    def test_root_flag_requires_metadata(self, write_json):
        schema = write_json("bare.schema.json", {"type": "object"})
        instance = write_json("x.json", {})

        assert _exit_code(validate_main, [str(schema), str(instance)]) == 0
        assert _exit_code(validate_main, [str(schema), str(instance), "--root"]) == 1

    def test_no_instances_found(self, tmp_path, write_json):
        schema = write_json("person.schema.json", PERSON_SCHEMA)

        assert _exit_code(validate_main, [str(schema), str(tmp_path / "nothing-here")]) == 1


@pytest.mark.usefixtures("restore_logging")
class TestLintCommand:
    def test_clean_schema(self, write_json, capsys):
        path = write_json("person.schema.json", PERSON_SCHEMA)

        assert _exit_code(lint_main, [str(path), "--root"]) == 0
        assert "Lint succeeded with no errors." in capsys.readouterr().out

    def test_errors_are_located(self, tmp_path, capsys):
        path = tmp_path / "range.schema.yaml"
        path.write_text("type: number\nminimum: 10\nmaximum: 1\n", encoding="utf-8")

        assert _exit_code(lint_main, [str(path), "--format", "json"]) == 1

        report = json.loads(capsys.readouterr().out)
        (error,) = report["results"][0]["errors"]
        assert error["path"] == "/maximum"
        assert error["line"] == 3

    def test_warnings_do_not_fail(self, write_json, capsys):
        path = write_json("warn.schema.json", {"type": "string", "default": 1})

        assert _exit_code(lint_main, [str(path)]) == 0
        assert "WARNING" in capsys.readouterr().out

    def test_directory_discovery_only_picks_schema_files(self, tmp_path, write_json):
        write_json("schemas/good.schema.json", {"type": "string"})
        write_json("schemas/data.json", {"maximum": 1, "minimum": 2})

        assert _exit_code(lint_main, [str(tmp_path / "schemas")]) == 0

    def test_no_files(self, tmp_path):
        assert _exit_code(lint_main, [str(tmp_path)]) == 1


def test_lint_files_reports_load_failures(tmp_path):
    path = tmp_path / "broken.schema.yaml"
    path.write_text("type: [unclosed\n", encoding="utf-8")

    (result,) = lint_files([path])

    assert not result.ok
    assert "Failed to load schema file" in result.errors[0]["message"]
