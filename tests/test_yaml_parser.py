from __future__ import annotations

import pytest

from schema_engine import DocumentLoadError, EngineConfig
from schema_engine.models.parsing import YamlParser
from schema_engine.utils.json_pointer import join_path, pointer_from_parts, split_pointer
from schema_engine.utils.source_location import lookup_source


def test_yaml_document_with_source_map():
    parser = YamlParser(cache_enabled=False)
    content = "name: demo\nports:\n  - 80\n  - 443\n"

    data, source_map = parser.load_document_from_string(content)

    assert data == {"name": "demo", "ports": [80, 443]}
    assert source_map["/name"] == {"line": 1, "column": 7}
    assert source_map["/ports/1"] == {"line": 4, "column": 5}


def test_yaml_timestamps_stay_strings():
    parser = YamlParser(cache_enabled=False)

    data, _ = parser.load_document_from_string("d: 2024-01-01\nt: 2001-12-14 21:59:43\nn: 3\n")

    assert data == {"d": "2024-01-01", "t": "2001-12-14 21:59:43", "n": 3}


def test_json_files_use_json_number_grammar(tmp_path):
    path = tmp_path / "instance.json"
    path.write_text('{"value": 1e5, "nested": {"k": [true]}}', encoding="utf-8")

    data, source_map = YamlParser(cache_enabled=False).load_document(path)

    assert data["value"] == 100000.0
    assert "/nested/k/0" in source_map


def test_missing_and_malformed_documents(tmp_path):
    parser = YamlParser(cache_enabled=False)

    with pytest.raises(DocumentLoadError):
        parser.load_document(tmp_path / "absent.yaml")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(DocumentLoadError, match="broken.json"):
        parser.load(broken)

    with pytest.raises(DocumentLoadError):
        parser.load_document(tmp_path)


def test_cache(tmp_path):
    path = tmp_path / "doc.yaml"
    path.write_text("a: 1\n", encoding="utf-8")
    parser = YamlParser(cache_enabled=True)

    first = parser.load(path)
    path.write_text("a: 2\n", encoding="utf-8")
    assert parser.load(path) is first

    parser.clear_cache()
    assert parser.load(path) == {"a": 2}


def test_lookup_source_falls_back_to_ancestor():
    source_map = {"": {"line": 1, "column": 1}, "/a": {"line": 2, "column": 3}}

    assert lookup_source(source_map, "/a/missing").line == 2
    assert lookup_source(source_map, "/other").line == 1
    assert lookup_source(None, "/a").line is None


def test_json_pointer_helpers():
    assert join_path("", "a/b") == "/a~1b"
    assert join_path("/x", 0) == "/x/0"
    assert pointer_from_parts(["m~n", 2]) == "/m~0n/2"
    assert split_pointer("/m~0n/a~1b") == ["m~n", "a/b"]
    assert split_pointer("") == []
    with pytest.raises(ValueError):
        split_pointer("no-slash")


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SCHEMA_ENGINE_MAX_DEPTH", "64")
    monkeypatch.setenv("SCHEMA_ENGINE_FORMAT_ASSERTION", "off")
    monkeypatch.setenv("SCHEMA_ENGINE_CACHE_ENABLED", "yes")

    config = EngineConfig.from_env()

    assert config.max_depth == 64
    assert config.format_assertion is False
    assert config.cache_enabled is True
