from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from gencompose.core.utils.yaml_io import dump_yaml_string, iter_yaml_files, read_yaml


def test_read_yaml_missing_returns_default(tmp_path: Path) -> None:
    assert read_yaml(tmp_path / "nope.yaml", default={}) == {}


def test_read_yaml_missing_raises_when_asked(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_yaml(tmp_path / "nope.yaml", raise_on_error=True)


def test_read_yaml_invalid(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("a: [unclosed\n", encoding="utf-8")

    assert read_yaml(bad, default="fallback") == "fallback"
    with pytest.raises(yaml.YAMLError):
        read_yaml(bad, raise_on_error=True)


def test_read_yaml_empty_document_returns_default(tmp_path: Path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert read_yaml(empty, default={}) == {}


def test_iter_yaml_files_prefers_yaml_over_yml(tmp_path: Path) -> None:
    (tmp_path / "b.yml").write_text("x: 1\n", encoding="utf-8")
    (tmp_path / "a.yaml").write_text("x: 1\n", encoding="utf-8")
    (tmp_path / "a.yml").write_text("x: 2\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")

    assert [p.name for p in iter_yaml_files(tmp_path)] == ["a.yaml", "b.yml"]
    assert iter_yaml_files(tmp_path / "missing") == []


def test_dump_yaml_string_sorted() -> None:
    assert dump_yaml_string({"b": 1, "a": 2}) == "a: 2\nb: 1\n"
