"""
Unit tests for `read_yaml`.
"""
import pytest
import yaml

from sparse_matrix.utils.yaml_io import read_yaml


def test_read_yaml_parses_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("demo:\n  size: 4\n", encoding="utf-8")
    assert read_yaml(path) == {"demo": {"size": 4}}


def test_read_yaml_accepts_yml_suffix_and_empty_file(tmp_path):
    path = tmp_path / "empty.YML"
    path.write_text("", encoding="utf-8")
    assert read_yaml(str(path)) == {}


def test_read_yaml_rejects_other_suffixes(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        read_yaml(path)


def test_read_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_yaml(path)


def test_read_yaml_propagates_parse_errors(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("demo: [unclosed\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        read_yaml(path)
