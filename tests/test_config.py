"""Tests for configuration loading."""

import json

import pytest
import yaml

from code_outline.config import DEFAULT_CONFIG, DEFAULT_MAX_FILE_SIZE, get_config_template, load_config
from code_outline.errors import ConfigError


class TestLoadConfig:
    def test_yaml_merged_with_defaults(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text(
            "exclude:\n"
            "  - vendor\n"
            "scan:\n"
            "  workers: 4\n"
        )
        config = load_config(path)
        assert config["exclude"] == ["vendor"]
        assert config["scan"]["workers"] == 4
        assert config["scan"]["max_file_size"] == DEFAULT_MAX_FILE_SIZE
        assert config["languages"] == []

    def test_json_config(self, tmp_path):
        path = tmp_path / "outline.json"
        path.write_text(json.dumps({"languages": [{"name": "toy", "extensions": [".toy"]}]}))
        config = load_config(path)
        assert config["languages"][0]["name"] == "toy"
        assert config["exclude"] == []

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text("scan:\n  workers: 8\n")
        load_config(path)
        assert DEFAULT_CONFIG["scan"]["workers"] == 1

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text("")
        config = load_config(path)
        assert config["exclude"] == []
        assert config["scan"]["workers"] == 1

    def test_comment_only_sections(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text("exclude:\n  # - vendor\nlanguages:\n")
        config = load_config(path)
        assert config["exclude"] == []
        assert config["languages"] == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text("exclude: [vendor\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "outline.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text("- vendor\n- build\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_exclude_must_be_list(self, tmp_path):
        path = tmp_path / "outline.yaml"
        path.write_text("exclude: vendor\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestConfigTemplate:
    def test_template_is_valid_yaml(self):
        data = yaml.safe_load(get_config_template())
        assert data["scan"]["workers"] == 1
        assert data["scan"]["max_file_size"] == DEFAULT_MAX_FILE_SIZE

    def test_template_loads_as_config(self, tmp_path):
        path = tmp_path / "code-outline.yaml"
        path.write_text(get_config_template())
        config = load_config(path)
        assert config["exclude"] == []
        assert config["languages"] == []
