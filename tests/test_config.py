"""
Configuration loading tests.
"""
import json

import yaml

from newsdigest.config import DEFAULT_CONFIG, Config, load_config


def test_defaults_without_file():
    config = Config()
    assert config.get("output.top_n") == 10
    assert config.get("relevance.custom_source") == "Eigener"
    assert config.get("missing.key", "fallback") == "fallback"


def test_defaults_are_not_mutated(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"output": {"top_n": 3}}))
    Config(str(path))
    assert DEFAULT_CONFIG["output"]["top_n"] == 10


def test_yaml_file_is_merged(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"output": {"top_n": 3}, "relevance": {"trusted_sources": ["heise"]}}))

    config = Config(str(path))

    assert config.get("output.top_n") == 3
    assert config.get("output.top_tags") == 5
    assert config.get("relevance.trusted_sources") == ["heise"]


def test_json_file_is_merged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cluster_weights": {"fallback": "Misc"}}))
    assert Config(str(path)).get("cluster_weights.fallback") == "Misc"


def test_unsupported_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[output]\ntop_n = 3\n")
    assert Config(str(path)).get("output.top_n") == 10


def test_non_mapping_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(["top_n", 3]))
    assert Config(str(path)).get("output.top_n") == 10


def test_scalar_json_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("42")
    assert Config(str(path)).get("output.top_n") == 10


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NEWSDIGEST_OUTPUT_TOP_N", "5")
    monkeypatch.setenv("NEWSDIGEST_RELEVANCE_CUSTOM_SOURCE", "Manual")
    config = Config()
    assert config.get("output.top_n") == 5
    assert config.get("relevance.custom_source") == "Manual"


def test_load_config_reads_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"output": {"title": "Student Digest"}}))
    monkeypatch.setenv("NEWSDIGEST_CONFIG_PATH", str(path))
    assert load_config().get("output.title") == "Student Digest"


def test_save_round_trips_through_yaml(tmp_path):
    path = tmp_path / "saved.yaml"
    config = Config()
    config.config["output"]["top_n"] = 7
    assert config.save(str(path))
    assert Config(str(path)).get("output.top_n") == 7


def test_save_rejects_unknown_suffix(tmp_path):
    assert not Config().save(str(tmp_path / "saved.txt"))
