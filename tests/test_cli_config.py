"""Tests for configuration file loading and overrides."""

import json

import pytest

from cli_config import ConfigError, apply_config_overrides, load_config
from constants import Constants


@pytest.fixture
def restore_constants():
    saved = {k: getattr(Constants, k) for k in ("GITHUB_API_BASE", "REQUEST_TIMEOUT", "DEFAULT_REGISTRY_HOST")}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)


def test_no_path_returns_empty():
    assert load_config(None) == {}


def test_load_yaml_section(tmp_path):
    path = tmp_path / "modtag.yml"
    path.write_text("modtag:\n  request_timeout: 5\n  github_api_base: https://ghe.local/api/v3\n", encoding="utf-8")
    assert load_config(str(path)) == {"request_timeout": 5, "github_api_base": "https://ghe.local/api/v3"}


def test_load_json(tmp_path):
    path = tmp_path / "modtag.json"
    path.write_text(json.dumps({"default_registry_host": "app.terraform.io"}), encoding="utf-8")
    assert load_config(str(path)) == {"default_registry_host": "app.terraform.io"}


def test_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == {}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.yml"))


def test_non_mapping(tmp_path):
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_bad_yaml(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("modtag: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_apply_overrides(restore_constants):
    apply_config_overrides({"request_timeout": "7", "github_api_base": "https://ghe.local/api/v3", "unknown": 1})
    assert Constants.REQUEST_TIMEOUT == 7
    assert Constants.GITHUB_API_BASE == "https://ghe.local/api/v3"


def test_apply_invalid_value(restore_constants):
    with pytest.raises(ConfigError):
        apply_config_overrides({"request_timeout": "soon"})
