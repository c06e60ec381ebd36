"""Tests for configuration loading"""

import json

import pytest

from prefablib.config import settings


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "PREFAB_CONFIG_DIR", tmp_path)
    return tmp_path


def test_missing_config_uses_defaults(config_dir):
    """No namespaces.json means the default namespaces"""
    assert settings._load_path_namespaces() == settings.DEFAULT_PATH_NAMESPACES


def test_extra_namespaces_are_appended(config_dir):
    """Configured namespaces follow the defaults"""
    (config_dir / "namespaces.json").write_text(
        json.dumps({"namespaces": ["/assets/", "src", "game"]}), encoding="utf-8"
    )
    assert settings._load_path_namespaces() == ("builtins", "src", "assets", "game")


@pytest.mark.parametrize(
    "content",
    ['["assets"]', '"assets"', '{"namespaces": "assets"}', "{not json"],
)
def test_malformed_config_uses_defaults(config_dir, content):
    """Unexpected JSON shapes fall back to the defaults"""
    (config_dir / "namespaces.json").write_text(content, encoding="utf-8")
    assert settings._load_path_namespaces() == settings.DEFAULT_PATH_NAMESPACES
