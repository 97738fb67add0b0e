"""Tests for configuration loading."""

from pathlib import Path

import pytest

from content_protector.config import load_config, validate_config


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)


def test_load_config():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))

    assert config.database_path == ":memory:"
    assert config.logging.level == "DEBUG"
    assert config.web.port == 5050
    assert config.protection.session_max_age == 1800
    assert config.protection.admin_prefix == "/manage"
    assert config.protection.api_prefix == "/api/"


def test_load_config_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    config = load_config(str(config_file))

    assert config.database_path == "data/content.db"
    assert config.protection.session_max_age == 3600
    assert config.protection.admin_prefix == "/admin"


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("nonexistent.yaml")


def test_secrets_from_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "sk")
    monkeypatch.setenv("ADMIN_PASSWORD", "hunter2")
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    assert config.web.secret_key == "sk"
    assert config.web.admin_password == "hunter2"


def test_validate_config_missing_secrets():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    errors = validate_config(config)
    assert any("ADMIN_PASSWORD" in e for e in errors)
    assert any("SECRET_KEY" in e for e in errors)


def test_validate_config_valid():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    config.web.admin_password = "hunter2"
    config.web.secret_key = "sk"
    assert validate_config(config) == []


def test_validate_config_bad_protection_values():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    config.web.admin_password = "hunter2"
    config.web.secret_key = "sk"
    config.protection.session_max_age = 0
    config.protection.api_prefix = "api"
    errors = validate_config(config)
    assert any("session_max_age" in e for e in errors)
    assert any("api_prefix" in e for e in errors)


@pytest.mark.parametrize("name", ["admin_prefix", "api_prefix"])
def test_validate_config_rejects_root_prefix(name):
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    config.web.admin_password = "hunter2"
    config.web.secret_key = "sk"
    setattr(config.protection, name, "/")
    errors = validate_config(config)
    assert any(name in e and "every page" in e for e in errors)
