"""Tests for configuration loading and the client factory."""

import json

import pydantic
import pytest
import structlog

from nps_client import NPSClient, api, config


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo the global structlog configuration done by create_client()."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"api_key": "file-key", "timeout": 5, "log_level": "debug"}))
    return path


def test_load_config_reads_json(config_file):
    """Values from the JSON file override defaults."""
    cfg = config.load_config(config_file)
    assert cfg.api_key == "file-key"
    assert cfg.timeout == 5.0
    assert cfg.base_url == api.DEFAULT_BASE_URL


def test_load_config_missing_file(tmp_path):
    """A missing config file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="not found"):
        config.load_config(tmp_path / "absent.json")


def test_load_config_rejects_malformed_json(tmp_path):
    """A file that is not JSON fails validation."""
    path = tmp_path / "config.json"
    path.write_text("{api_key: ")
    with pytest.raises(pydantic.ValidationError):
        config.load_config(path)


def test_load_config_rejects_invalid_values(tmp_path):
    """Values of the wrong type fail validation."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"api_key": "k", "timeout": "soon"}))
    with pytest.raises(pydantic.ValidationError):
        config.load_config(path)


def test_config_rejects_empty_api_key():
    """An empty API key fails validation."""
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(api_key="")


def test_config_rejects_non_positive_timeout():
    """Timeouts must be positive."""
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(api_key="k", timeout=0)


def test_create_client_from_path(config_file):
    """create_client() builds a client from an explicit config path."""
    client = config.create_client(str(config_file))
    try:
        assert isinstance(client, NPSClient)
        assert str(client.api.base_url) == api.DEFAULT_BASE_URL
    finally:
        client.close()


def test_create_client_from_config_env_var(config_file, monkeypatch):
    """The config path falls back to NPS_CLIENT_CONFIG_PATH."""
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(config_file))
    monkeypatch.delenv(config.API_KEY_ENV_VAR, raising=False)
    client = config.create_client()
    client.close()


def test_create_client_from_api_key_env_var(monkeypatch):
    """Without a config file the API key comes from NPS_API_KEY."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv(config.API_KEY_ENV_VAR, "env-key")
    client = config.create_client()
    try:
        assert client.api._token == "env-key"
    finally:
        client.close()


def test_create_client_without_any_key(monkeypatch):
    """With neither a config file nor NPS_API_KEY the config is invalid."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(config.API_KEY_ENV_VAR, raising=False)
    with pytest.raises(pydantic.ValidationError):
        config.create_client()


def test_configure_logging_filters_below_level(capsys):
    """Debug events are dropped at INFO level and rendered as logfmt above it."""
    config.configure_logging("info")
    logger = structlog.get_logger("test")
    logger.debug("hidden event")
    logger.info("shown event", park="yell")

    out = capsys.readouterr().out
    assert "hidden event" not in out
    assert 'msg="shown event"' in out
    assert "park=yell" in out
