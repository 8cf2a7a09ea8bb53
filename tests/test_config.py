"""
Unit tests for environment configuration
"""
import os
from pathlib import Path

import pytest

from lunchmoney_mcp.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, DEFAULT_TMP_DIR, get_settings, load_env_file

ENV_VARS = (
    "LUNCHMONEY_API_TOKEN",
    "LUNCHMONEY_API_URL",
    "LUNCHMONEY_TMP_DIR",
    "LUNCHMONEY_TIMEOUT",
    "LUNCHMONEY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate os.environ so values loaded from .env files do not leak"""
    env = {key: value for key, value in os.environ.items() if key not in ENV_VARS}
    monkeypatch.setattr(os, "environ", env)


def test_defaults():
    settings = get_settings(env_file=None)
    assert settings.api_url == DEFAULT_API_URL
    assert settings.api_token == ""
    assert settings.tmp_dir == Path(DEFAULT_TMP_DIR)
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LUNCHMONEY_API_TOKEN", "abc")
    monkeypatch.setenv("LUNCHMONEY_API_URL", "http://localhost:8080/v1/")
    monkeypatch.setenv("LUNCHMONEY_TMP_DIR", str(tmp_path))
    monkeypatch.setenv("LUNCHMONEY_TIMEOUT", "5")
    monkeypatch.setenv("LUNCHMONEY_LOG_LEVEL", "debug")

    settings = get_settings(env_file=None)

    assert settings.api_token == "abc"
    assert settings.api_url == "http://localhost:8080/v1"
    assert settings.tmp_dir == tmp_path
    assert settings.timeout == 5.0
    assert settings.log_level == "DEBUG"


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("LUNCHMONEY_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="LUNCHMONEY_TIMEOUT"):
        get_settings(env_file=None)


def test_env_file_loaded_without_overriding(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "LUNCHMONEY_API_TOKEN=from-file\n"
        'LUNCHMONEY_TMP_DIR="/data/out"\n'
        "LUNCHMONEY_LOG_LEVEL=warning\n"
    )
    monkeypatch.setenv("LUNCHMONEY_LOG_LEVEL", "ERROR")

    settings = get_settings(env_file=env_file)

    assert settings.api_token == "from-file"
    assert settings.tmp_dir == Path("/data/out")
    assert settings.log_level == "ERROR"


def test_missing_env_file_is_ignored(tmp_path):
    load_env_file(tmp_path / "missing.env")


@pytest.mark.asyncio
async def test_lifespan_builds_client_and_formatter(monkeypatch, tmp_path):
    from lunchmoney_mcp.app import app_lifespan, mcp
    from lunchmoney_mcp.response import OutputFormatter

    monkeypatch.setattr("lunchmoney_mcp.app.get_settings", lambda: get_settings(env_file=None))
    monkeypatch.setenv("LUNCHMONEY_API_TOKEN", "tok")
    monkeypatch.setenv("LUNCHMONEY_TMP_DIR", str(tmp_path))

    async with app_lifespan(mcp) as state:
        client = state["http"]
        assert client.headers["authorization"] == "Bearer tok"
        assert str(client.base_url).startswith(DEFAULT_API_URL)
        assert isinstance(state["formatter"], OutputFormatter)
        assert state["formatter"].root_dir == tmp_path
    assert client.is_closed
