"""Shared pytest fixtures for Fantastical MCP tests."""

import pytest

from fantastical_mcp import config as fm_config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at an empty temp location so defaults apply."""
    monkeypatch.setenv("FANTASTICAL_MCP_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("FANTASTICAL_MCP_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("FANTASTICAL_MCP_LOG_LEVEL", raising=False)
    fm_config.reset_settings()
    yield
    fm_config.reset_settings()


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Write a settings YAML and make it the active configuration."""
    def _write(text):
        path = tmp_path / "fantastical.yaml"
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv("FANTASTICAL_MCP_CONFIG", str(path))
        fm_config.reset_settings()
        return path
    return _write
