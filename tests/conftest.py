"""
Shared test fixtures for asosuite-cli tests.
Points the credential store at a temp dir and silences HTTP logging.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading or overwriting the real ~/.asosuite/config.json."""
    from asosuite_cli import config

    config_dir = str(tmp_path / ".asosuite")
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", os.path.join(config_dir, "config.json"))
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", None)
    monkeypatch.setattr(config, "API_BASE_URL", "https://server.asosuite.com")
    monkeypatch.setattr(config, "WEB_BASE_URL", "https://www.asosuite.com")
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")
