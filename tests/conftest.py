"""Shared test fixtures and configuration.

Keeps tests away from the real config file, log directory and connector API.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from tests.fakes import FakeConnector
from zoho_tasks.api.client import AlloyClient
from zoho_tasks.config import ENV_VARS, Settings, reset_config_manager

# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


def _drop_app_handler():
    logger = logging.getLogger("zoho_tasks")
    for handler in list(logger.handlers):
        if handler.get_name() == "zoho_tasks":
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Send log output to a temporary directory and reset the singleton."""
    import zoho_tasks.utils.logger as logger_mod

    _drop_app_handler()
    logger_mod._logger = None
    with patch("zoho_tasks.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    _drop_app_handler()
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Point the config file at *tmp_path* and clear connector env vars."""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("ZOHO_TASKS_LOG_STDERR", raising=False)
    reset_config_manager()
    with patch("zoho_tasks.config.user_config_dir", return_value=str(tmp_path / "config")):
        yield
    reset_config_manager()


# ---------------------------------------------------------------------------
# Connector stand-in
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        alloy={
            "api_key": "test-api-key-123456",
            "user_id": "user-42",
            "credential_id": "cred-7",
        }
    )


@pytest.fixture()
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture()
def make_client(settings, connector):
    """Factory with the same signature as ``get_client``, wired to the fake."""

    def _make(_settings=None) -> AlloyClient:
        return AlloyClient(_settings or settings, transport=connector.transport)

    return _make


@pytest.fixture()
def env_credentials(monkeypatch):
    """Export connector credentials the way a deployment would."""
    monkeypatch.setenv("ALLOY_API_KEY", "env-api-key-abcdef")
    monkeypatch.setenv("ALLOY_USER_ID", "env-user")
    monkeypatch.setenv("ALLOY_CREDENTIAL_ID", "env-cred")
    reset_config_manager()
