"""
Shared pytest fixtures for the SecurePass test suite.

Autouse fixtures below isolate tests from each other and from the host:
  - Settings      -> fresh cache, SECUREPASS_* env cleared, console audit off
  - Vault manager -> process-wide singleton reset before and after each test
"""

import pytest

SETTINGS_ENV_VARS = (
    "SECUREPASS_SERVICE_NAME",
    "SECUREPASS_HOST",
    "SECUREPASS_PORT",
    "SECUREPASS_USER_ID",
    "SECUREPASS_ORIGIN_IP",
    "SECUREPASS_AUDIT_CONSOLE",
    "SECUREPASS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    """Start every test from default settings.

    Without this, a developer's shell (or .env) could change the user id,
    port or service name that tests assert on. Console audit echo is
    switched off so test output stays readable.
    """
    from securepass.config import reset_settings

    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SECUREPASS_AUDIT_CONSOLE", "false")

    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def _isolate_vault_manager():
    """Reset the API's process-wide VaultManager for every test.

    Entries and audit records would otherwise leak between tests that go
    through the default app.
    """
    from securepass.api.vault_routes import set_vault_manager

    set_vault_manager(None)
    yield
    set_vault_manager(None)
