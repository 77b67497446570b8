# Configuration - environment driven settings
#
# Values come from the process environment, optionally seeded from a .env
# file in the working directory. Read once and cached; tests call
# reset_settings() after monkeypatching the environment.

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_SERVICE_NAME = "SecurePass Python API"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8081
DEFAULT_USER_ID = "user123"
DEFAULT_ORIGIN_IP = "127.0.0.1"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the vault service."""

    service_name: str = DEFAULT_SERVICE_NAME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    user_id: str = DEFAULT_USER_ID
    origin_ip: str = DEFAULT_ORIGIN_IP
    audit_console: bool = True
    log_level: str = "INFO"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        dotenv_path: Optional explicit .env file. When None, python-dotenv
                     searches upward from the working directory. Existing
                     environment variables always win over the file.

    Returns:
        Frozen Settings instance
    """
    load_dotenv(dotenv_path=dotenv_path, override=False)

    return Settings(
        service_name=os.environ.get("SECUREPASS_SERVICE_NAME", DEFAULT_SERVICE_NAME),
        host=os.environ.get("SECUREPASS_HOST", DEFAULT_HOST),
        port=_env_int("SECUREPASS_PORT", DEFAULT_PORT),
        user_id=os.environ.get("SECUREPASS_USER_ID", DEFAULT_USER_ID),
        origin_ip=os.environ.get("SECUREPASS_ORIGIN_IP", DEFAULT_ORIGIN_IP),
        audit_console=_env_bool("SECUREPASS_AUDIT_CONSOLE", True),
        log_level=os.environ.get("SECUREPASS_LOG_LEVEL", "INFO").upper(),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get cached settings (loaded on first call)."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads env."""
    global _settings
    _settings = None
