"""
Configuration module for the TextMarketer client.

Loads configuration from environment variables with sensible defaults.
Uses python-dotenv to load from .env file if present.

Values are read when requested, not at import time, so a missing
password only fails the code path that needs it.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from textmarketer.adapters.textmarketer_adapter import PRODUCTION_URL, SANDBOX_URL
from textmarketer.domain.models import Authentication

# Go up two levels: textmarketer/config.py -> textmarketer/ -> root/
project_root = Path(__file__).parent.parent
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)


ENVIRONMENT_URLS = {
    "production": PRODUCTION_URL,
    "sandbox": SANDBOX_URL,
}

DEFAULT_TIMEOUT = 30


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_env_required(key: str) -> str:
    """
    Get required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If environment variable not set
    """
    value = os.getenv(key)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' not set. "
            f"Please set it in .env file or environment."
        )
    return value


# =============================================================================
# TextMarketer API Configuration
# =============================================================================


def load_authentication() -> Authentication:
    """Credentials from TEXTMARKETER_USERNAME / TEXTMARKETER_PASSWORD (both required)."""
    return Authentication(
        username=get_env_required("TEXTMARKETER_USERNAME"),
        password=get_env_required("TEXTMARKETER_PASSWORD"),
    )


def get_environment() -> str:
    """TEXTMARKETER_ENVIRONMENT, 'production' (default) or 'sandbox'."""
    return (get_env("TEXTMARKETER_ENVIRONMENT", "production") or "production").strip().lower()


def get_base_url() -> str:
    """
    Base URL for the configured environment.

    Raises:
        ValueError: If TEXTMARKETER_ENVIRONMENT is not a known environment
    """
    environment = get_environment()
    try:
        return ENVIRONMENT_URLS[environment]
    except KeyError:
        raise ValueError(
            f"Invalid TEXTMARKETER_ENVIRONMENT: {environment}. "
            f"Valid options: {', '.join(ENVIRONMENT_URLS)}"
        )


def get_timeout() -> int:
    """TEXTMARKETER_TIMEOUT in seconds (default: 30)."""
    value = get_env("TEXTMARKETER_TIMEOUT")
    if value is None:
        return DEFAULT_TIMEOUT
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"TEXTMARKETER_TIMEOUT must be an integer, got {value!r}")
