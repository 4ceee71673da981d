import os
from typing import Optional

_ENVIRONMENTS = {
    "dev": "development",
    "development": "development",
    "test": "testing",
    "testing": "testing",
    "prod": "production",
    "production": "production",
}


def get_settings_module(env: Optional[str] = None) -> str:
    """Settings module for APP_ENV; unknown values fall back to development."""
    name = (env or os.getenv("APP_ENV") or "development").strip().lower()
    return f"config.{_ENVIRONMENTS.get(name, 'development')}"
