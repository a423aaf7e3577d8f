"""
Central configuration for the hotel booking backend.

Values come from environment variables; `Settings()` reads them at
construction time so tests can build their own instance with overrides.
"""

import os
from typing import Any, List, Optional


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _pick(value: Any, name: str, default: str) -> Any:
    """Explicit argument wins, even when falsy; otherwise the environment."""
    if value is not None:
        return value
    return os.getenv(name, default)


class Settings:
    """
    Runtime settings for the API.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        database_name: Optional[str] = None,
        session_cookie_name: Optional[str] = None,
        session_ttl_hours: Optional[int] = None,
        cookie_secure: Optional[bool] = None,
        cors_origins: Optional[List[str]] = None,
        log_level: Optional[str] = None,
    ):
        self.database_url = _pick(database_url, "DATABASE_URL", "mongodb://localhost:27017")
        self.database_name = _pick(database_name, "DATABASE_NAME", "comfort_hotel")
        self.session_cookie_name = _pick(session_cookie_name, "SESSION_COOKIE_NAME", "sid")
        self.session_ttl_hours = int(_pick(session_ttl_hours, "SESSION_TTL_HOURS", "24"))
        self.cookie_secure = cookie_secure if cookie_secure is not None else _env_bool("COOKIE_SECURE")
        if cors_origins is None:
            cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        self.cors_origins = cors_origins
        self.log_level = _pick(log_level, "LOG_LEVEL", "INFO").upper()

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_hours * 60 * 60
