"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so that no extra settings package is needed.
Defaults are provided for all fields.  In a production deployment you
should override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "External Links API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    log_max_bytes: int = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
    log_backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "3"))
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Optional static token for super‑administrator API access.  Requests
    # carrying this token are treated as user 1 with role 1.
    super_admin_static_token: str = os.getenv("SUPER_ADMIN_TOKEN", "")

    # Comma‑separated list of tokens for trusted services (dashboards,
    # provisioning jobs).  They authenticate with ``bot_role_id``.
    bot_tokens: str = os.getenv("BOT_TOKENS", "")
    bot_role_id: int = int(os.getenv("BOT_ROLE_ID", "2"))

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "external_links.db")

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Environment variables must be set before this module is imported.
settings = Settings()
