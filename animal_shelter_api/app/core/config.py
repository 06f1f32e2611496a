"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  In a production
deployment you should override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Animal Shelter API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path to a log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  A relative path is resolved relative
    # to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "animal_shelter.db")

    # Prefix for all routes.  Empty keeps the carer routes at ``/carer``,
    # which is what the telegram bot and admin clients call.
    api_prefix: str = os.getenv("API_PREFIX", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
