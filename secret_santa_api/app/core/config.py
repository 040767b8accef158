"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the service starts
without any configuration; in a production deployment you should
override them via environment variables.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Secret Santa API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite file holding user documents.  Relative paths
    # are resolved against the project root by ``core.db``; the special
    # value ``:memory:`` keeps everything in process memory.
    database_url: str = os.getenv("DATABASE_URL", "secret_santa.db")

    # Comma-separated list of origins allowed by the CORS middleware.
    # The front end is served from a different host, so the default is
    # to allow every origin.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Routes are mounted at the root so existing front ends keep working.
    # Set e.g. ``API_PREFIX=/api/v1`` to mount them under a version prefix.
    api_prefix: str = os.getenv("API_PREFIX", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "80"))

    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
