"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API can start
against a local MongoDB without any setup.  Before the environment is
read, an optional ``.env.<APP_ENV>`` file (e.g. ``.env.development`` or
``.env.test``) is loaded from the project root; variables already present
in the process environment take precedence over the file.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


APP_ENV = os.getenv("APP_ENV", "development")

# location_share_api/app/core/config.py -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
load_dotenv(_PROJECT_ROOT / f".env.{APP_ENV}", override=False)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Location Share API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    environment: str = APP_ENV
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # All routes are mounted below this prefix, e.g. ``/api/users/1``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # MongoDB connection string and the database holding the ``users``
    # and ``counters`` collections.
    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    database_name: str = os.getenv("DATABASE_NAME", "location_share")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "9090"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
