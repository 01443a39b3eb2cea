"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, with defaults for every field.  Values are
computed once at import time, so environment variables must be set
before this module is imported.  Tests that need different values
create their own ``Settings`` instance or patch attributes on the
shared ``settings`` object.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Catalog Dashboard")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Prefix under which the v1 routes are mounted.  The dashboard
    # frontend talks to ``/services`` and ``/prices`` directly, so the
    # default is the root.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Which document store backs the API: ``firestore`` for the real
    # database or ``memory`` for local development and tests.
    store_backend: str = os.getenv("STORE_BACKEND", "firestore")

    # Firebase credentials.  ``FIREBASE_CREDENTIALS_JSON`` holds the
    # service account document inline; ``FIREBASE_CREDENTIALS_PATH``
    # points at a file.  When neither is set the Google application
    # default credentials are used.
    firebase_credentials_json: str = os.getenv("FIREBASE_CREDENTIALS_JSON", "")
    firebase_credentials_path: str = os.getenv("FIREBASE_CREDENTIALS_PATH", "serviceAccountKey.json")

    # Pagination.  ``max_page_limit`` caps the number of records a
    # single page may return; the filter population flow asks for 1000.
    default_page_limit: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
    max_page_limit: int = int(os.getenv("MAX_PAGE_LIMIT", "1000"))

    # Directory holding the dashboard's ``index.html`` and assets.  Left
    # empty, no static files are served.
    static_dir: str = os.getenv("STATIC_DIR", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


settings = Settings()
