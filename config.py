"""Runtime settings for the couplet API.

All settings can be overridden via environment variables or by passing
values directly to ``load_config``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class Settings:
    """Database, server and logging configuration."""

    database_url: str = "mongodb://localhost:27017"
    database_name: str = "thirukkural"
    collection: str = "couplets"
    environment: str = "production"
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    data_dir: str = "data"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def load_config(**overrides) -> Settings:
    """Build Settings with env-var and keyword overrides.

    Resolution order (later wins):
      1. Dataclass defaults
      2. Environment variables
      3. Explicit keyword arguments

    Supported env vars:
      - DATABASE_URL / DATABASE_NAME / COUPLETS_COLLECTION
      - APP_ENV  ("development" exposes error details)
      - HOST / PORT / API_PREFIX
      - CORS_ORIGINS  (comma-separated)
      - LOG_LEVEL
      - DATA_DIR  (source YAML files for the corpus build)
    """
    cfg = Settings()

    database_url = os.getenv("DATABASE_URL")
    if database_url:
        cfg.database_url = database_url

    database_name = os.getenv("DATABASE_NAME")
    if database_name:
        cfg.database_name = database_name

    collection = os.getenv("COUPLETS_COLLECTION")
    if collection:
        cfg.collection = collection

    environment = os.getenv("APP_ENV")
    if environment:
        cfg.environment = environment.lower()

    host = os.getenv("HOST")
    if host:
        cfg.host = host

    port = os.getenv("PORT")
    if port:
        cfg.port = int(port)

    api_prefix = os.getenv("API_PREFIX")
    if api_prefix is not None:
        cfg.api_prefix = api_prefix.rstrip("/")

    origins = os.getenv("CORS_ORIGINS")
    if origins:
        cfg.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        cfg.log_level = log_level.upper()

    data_dir = os.getenv("DATA_DIR")
    if data_dir:
        cfg.data_dir = data_dir

    for key, value in overrides.items():
        if hasattr(cfg, key):
            setattr(cfg, key, value)
        else:
            raise TypeError(f"Unknown config key: {key!r}")

    return cfg
