"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the store runs out
of the box on ``localhost:3000`` with its data kept in
``data/store.json`` next to the package.
"""

import os
from dataclasses import dataclass

from .catalog import TAX_RATE


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Makeup Store API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path to a log file.  Console logging is always enabled.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the JSON document holding products, bills and the bill
    # counter.  A relative path is resolved against the project root by
    # ``storage.get_data_file_path``.
    data_file: str = os.getenv("DATA_FILE", "data/store.json")

    # Prefix under which the routers are mounted.  Clients expect ``/api``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Sales tax applied to bill subtotals.
    tax_rate: float = float(os.getenv("TAX_RATE", str(TAX_RATE)))

    # Comma‑separated list of allowed CORS origins; ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Request bodies may carry base64 product images.
    max_body_bytes: int = int(os.getenv("MAX_BODY_BYTES", str(5 * 1024 * 1024)))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
