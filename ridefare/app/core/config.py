"""
Configuration settings for the Ride Fare backend.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Ride Fare Backend"
    api_version: str = "v1"
    debug: bool = True
    log_level: str = "INFO"

    # Business rules
    fee_request_deadline_days: int = 2
    default_region: str = "default"

    # Remote configuration store (PostgREST-style table API).
    # When unset, the in-memory provider is used.
    pricing_store_url: Optional[str] = None
    pricing_store_api_key: Optional[str] = None
    pricing_store_timeout_seconds: float = 5.0

    # Circuit breaker for the configuration store
    pricing_store_failure_threshold: int = 3
    pricing_store_reset_timeout: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
