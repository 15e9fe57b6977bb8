"""
Configuration settings for the Parcel Tracker.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Parcel Tracker"
    api_version: str = "v1"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///./tracker.db"
    db_echo: bool = False
    # Pool sizing is ignored for SQLite URLs
    db_pool_size: int = 20
    db_max_overflow: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
