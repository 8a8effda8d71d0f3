"""Configuration management for the Photo Gallery.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PHOTOGALLERY_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PHOTOGALLERY_* prefix)
2. .env file in the project root
3. Default values defined in GalleryConfig

Example .env file:
    PHOTOGALLERY_DB_PATH=data/gallery.db
    PHOTOGALLERY_SERVER_PORT=3000
    PHOTOGALLERY_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from photogallery.core.config import config

    print(config.db_path)
    print(config.server_port)
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Package directory; static assets and templates ship inside it.
PACKAGE_DIR = Path(__file__).resolve().parent.parent


class GalleryConfig(BaseSettings):
    """Main configuration for the Photo Gallery.

    Values are loaded from environment variables with the PHOTOGALLERY_
    prefix, with fallback to defaults defined here.

    Attributes
    ----------
    Storage:
        db_path : Path
            SQLite database file. Its parent directory is created on init.

    Server Settings:
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        cors_origins : list[str]
            Origins allowed by the CORS middleware

    Client Settings:
        api_url : str
            Base URL the Python client talks to by default

    Logging:
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logger level applied by the CLI entry point

    Examples
    --------
        >>> custom_config = GalleryConfig(db_path="/tmp/gallery.db", server_port=8080)
        >>> custom_config.server_port
        8080
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PHOTOGALLERY_",
        case_sensitive=False,
    )

    # Storage
    db_path: Path = Field(
        default=Path("gallery.db"),
        description="SQLite database file for gallery entries",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )

    # Client settings
    api_url: str = Field(
        default="http://localhost:3000",
        description="Base URL used by the Python gallery client",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the database directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def static_dir(self) -> Path:
        """Directory holding the browser JavaScript and CSS."""
        return PACKAGE_DIR / "static"

    @property
    def templates_dir(self) -> Path:
        """Directory holding ``index.html``."""
        return PACKAGE_DIR / "templates"


# Global configuration instance
# Loads values from environment variables (PHOTOGALLERY_* prefix) and .env file.
config = GalleryConfig()
