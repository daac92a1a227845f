"""Configuration management for Gallery Feed.

This module provides centralized configuration using Pydantic Settings.  All
values are loaded from environment variables with the GALLERYFEED_ prefix,
so deployments can point the service at a different gallery without code
changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (GALLERYFEED_* prefix)
2. .env file in the working directory
3. Default values defined in GalleryFeedConfig

Example .env file:
    GALLERYFEED_GALLERY_DIR=/srv/site/assets/images/gallery
    GALLERYFEED_SERVER_PORT=8080
    GALLERYFEED_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created at module import time and is what the
default application and the ``galleryfeed`` CLI use.

Directories
-----------
The gallery directories are never created here.  A missing gallery is a valid
state and simply lists as an empty array.  Featured images always live in the
fixed ``featured/`` subdirectory of ``gallery_dir``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GalleryFeedConfig(BaseSettings):
    """Main configuration for Gallery Feed.

    Attributes
    ----------
    Gallery:
        gallery_dir : Path
            Base gallery directory, scanned non-recursively
        image_extensions : list[str]
            Recognized extensions, lowercase and without the leading dot

    Server:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Bind port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level configured by the CLI

    Examples
    --------
        >>> cfg = GalleryFeedConfig(gallery_dir="/tmp/gallery", _env_file=None)
        >>> cfg.gallery_dir
        PosixPath('/tmp/gallery')
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GALLERYFEED_",
        case_sensitive=False,
        extra="ignore",
    )

    # Gallery
    gallery_dir: Path = Field(
        default=Path("assets/images/gallery"),
        description="Base gallery directory",
    )
    image_extensions: list[str] = Field(
        default_factory=lambda: ["jpg", "jpeg", "png", "gif"],
        description="Image file extensions, matched case-insensitively",
    )

    # Server
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the CLI entry point",
    )

    @field_validator("image_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = [ext.strip().lstrip(".").lower() for ext in value]
        return [ext for ext in normalized if ext]

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


# Global configuration instance, loaded from GALLERYFEED_* and .env.
config = GalleryFeedConfig()
