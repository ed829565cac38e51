"""
kvdisk Configuration Settings

This module contains all configuration constants for the kvdisk store
and its command-line shell.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Store and CLI configuration settings."""

    # Storage layout
    STORE_DIR: str = os.environ.get(
        "KVDISK_DIR", os.path.join(os.path.expanduser("~"), ".kvdisk")
    )
    INDEX_FILENAME: str = "index"
    CACHE_DIRNAME: str = "cache"

    # Value handling
    ENCODING: str = "utf-8"
    # Undecodable bytes (e.g. from argv) round-trip as lone surrogates
    ENCODING_ERRORS: str = "surrogateescape"
    VALUE_SEPARATOR: str = " "

    # CLI settings
    PROG_NAME: str = "kvdisk"

    # Logging settings
    DEBUG: bool = os.environ.get("KVDISK_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("KVDISK_LOG_LEVEL", "WARNING")


# Global settings instance
settings = Settings()
