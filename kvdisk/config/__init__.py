"""Configuration module for kvdisk."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
