"""Core configuration, logging, middleware and HTTP error handling."""

from campus_console.core.config import Settings, settings

__all__ = ["Settings", "settings"]
