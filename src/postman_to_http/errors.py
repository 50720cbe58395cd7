"""Exceptions raised while loading and converting Postman exports."""

from pathlib import Path


class ConversionError(Exception):
    """Base class for conversion failures."""


class DocumentLoadError(ConversionError):
    """A collection or environment file could not be read or decoded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigError(ConversionError):
    """The converter configuration file is unreadable or invalid."""
