"""Converter configuration.

Output directory names and file suffixes live here instead of being
hard-coded in the converters, so tests and the CLI can override them.
An optional YAML file may set any of the fields.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from postman_to_http.errors import ConfigError


class ConverterConfig(BaseModel):
    """Names and suffixes used for input discovery and output layout."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    collections_dir_name: str = "parsed-collections"
    environments_dir_name: str = "parsed-environments"
    input_suffix: str = ".json"
    collection_suffix: str = ".postman_collection.json"
    request_extension: str = ".http"
    environment_extension: str = ".env"


DEFAULT_CONFIG = ConverterConfig()


def load_config(file_path: Path) -> ConverterConfig:
    """Load a ConverterConfig from a YAML file. An empty file yields defaults."""
    try:
        text = file_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {file_path}: {e}") from e

    if data is None:
        return ConverterConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {file_path} must be a mapping, got {type(data).__name__}")

    try:
        return ConverterConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {file_path}: {e}") from e
