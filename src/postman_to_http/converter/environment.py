"""Convert a Postman environment into a ``KEY=VALUE`` env file."""

import logging
from pathlib import Path

from postman_to_http.config import ConverterConfig, DEFAULT_CONFIG
from postman_to_http.parser.base import Environment
from .sanitize import sanitize_name

logger = logging.getLogger(__name__)


def serialize_environment(environment: Environment) -> str:
    """One ``key=value`` line per pair, in order. Nothing is escaped."""
    return "".join(f"{v.key}={v.value}\n" for v in environment.values)


def environment_filename(environment: Environment, config: ConverterConfig = DEFAULT_CONFIG) -> str:
    return sanitize_name(environment.name + config.environment_extension)


def convert_environment(
    environment: Environment,
    output_dir: Path,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> Path:
    """Write the environment file into ``output_dir`` and return its path.

    Raises OSError if the file cannot be written, ValueError if the name
    is not a valid path or the text cannot be encoded.
    """
    file_path = output_dir / environment_filename(environment, config)
    data = serialize_environment(environment).encode("utf-8")
    file_path.write_bytes(data)
    logger.debug("Wrote %s", file_path)
    return file_path
