"""Postman collection (v2.x) and environment loaders.

Reads exported JSON files into the models from ``parser.base``. Any read or
decode failure is raised as DocumentLoadError so the caller can skip the file.
"""

import json
import logging
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import ValidationError

from postman_to_http.errors import DocumentLoadError
from .base import Collection, Environment

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT")


def load_collection(file_path: Path) -> Collection:
    """Load a Postman collection file into a Collection tree."""
    collection = _load(file_path, parse_collection)
    logger.debug("Loaded collection %s with %d top-level items", file_path, len(collection.items))
    return collection


def load_environment(file_path: Path) -> Environment:
    """Load a Postman environment file."""
    environment = _load(file_path, parse_environment)
    logger.debug("Loaded environment %s (%d values)", file_path, len(environment.values))
    return environment


def parse_collection(text: str) -> Collection:
    """Decode collection JSON text. Raises json.JSONDecodeError or ValidationError."""
    return Collection.model_validate(_json_object(text))


def parse_environment(text: str) -> Environment:
    """Decode environment JSON text. Raises json.JSONDecodeError or ValidationError."""
    return Environment.model_validate(_json_object(text))


def _load(file_path: Path, parse: Callable[[str], DocT]) -> DocT:
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(file_path, f"cannot read file: {e}") from e

    try:
        return parse(text)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(file_path, f"invalid JSON: {e}") from e
    except ValidationError as e:
        raise DocumentLoadError(file_path, f"unexpected document shape: {e}") from e
    except RecursionError as e:
        raise DocumentLoadError(file_path, "document is nested too deeply to decode") from e


def _json_object(text: str) -> object:
    # utf-8-sig exports from some Windows tools carry a BOM
    return json.loads(text.lstrip("\ufeff"))
