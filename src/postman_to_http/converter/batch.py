"""Convert every collection and environment file found in a directory.

Each file is handled on its own: a read, decode or write failure becomes a
failed FileOutcome (logged at debug level; the outcome carries the
message) and the next file is processed. Only failing to list an
input directory or to create an output root is raised to the caller.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from postman_to_http.config import ConverterConfig, DEFAULT_CONFIG
from postman_to_http.errors import DocumentLoadError
from postman_to_http.parser.postman import load_collection, load_environment
from .collection import convert_items
from .environment import convert_environment
from .sanitize import sanitize_name

logger = logging.getLogger(__name__)


class FileOutcome(BaseModel):
    """Result of converting one input document."""

    source: Path
    kind: str  # collection / environment
    output: Path | None = None
    files_written: int = 0
    error: str | None = None
    item_errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchReport(BaseModel):
    """Outcomes for all documents of one run, in processing order."""

    outcomes: list[FileOutcome] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]


def scan_documents(directory: Path, suffix: str) -> list[Path]:
    """List top-level files in ``directory`` whose name ends with ``suffix``.

    Sub-directories are never entered. Raises OSError if the directory
    cannot be listed.
    """
    return sorted(
        p for p in directory.iterdir()
        if p.name.endswith(suffix) and not p.is_dir()
    )


def collection_output_name(filename: str, config: ConverterConfig = DEFAULT_CONFIG) -> str:
    name = sanitize_name(filename)
    if config.collection_suffix and name.endswith(config.collection_suffix):
        name = name[: -len(config.collection_suffix)]
    return name


def convert_collection_file(
    file_path: Path,
    output_root: Path,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> FileOutcome:
    """Convert one collection file into ``output_root/<collection name>/``."""
    output_dir = output_root / collection_output_name(file_path.name, config)
    outcome = FileOutcome(source=file_path, kind="collection", output=output_dir)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        outcome.error = f"Error creating collection directory {output_dir}: {e}"
        logger.debug(outcome.error)
        return outcome

    try:
        collection = load_collection(file_path)
    except DocumentLoadError as e:
        outcome.error = f"Error loading collection {e}"
        logger.debug(outcome.error)
        return outcome

    report = convert_items(collection.items, output_dir, config)
    outcome.files_written = len(report.files_written)
    outcome.item_errors = report.errors
    logger.info("Converted collection %s: %d requests", file_path.name, outcome.files_written)
    return outcome


def convert_environment_file(
    file_path: Path,
    output_root: Path,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> FileOutcome:
    """Convert one environment file into ``output_root/<name>.env``."""
    outcome = FileOutcome(source=file_path, kind="environment")

    try:
        environment = load_environment(file_path)
    except DocumentLoadError as e:
        outcome.error = f"Error loading environment {e}"
        logger.debug(outcome.error)
        return outcome

    try:
        outcome.output = convert_environment(environment, output_root, config)
    except (OSError, ValueError) as e:
        outcome.error = f"Error writing env file for environment {file_path.name}: {e}"
        logger.debug(outcome.error)
        return outcome

    outcome.files_written = 1
    logger.info("Converted environment %s", file_path.name)
    return outcome


def run_batch(
    collections_dir: Path,
    environments_dir: Path,
    output_root: Path,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> BatchReport:
    """Convert every collection, then every environment.

    Both input directories are listed and both output roots created before
    any document is touched; an OSError from those steps aborts the run.
    """
    collection_files = scan_documents(collections_dir, config.input_suffix)
    environment_files = scan_documents(environments_dir, config.input_suffix)

    collections_out = output_root / config.collections_dir_name
    environments_out = output_root / config.environments_dir_name
    collections_out.mkdir(parents=True, exist_ok=True)
    environments_out.mkdir(parents=True, exist_ok=True)

    report = BatchReport()
    for path in collection_files:
        report.outcomes.append(convert_collection_file(path, collections_out, config))
    for path in environment_files:
        report.outcomes.append(convert_environment_file(path, environments_out, config))
    return report
