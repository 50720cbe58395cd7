"""Mirror a collection's item tree onto the filesystem.

Folders become directories, requests become ``.http`` files in the
directory of their parent folder. A failure on one directory or file is
logged and recorded; the rest of the tree is still converted.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from postman_to_http.config import ConverterConfig, DEFAULT_CONFIG
from postman_to_http.parser.base import Item
from .request import serialize_request
from .sanitize import sanitize_name

logger = logging.getLogger(__name__)


class TreeReport(BaseModel):
    """What a single tree conversion produced."""

    files_written: list[Path] = Field(default_factory=list)
    directories_created: list[Path] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def convert_items(
    items: list[Item],
    output_dir: Path,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> TreeReport:
    """Convert ``items`` depth-first, in order, into ``output_dir``.

    ``output_dir`` itself must already exist. Sub-directories are created
    as folders are reached, so a parent always exists before its children.
    An explicit stack is used so the tree depth is not bound by the
    interpreter's recursion limit.
    """
    report = TreeReport()
    stack = [(item, output_dir) for item in reversed(items)]

    while stack:
        item, current_dir = stack.pop()
        if item.request is not None:
            _write_request(item, current_dir, config, report)

        if item.is_folder:
            folder = current_dir / sanitize_name(item.name)
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except (OSError, ValueError) as e:
                _record_error(report, f"Error creating folder {folder!s}: {e}")
                continue
            report.directories_created.append(folder)
            stack.extend((child, folder) for child in reversed(item.children))

    return report


def _write_request(item: Item, output_dir: Path, config: ConverterConfig, report: TreeReport) -> None:
    file_path = output_dir / sanitize_name(item.name + config.request_extension)
    try:
        # encode first so an unencodable request leaves no empty file behind
        data = serialize_request(item.request).encode("utf-8")
        file_path.write_bytes(data)
    except (OSError, ValueError) as e:
        _record_error(report, f"Error writing request {item.name!r} to {file_path!s}: {e}")
        return
    logger.debug("Wrote %s", file_path)
    report.files_written.append(file_path)


def _record_error(report: TreeReport, msg: str) -> None:
    logger.debug(msg)
    report.errors.append(msg)
