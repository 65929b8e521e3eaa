"""Local filesystem access for file-backed data sources."""

from __future__ import annotations

import logging
from pathlib import Path

from sortkey.errors import AggregationError

logger = logging.getLogger(__name__)


def list_files(path: str | Path, suffix: str) -> list[Path]:
    """List the files in a directory whose name ends with suffix.

    Args:
        path: Directory to scan (not recursive).
        suffix: File name suffix to keep, e.g. ".json".

    Returns:
        Matching file paths sorted by name.

    Raises:
        AggregationError: If the directory is missing, empty, or holds no
            matching files.
    """
    directory = Path(path)
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise AggregationError(
            f"Cannot list data source directory {directory}: {exc}"
        ) from exc

    if not entries:
        raise AggregationError(f"The {directory} folder is empty")

    files = [
        entry for entry in entries
        if entry.is_file() and entry.name.endswith(suffix)
    ]
    if not files:
        raise AggregationError(
            f"No files with file type '{suffix}' were found in {directory}"
        )

    logger.debug("Found %d '%s' files in %s", len(files), suffix, directory)
    return files


def read_file(path: str | Path) -> bytes:
    """Read a whole file. Raises OSError if it cannot be read."""
    return Path(path).read_bytes()
