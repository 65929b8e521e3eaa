"""Resolution of the configured data source.

Two kinds of source are supported:

    file  A directory of JSON snapshot files, each holding a record batch.
    http  A directory of .cfg files listing remote endpoints, one URL per
          line, each serving a record batch.

Resolution is pure configuration: it never touches the filesystem.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

SOURCE_HTTP = "http"
SOURCE_FILE = "file"

DEFAULT_SOURCE_PATHS: dict[str, str] = {
    SOURCE_HTTP: "config",
    SOURCE_FILE: os.path.join("dev-resources", "raw-json-files"),
}

FILE_SUFFIX_BY_SOURCE: dict[str, str] = {
    SOURCE_HTTP: ".cfg",
    SOURCE_FILE: ".json",
}


def resolve_source_kind(kind_raw: str | None) -> str:
    """Normalize free text to a supported source kind.

    Unknown values fall back to "http" with a warning.
    """
    if kind_raw == SOURCE_HTTP:
        return SOURCE_HTTP
    if kind_raw == SOURCE_FILE:
        logger.warning(
            "File data source selected; not intended for production use"
        )
        return SOURCE_FILE
    logger.warning(
        "Invalid data source '%s', using default '%s'",
        kind_raw,
        SOURCE_HTTP,
    )
    return SOURCE_HTTP


def resolve_source(
    kind_raw: str | None,
    path_raw: str | None,
) -> tuple[str, str]:
    """Resolve the source kind and the directory to read it from.

    Args:
        kind_raw: Requested source kind, any text.
        path_raw: Requested directory. Empty selects the kind's default.

    Returns:
        Tuple of (source_kind, source_path).
    """
    kind = resolve_source_kind(kind_raw)
    path = path_raw if path_raw else DEFAULT_SOURCE_PATHS[kind]
    return kind, path
