"""File data source: a directory of JSON snapshot files.

Every ``*.json`` file in the directory is a self-contained record batch
(``{"data": [...]}``). Files are read one after another and their records
concatenated in file-name order. A file that cannot be read or decoded
is skipped with a warning; the run only fails when nothing usable is
left.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sortkey.errors import AggregationError
from sortkey.models import AggregationResult, UrlStat
from sortkey.sources import FILE_SUFFIX_BY_SOURCE, SOURCE_FILE
from sortkey.storage.files import list_files, read_file

logger = logging.getLogger(__name__)


def aggregate_files(path: str | Path) -> list[UrlStat]:
    """Concatenate the records of every JSON file in a directory.

    Args:
        path: Directory holding the snapshot files.

    Returns:
        All records from the files that decoded successfully.

    Raises:
        AggregationError: If the directory yields no matching files, or
            no records survive decoding.
    """
    files = list_files(path, FILE_SUFFIX_BY_SOURCE[SOURCE_FILE])

    records: list[UrlStat] = []
    skipped = 0

    for file_path in files:
        try:
            batch = AggregationResult.from_json(read_file(file_path))
        except (OSError, ValueError) as exc:
            logger.warning(
                "Skipping data source file %s: %s", file_path, exc,
            )
            skipped += 1
            continue
        records.extend(batch.records)

    logger.info(
        "Read %d records from %d files (%d skipped)",
        len(records), len(files) - skipped, skipped,
    )

    if not records:
        raise AggregationError(
            "No valid JSON data was found within the configured "
            "data source files"
        )
    return records
