# catalog_loader.py
# Reads a course file and swaps its contents into a Catalog.
import logging
import os

from catalog import Catalog, CatalogError
from course_parser import parse_line

logger = logging.getLogger(__name__)


class SourceNotFoundError(CatalogError, FileNotFoundError):
    """The course file could not be opened. The catalog was not touched."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        message = f"Course file not found or could not be opened: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


def read_records(path) -> dict:
    """Parse a course file into {identifier: CourseRecord}; the last duplicate wins.

    Dict insertion order follows the first time each identifier appears.
    """
    try:
        # utf-8-sig drops the BOM spreadsheet exports like to add
        f = open(path, "r", encoding="utf-8-sig", errors="replace", newline="")
    except OSError as e:
        raise SourceNotFoundError(path, e.strerror or type(e).__name__) from e

    records = {}
    skipped = 0
    with f:
        for lineno, line in enumerate(f, start=1):
            record = parse_line(line)
            if record is None:
                if line.strip():
                    skipped += 1
                    logger.debug("Skipping malformed line %d in %s: %r", lineno, path, line.rstrip("\r\n"))
                continue
            if record.identifier in records:
                logger.debug("Line %d in %s replaces earlier entry for %s", lineno, path, record.identifier)
            records[record.identifier] = record

    if skipped:
        logger.info("Skipped %d malformed line(s) in %s", skipped, path)
    return records


def load_catalog(path, catalog: Catalog) -> int:
    """Load a course file into the catalog, replacing what it held.

    Raises SourceNotFoundError (catalog unchanged) if the file can't be opened.
    Returns the number of courses now in the catalog.
    """
    path = os.fspath(path)
    records = read_records(path)  # everything parsed before the catalog is touched
    catalog.replace_all(records.values())
    logger.info("Loaded %d course(s) from %s", len(records), path)
    return len(records)
