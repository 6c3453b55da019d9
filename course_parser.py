# course_parser.py
# Turns raw lines of a course file into CourseRecord objects.
# Line format: COURSE_ID,Title,PREREQ_1,PREREQ_2,...
import string
from dataclasses import dataclass, field
from typing import Iterable, Iterator

DELIMITER = ","
# Only ASCII whitespace and letters are folded; other characters pass through untouched
WHITESPACE = string.whitespace
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


@dataclass
class CourseRecord:
    identifier: str                      # e.g., 'CSCI300', always normalized
    title: str                           # display text, trimmed but case kept
    prerequisites: list[str] = field(default_factory=list)  # normalized ids, input order

    def __post_init__(self):
        # Records built by hand get the same key rules as parsed ones
        self.identifier = normalize(self.identifier)
        self.title = self.title.strip(WHITESPACE)
        self.prerequisites = [normalize(p) for p in self.prerequisites if normalize(p)]


def normalize(value: str | None) -> str:
    """Trim surrounding whitespace and uppercase, so 'csci 300 ' matches 'CSCI 300'."""
    if value is None:
        return ""
    return value.strip(WHITESPACE).translate(_ASCII_UPPER)


def parse_line(line: str) -> CourseRecord | None:
    """Parse one course line. Returns None for blank or malformed lines."""
    line = line.strip(WHITESPACE)
    if not line:
        return None

    fields = line.split(DELIMITER)
    if len(fields) < 2:
        return None  # no title

    identifier = normalize(fields[0])
    title = fields[1].strip(WHITESPACE)
    if not identifier or not title:
        return None

    # Remaining fields are prerequisites; empty ones (e.g. trailing commas) are dropped
    prerequisites = []
    for raw in fields[2:]:
        prereq = normalize(raw)
        if prereq:
            prerequisites.append(prereq)

    return CourseRecord(identifier=identifier, title=title, prerequisites=prerequisites)


def parse_lines(lines: Iterable[str]) -> Iterator[CourseRecord]:
    """Yield a record for every well-formed line, skipping the rest."""
    for line in lines:
        record = parse_line(line)
        if record is not None:
            yield record
