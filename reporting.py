# reporting.py
# Text output for the planner. Pure string building, no printing here.
from typing import Iterable

from course_parser import CourseRecord

NOT_FOUND_MESSAGE = "Error: Course not found"


def format_course_line(record: CourseRecord) -> str:
    return f"{record.identifier}, {record.title}"


def format_list(records: Iterable[CourseRecord]) -> str:
    """One 'ID, Title' line per course, in the order given (callers pass all_sorted())."""
    return "\n".join(format_course_line(r) for r in records)


def format_detail(record: CourseRecord) -> str:
    """Course line plus its prerequisites, e.g. 'Prerequisites: CSCI100, MATH201'."""
    prereqs = ", ".join(record.prerequisites) if record.prerequisites else "None"
    return f"{format_course_line(record)}\nPrerequisites: {prereqs}"


def format_not_found() -> str:
    return NOT_FOUND_MESSAGE
