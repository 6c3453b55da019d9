from collections import defaultdict

from course_parser import CourseRecord
from db_setup import Course, Prerequisite

def save_course(session, record: CourseRecord):
    """Saves a course and its prerequisite edges, replacing any existing row with the same id."""

    # Drop the old edges first so a reloaded course never keeps stale prerequisites
    session.query(Prerequisite).filter(Prerequisite.course_id == record.identifier).delete()

    # merge() creates or updates the course row in one step
    session.merge(Course(id=record.identifier, title=record.title))
    session.flush()  # course row must exist before its edges (foreign key)

    # The (course_id, prereq_id) primary key stores a repeated prerequisite once
    seen = set()
    for position, prereq_id in enumerate(record.prerequisites):
        if prereq_id in seen:
            continue
        seen.add(prereq_id)
        session.add(Prerequisite(course_id=record.identifier, prereq_id=prereq_id, position=position))
    session.flush()

def fetch_course(session, course_id: str) -> CourseRecord | None:
    """Return one course with its prerequisites in source order, or None."""
    course = session.get(Course, course_id)
    if course is None:
        return None
    prereqs = (
        session.query(Prerequisite.prereq_id)
        .filter(Prerequisite.course_id == course_id)
        .order_by(Prerequisite.position)
        .all()
    )
    return CourseRecord(identifier=course.id, title=course.title, prerequisites=[p[0] for p in prereqs])

def fetch_all_courses(session) -> list[CourseRecord]:
    """Return every course ordered by id. Two queries total, not one per course."""
    edges = defaultdict(list)
    rows = (
        session.query(Prerequisite.course_id, Prerequisite.prereq_id)
        .order_by(Prerequisite.course_id, Prerequisite.position)
        .all()
    )
    for course_id, prereq_id in rows:
        edges[course_id].append(prereq_id)

    courses = session.query(Course.id, Course.title).order_by(Course.id).all()
    return [
        CourseRecord(identifier=cid, title=title, prerequisites=edges.get(cid, []))
        for cid, title in courses
    ]

def count_courses(session) -> int:
    return session.query(Course).count()

def clear_courses(session):
    """Delete every course and prerequisite edge (edges first, like the cascade would)."""
    session.query(Prerequisite).delete()
    session.query(Course).delete()
