# file that defines the course catalog tables using SQLAlchemy ORM
from sqlalchemy import String, Integer, ForeignKey, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# 1) Base class for all our database tables
class Base(DeclarativeBase):
    pass

# 2) Table for courses
class Course(Base):
    __tablename__ = "courses"
    id: Mapped[str] = mapped_column(String, primary_key=True)  # e.g., 'CSCI300', normalized
    title: Mapped[str] = mapped_column(String, nullable=False) # course title

# 3) Table for prerequisites (one row per course -> prerequisite edge)
# prereq_id is NOT a foreign key: a prerequisite may name a course that isn't in the catalog
class Prerequisite(Base):
    __tablename__ = "prerequisites"

    course_id: Mapped[str] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True
    )
    prereq_id: Mapped[str] = mapped_column(String, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)  # order in the source line

    __table_args__ = (Index("idx_prereq_course", "course_id"),)


def init_db(engine):
    """Create any missing tables. Existing tables and data are left alone."""
    Base.metadata.create_all(engine)
