# db_connection.py
# This file sets up the database engine and session factory for the sql catalog backend.
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with foreign key enforcement off; ON DELETE CASCADE needs it
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str | None = None):
    """Create an engine for the given URL (defaults to DATABASE_URL from settings)."""
    url = database_url or settings.DATABASE_URL
    engine = create_engine(url)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def make_session_factory(engine):
    """Return a Session class bound to the engine, like sessionmaker(bind=engine)."""
    return sessionmaker(bind=engine)
