import pytest

from catalog import BACKENDS, SqlCatalog, make_catalog
from db_connection import make_engine, make_session_factory
from db_setup import init_db


@pytest.fixture
def sqlite_engine(tmp_path):
    """Fresh SQLite file with the catalog tables created."""
    engine = make_engine(f"sqlite:///{tmp_path / 'courses.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_catalog(sqlite_engine):
    return SqlCatalog(make_session_factory(sqlite_engine))


@pytest.fixture(params=BACKENDS)
def catalog(request):
    """Every catalog backend, so shared behaviour is checked once for all four."""
    if request.param == "sql":
        return request.getfixturevalue("sql_catalog")
    return make_catalog(request.param)


@pytest.fixture
def course_file(tmp_path):
    """Write lines to a course file and return its path."""
    def _write(*lines, name="courses.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
