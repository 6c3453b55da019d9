from catalog import SqlCatalog
from db_connection import make_engine, make_session_factory
from load_courses import main
from reset_db import reset_database
from course_parser import CourseRecord


def open_catalog(db_url):
    return SqlCatalog(make_session_factory(make_engine(db_url)))


class TestLoadCoursesScript:
    """Tests for the non-interactive database loader."""

    def test_loads_file_into_database(self, course_file, tmp_path, capsys):
        db_url = f"sqlite:///{tmp_path / 'courses.db'}"
        path = course_file("CS101,Intro to CS,CS100", "CS100,Fundamentals", "bad line")

        assert main([str(path), "--database-url", db_url]) == 0
        assert "Saved 2 courses." in capsys.readouterr().out

        catalog = open_catalog(db_url)
        assert [r.identifier for r in catalog.all_sorted()] == ["CS100", "CS101"]
        assert catalog.find("CS101").prerequisites == ["CS100"]

    def test_missing_file_returns_error_and_keeps_data(self, course_file, tmp_path, capsys):
        db_url = f"sqlite:///{tmp_path / 'courses.db'}"
        main([str(course_file("CS100,Fundamentals")), "--database-url", db_url])

        assert main([str(tmp_path / "missing.csv"), "--database-url", db_url]) == 1
        assert "not found" in capsys.readouterr().out
        assert len(open_catalog(db_url)) == 1

    def test_reset_flag_recreates_tables(self, course_file, tmp_path):
        db_url = f"sqlite:///{tmp_path / 'courses.db'}"
        main([str(course_file("CS100,Fundamentals", name="a.csv")), "--database-url", db_url])
        assert main([str(course_file("BIO100,Biology", name="b.csv")), "--database-url", db_url, "--reset"]) == 0
        assert [r.identifier for r in open_catalog(db_url).all_sorted()] == ["BIO100"]

    def test_unopenable_database_returns_error(self, course_file, tmp_path, capsys):
        db_url = f"sqlite:///{tmp_path / 'missing_dir' / 'courses.db'}"
        assert main([str(course_file("CS100,Fundamentals")), "--database-url", db_url]) == 1
        assert "Could not open the course database" in capsys.readouterr().out


class TestResetDatabase:
    """Tests for reset_database."""

    def test_reset_empties_tables(self, sqlite_engine, capsys):
        catalog = SqlCatalog(make_session_factory(sqlite_engine))
        catalog.insert_or_replace(CourseRecord("CS101", "Intro", ["CS100"]))

        reset_database(sqlite_engine)

        assert len(catalog) == 0
        assert "Tables created." in capsys.readouterr().out
