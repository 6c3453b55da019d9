import argparse

from sqlalchemy.exc import SQLAlchemyError

from catalog import CatalogError, SqlCatalog
from catalog_loader import SourceNotFoundError, load_catalog
from config import settings, configure_logging
from db_connection import make_engine, make_session_factory
from db_setup import init_db
from reset_db import reset_database


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Load a course file into the course database.")
    ap.add_argument("path", nargs="?", default=settings.COURSE_FILE,
                    help=f"Course file to load (default: {settings.COURSE_FILE})")
    ap.add_argument("--database-url", dest="database_url", default=None,
                    help="SQLAlchemy URL (default: DATABASE_URL)")
    ap.add_argument("--reset", action="store_true",
                    help="Drop and recreate the tables before loading")
    return ap.parse_args(argv)


# Main function: read the file and replace the database contents in one go
def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        engine = make_engine(args.database_url)
        if args.reset:
            reset_database(engine)
        else:
            init_db(engine)
    except SQLAlchemyError as e:
        print(f"❌ Could not open the course database: {e}")
        return 1

    catalog = SqlCatalog(make_session_factory(engine))
    print(f"🔍 Loading courses from {args.path}...")
    try:
        count = load_catalog(args.path, catalog)
    except SourceNotFoundError as e:
        print(f"❌ {e}")
        return 1
    except CatalogError as e:
        print(f"❌ Database rejected the load: {e}")
        return 1
    finally:
        engine.dispose()

    print(f"💾 Saved {count} courses.")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
