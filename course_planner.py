# course_planner.py
# Interactive menu: load a course file, list courses, look one up.
import argparse
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError

from catalog import BACKENDS, Catalog, CatalogError, make_catalog
from catalog_loader import SourceNotFoundError, load_catalog
from config import settings, configure_logging
from reporting import format_detail, format_list, format_not_found

logger = logging.getLogger(__name__)

MENU = (
    "\n"
    "1. Load Data Structure.\n"
    "2. Print Course List.\n"
    "3. Print Course.\n"
    "9. Exit"
)
MENU_PROMPT = "What would you like to do? "
LOAD_FIRST_MESSAGE = "Please load data first using option 1."


class MenuChoice(Enum):
    LOAD = "1"
    LIST = "2"
    DETAIL = "3"
    EXIT = "9"
    UNRECOGNIZED = None


def parse_choice(text: str | None) -> MenuChoice:
    """Map raw menu input to a choice. Anything unexpected is UNRECOGNIZED, never an exception."""
    key = (text or "").strip()
    for choice in MenuChoice:
        if choice.value is not None and choice.value == key:
            return choice
    return MenuChoice.UNRECOGNIZED


@dataclass
class PlannerState:
    catalog: Catalog
    loaded: bool = False
    default_file: str = settings.COURSE_FILE

    @classmethod
    def for_catalog(cls, catalog: Catalog, default_file: str | None = None):
        # A database that already holds courses counts as loaded
        return cls(
            catalog=catalog,
            loaded=len(catalog) > 0,
            default_file=default_file or settings.COURSE_FILE,
        )


def handle_load(state: PlannerState, filename: str) -> str:
    """Load a file into the state's catalog. On failure the old catalog stays as it was."""
    # The name is used as typed; only an empty answer falls back to the default file
    path = filename if filename.strip() else state.default_file
    try:
        count = load_catalog(path, state.catalog)
    except SourceNotFoundError as e:
        logger.warning("%s", e)
        return "Error: File not found or could not be opened"
    except CatalogError as e:
        return f"Error: Could not load courses ({e})"
    state.loaded = True
    return f"Data loaded successfully. ({count} courses)"


def handle_list(state: PlannerState) -> str:
    if not state.loaded:
        return LOAD_FIRST_MESSAGE
    listing = format_list(state.catalog.all_sorted())
    return "Here is a sample schedule:" + ("\n" + listing if listing else "")


def handle_detail(state: PlannerState, course_id: str) -> str:
    if not state.loaded:
        return LOAD_FIRST_MESSAGE
    record = state.catalog.find(course_id)
    if record is None:
        return format_not_found()
    return format_detail(record)


def run_menu(state: PlannerState, read=None, write=None) -> int:
    """Main loop. Returns the process exit code. EOF on input exits like option 9."""
    # Looked up at call time so a patched builtins.input is honoured
    read = read or input
    write = write or print

    write("Welcome to the course planner.")
    while True:
        write(MENU)
        try:
            raw = read(MENU_PROMPT)
        except EOFError:
            raw = MenuChoice.EXIT.value
        choice = parse_choice(raw)

        try:
            if choice is MenuChoice.LOAD:
                write(handle_load(state, read("Enter file name: ")))
            elif choice is MenuChoice.LIST:
                write(handle_list(state))
            elif choice is MenuChoice.DETAIL:
                # No course prompt until something is loaded
                course_id = read("What course do you want to know about? ") if state.loaded else ""
                write(handle_detail(state, course_id))
            elif choice is MenuChoice.EXIT:
                write("Thank you for using the course planner!")
                return 0
            else:
                write(f"{raw.strip()} is not a valid option.")
        except CatalogError as e:
            logger.warning("%s", e)
            write(f"Error: {e}")
        except EOFError:
            # input ran out in the middle of a prompt
            write("Thank you for using the course planner!")
            return 0


def build_catalog(backend: str, database_url: str | None = None) -> Catalog:
    """Create the catalog for the chosen backend, setting up the database if needed."""
    if backend != "sql":
        return make_catalog(backend)

    from db_connection import make_engine, make_session_factory
    from db_setup import init_db

    engine = make_engine(database_url)
    init_db(engine)
    return make_catalog("sql", session_factory=make_session_factory(engine))


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Course planner: load a course file, list courses, look up prerequisites.")
    ap.add_argument("--backend", choices=BACKENDS, default=None,
                    help=f"Catalog structure (default: CATALOG_BACKEND or '{settings.CATALOG_BACKEND}')")
    ap.add_argument("--database-url", dest="database_url", default=None,
                    help="SQLAlchemy URL for the sql backend (default: DATABASE_URL)")
    ap.add_argument("--file", dest="file", default=None,
                    help="Course file to load before showing the menu")
    ap.add_argument("--log-level", dest="log_level", default=None,
                    help="Logging level, e.g. DEBUG or INFO (default: LOG_LEVEL)")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    backend = args.backend or settings.CATALOG_BACKEND
    try:
        catalog = build_catalog(backend, args.database_url)
        state = PlannerState.for_catalog(catalog, default_file=args.file)
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    except (SQLAlchemyError, CatalogError) as e:
        logger.error("Could not open the course database: %s", e)
        print(f"Error: Could not open the course database ({e})")
        return 1

    if args.file:
        print(handle_load(state, args.file))
    return run_menu(state)


if __name__ == "__main__":
    raise SystemExit(main())
