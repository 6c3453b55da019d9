from db_setup import Base


def reset_database(engine):
    """Drop the courses and prerequisites tables and create them again, empty."""
    print("Dropping all tables...")
    Base.metadata.drop_all(engine)
    print("Tables dropped.")

    print("Creating all tables...")
    # This will re-create them with the correct schema
    Base.metadata.create_all(engine)
    print("Tables created.")


if __name__ == "__main__":
    from db_connection import make_engine
    reset_database(make_engine())
