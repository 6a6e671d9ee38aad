# /app/db/database.py

import os
from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

load_dotenv()

# The database URL comes from the environment. The second argument is a
# default value for local development.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./artworks.db")

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Creates an engine for the given URL, with SQLite-specific wiring."""
    engine_args = {}
    if database_url.startswith("sqlite"):
        # The 'check_same_thread' argument is only needed for SQLite.
        engine_args["connect_args"] = {"check_same_thread": False}
        if database_url in IN_MEMORY_SQLITE_URLS:
            # One shared connection, otherwise every session sees an empty database.
            engine_args["poolclass"] = StaticPool

    new_engine = create_engine(database_url, **engine_args)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


engine = build_engine(DATABASE_URL)

# Each instance of this class will be a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get a DB session. This will be used in our API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
