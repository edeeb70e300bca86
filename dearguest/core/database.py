"""Database engine and session management for SQLite.

The engine is built from settings by the application factory and kept on
``app.state``; request handlers receive a session through ``get_session``.

SQLite settings applied to every connection:
    - **WAL journal**: readers are not blocked while a request writes.
      Guests opening their invite links and submitting RSVPs read and write
      the same tables the admin dashboard reads.

    - **Foreign keys**: off by default in SQLite for backwards
      compatibility. Turned on so that deleting an Event cascades to its
      guests, RSVPs and admin assignments.

    - **check_same_thread=False**: Required for FastAPI. Sessions may be
      used from a different worker thread than the one that opened them.
"""

from fastapi import Request
from sqlalchemy import event as sa_event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine with the SQLite pragmas applied to every connection."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(database_url, connect_args=connect_args, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        sa_event.listen(engine, "connect", set_sqlite_pragma)

    return engine


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Apply the pragmas. They are per connection, so every new pooled
    connection needs them again.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables(engine: Engine):
    """Create any missing tables. Existing tables are left as they are."""
    # Import registers every table on SQLModel.metadata
    import dearguest.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """Dependency yielding one session per request."""
    with Session(request.app.state.engine) as session:
        yield session
