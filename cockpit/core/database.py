"""Database configuration and session management.

This module configures the database engine with settings suited to a web
application that also runs background jobs against the same store.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while writing.
      The generation job and the changelog collector write from the
      scheduler's worker threads while dashboard requests read checklists.

    - **Foreign Keys**: SQLite ships with foreign key enforcement disabled.
      We enable it so that deleting a Project cascades to its checklist
      items and changelog entries.

    - **check_same_thread=False**: FastAPI's dependency injection and the
      scheduler's thread pool may use a connection from a thread other than
      the one that opened it.

Other backends (e.g. PostgreSQL) are used as-is; the pragmas only apply
when the configured URL points at SQLite.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from cockpit.core.config import settings

is_sqlite = settings.database_url.startswith("sqlite")

connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    # ChecklistItem.project_id and ChangeLogEntry.project_id must reference a
    # valid Project, and ON DELETE CASCADE only fires with this enabled.
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if is_sqlite:
    sa_event.listen(engine, "connect", set_sqlite_pragma)


def create_db_and_tables():
    """Create all database tables."""
    # Import models so their tables are registered on the metadata.
    import cockpit.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
