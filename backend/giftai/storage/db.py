from typing import Iterator

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from giftai.config import get_settings


engine = create_engine(get_settings().database_url, pool_pre_ping=True)


def enable_sqlite_foreign_keys(target_engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign_keys is switched on per connection."""

    @event.listens_for(target_engine, "connect")
    def _set_pragma(dbapi_connection, _record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine)


def get_db_session() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    with get_session() as session:
        yield session
