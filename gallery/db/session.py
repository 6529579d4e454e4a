from functools import lru_cache
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool
from collections.abc import Generator

from gallery.core.config import get_settings
from gallery.core.errors import DatabaseNotConfiguredError
from gallery.models.base import Base


@lru_cache(maxsize=8)
def get_engine(url: str) -> Engine:
    """
    One engine per URL. NullPool: every invocation opens (and closes)
    its own connection; nothing is pooled across requests.
    """
    connect_args: dict[str, object] = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, poolclass=NullPool, connect_args=connect_args, future=True)


@lru_cache(maxsize=8)
def get_sessionmaker(url: str) -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(url), autocommit=False, autoflush=False, future=True)


def _database_url() -> str:
    url = get_settings().DATABASE_URL
    if not url:
        raise DatabaseNotConfiguredError("DATABASE_URL missing")
    return url


# Get a database session bound to the configured URL.
def get_db() -> Generator[Session, None, None]:
    db = get_sessionmaker(_database_url())()
    try:
        yield db
    finally:
        db.close()


def create_schema(url: str | None = None) -> None:
    """Create the tables directly (dev/test); production uses alembic."""
    import gallery.models.author  # noqa: F401  registers Author

    Base.metadata.create_all(bind=get_engine(url or _database_url()))
