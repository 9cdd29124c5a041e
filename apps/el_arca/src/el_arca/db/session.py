"""Engine construction and per-request sessions."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from el_arca.core.settings import get_settings


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite URLs share one connection across threads, which keeps in-memory
    databases alive for the whole process (tests and local experiments).
    """

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Sessions never autoflush; services decide when a batch hits the database."""

    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(get_settings().database_url)
SessionFactory = build_session_factory(engine)


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session per request lifecycle."""

    with SessionFactory() as session:
        yield session
