"""
Database session management (SQLAlchemy)
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from habitboard.config import Settings, get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


def create_db_engine(settings: Settings | None = None) -> Engine:
    """Engine for settings.DATABASE_URL; SQL echo follows settings.DEBUG"""
    settings = settings or get_settings()
    url = settings.get_sqlalchemy_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, echo=settings.DEBUG, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Create missing tables (key_value_store).

    Alembic revisions under migrations/versions/ describe the same schema;
    this is the shortcut for local SQLite files.
    """
    from habitboard.infrastructure.db import models  # noqa: F401  (registers tables)

    Base.metadata.create_all(engine)


def check_db_connection(engine: Engine) -> None:
    """
    Health check - database is reachable

    Raises:
        sqlalchemy.exc.OperationalError: if the database is unavailable
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
