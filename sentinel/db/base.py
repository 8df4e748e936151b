"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from sentinel.config import settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# Create engine lazily to allow testing without database
_engine = None
_SessionLocal = None


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared between the loop and request threads."""
    if not database_url:
        raise ValueError("DATABASE_URL not configured")
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Test connections before use
        pool_recycle=300,  # Recycle connections after 5 minutes
    )


def get_engine() -> Engine:
    """Get or create database engine."""
    global _engine
    if _engine is None:
        _engine = build_engine(settings.database_url)
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def init_db(engine: Engine | None = None) -> None:
    """Initialize database tables."""
    from sentinel.db import tables  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
