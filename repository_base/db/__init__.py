"""Database package — async SQLAlchemy engine, session factory, Base."""
from repository_base.db.base import (
    Base,
    async_session_factory,
    build_engine,
    build_session_factory,
    engine,
    get_db,
)

__all__ = [
    "Base",
    "async_session_factory",
    "build_engine",
    "build_session_factory",
    "engine",
    "get_db",
]
