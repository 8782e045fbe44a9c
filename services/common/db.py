"""
Engine construction shared by the per-service database modules.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for a service database URL.

    SQLite URLs get a connection shared across threads; an in-memory SQLite
    database is pinned to a single connection so every session sees the
    same tables.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Configured Engine
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in _IN_MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)
