"""
Database connection management.

The process entry point owns the engine and the session factory: it calls
``create_session_factory()`` once at startup and stores the result on the
application state. Each turn opens its own session from that factory.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL (see config.py)
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .models import Base


def create_db_engine(database_url: str) -> Engine:
    """Build an engine for ``database_url``; SQLite URLs allow cross-thread use."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=False,
        connect_args=connect_args,
    )


def create_session_factory(database_url: str = None, engine: Engine = None) -> sessionmaker:
    """
    Create the session factory used for the lifetime of the process.

    Either an URL or an existing engine must be supplied. Tables are created
    if they do not exist yet.
    """
    if engine is None:
        if not database_url:
            raise ValueError("database_url or engine is required")
        engine = create_db_engine(database_url)

    Base.metadata.create_all(bind=engine)

    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
