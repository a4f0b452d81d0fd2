"""
Database initialization and session provider.

Uses SQLAlchemy. By default uses SQLite file newsdesk.db in the project root.
If you want to use Postgres, set DATABASE_URL in environment (e.g. in .env).
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from newsdesk.config import settings
import logging

logger = logging.getLogger("newsdesk.db")

Base = declarative_base()


def _enable_sqlite_pragmas(dbapi_connection, connection_record):
    # plain LIKE ignores case on SQLite; SEARCH_CASE_SENSITIVE relies on it not doing so.
    # The default title match lowercases both sides and is unaffected.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(url: str, **kwargs) -> Engine:
    """
    Build an engine for ``url``, applying the SQLite tweaks the query layer relies on.

    Extra keyword arguments are passed to ``create_engine`` (tests use this to
    supply a StaticPool for in-memory databases).
    """
    # check_same_thread disabled for SQLite since FastAPI serves sync routes from a threadpool
    connect_args = kwargs.pop("connect_args", {})
    if url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)

    engine = create_engine(url, connect_args=connect_args, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_pragmas)
    return engine


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def get_db() -> Session:
    """
    Yield a SQLAlchemy session (use as dependency in FastAPI).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind: Engine = None):
    """Create tables. Safe to call on startup."""
    import sqlalchemy
    # models must be imported so their tables are registered on Base.metadata
    import newsdesk.models  # noqa: F401

    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
        logger.info("Database initialized: %s", bind.url.render_as_string(hide_password=True))
    except sqlalchemy.exc.SQLAlchemyError as e:
        logger.exception("Failed to initialize database: %s", e)
        raise
