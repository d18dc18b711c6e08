import logging
import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from jobly.core.config import settings

logger = logging.getLogger(__name__)

# $1, $2, ... positional placeholders produced by jobly.core.sql
_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,  # Connection pool size
        "max_overflow": 20,  # Allow up to 20 connections beyond pool_size
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base.metadata, then creates any
    missing tables.
    """
    from jobly.models import company, job, user  # noqa: F401 - register models
    Base.metadata.create_all(bind=engine)


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute SQL written with $1-style positional placeholders.

    Placeholders are rewritten to SQLAlchemy named binds (``:p1``, ``:p2``...)
    and bound from ``values`` by position, so no value ever reaches the SQL
    text itself.

    Args:
        db: Database session
        sql: Statement text using $n placeholders
        values: Ordered parameter values; ``values[i-1]`` binds ``$i``

    Returns:
        Result rows as plain dicts (empty list for statements without rows)
    """
    statement = _POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", sql)
    if db.get_bind().dialect.name == "sqlite":
        # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
        statement = statement.replace(" ILIKE ", " LIKE ")

    params = {f"p{position}": value for position, value in enumerate(values, start=1)}
    result = db.execute(text(statement), params)

    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
