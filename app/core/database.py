import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Turn on FOREIGN KEY enforcement for every new SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create SQLAlchemy engine
if settings.DATABASE_URL.startswith("sqlite"):
    engine = create_engine(settings.DATABASE_URL, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,
        max_overflow=20
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

POSITIONAL_PARAM = re.compile(r"\$(\d+)")


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


def execute(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Run SQL written with positional $1, $2, ... placeholders.

    Placeholders are rewritten to SQLAlchemy named binds (:p1, :p2, ...) so
    the values are always sent separately from the SQL text.

    Args:
        db: Database session
        sql: Statement text using $n placeholders
        params: Values for $1..$n, in order

    Returns:
        Result rows as dicts keyed by column (or alias); [] for statements
        that return nothing
    """
    statement = POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", sql)
    if db.get_bind().dialect.name == "sqlite":
        # SQLite's LIKE is already case-insensitive for ASCII
        statement = statement.replace(" ILIKE ", " LIKE ")

    bound = {f"p{position}": value for position, value in enumerate(params, start=1)}
    result = db.execute(text(statement), bound)
    if not result.returns_rows:
        return []
    return [dict(row._mapping) for row in result]


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base, then creates any missing tables.
    """
    from app.models import company, user, job  # noqa: F401
    Base.metadata.create_all(bind=engine)
