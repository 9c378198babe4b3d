import re
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# "$1", "$2", ... positional placeholders emitted by app.core.sql
POSITIONAL_PARAM = re.compile(r"\$(\d+)")
# Bare colons would be read as bind parameters by text()
BARE_COLON = re.compile(r"(?<![:\\]):(?=\w)")


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


def run_query(
    db: Session,
    sql: str,
    params: Optional[Sequence[Any]] = None
) -> List[Dict[str, Any]]:
    """
    Execute a statement written with $n positional placeholders.

    The placeholders are rewritten into SQLAlchemy named binds (:p1, :p2, ...)
    and bound to `params` in order. Column aliases are preserved, so
    `num_employees AS "numEmployees"` comes back under "numEmployees".

    Args:
        db: Database session
        sql: Statement text
        params: Values for $1..$n, in order

    Returns:
        Rows as plain dicts (empty list for statements that return no rows)
    """
    statement = BARE_COLON.sub(r"\\:", sql)
    binds: Dict[str, Any] = {}
    if params:
        statement = POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", statement)
        binds = {f"p{idx}": value for idx, value in enumerate(params, start=1)}

    result = db.execute(text(statement), binds)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings()]


def init_db():
    """
    Initialize database.

    Alembic owns table creation ("alembic upgrade head"); this only makes sure
    the models are imported and registered on Base.metadata.
    """
    from app.models import company, job, user  # Import models to register them
