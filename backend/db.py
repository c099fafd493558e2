from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from config import settings

DATABASE_URL = settings.database_url

# Shared database engine
engine = create_async_engine(
    DATABASE_URL,
    echo=settings.sql_echo,  # NOTES_SQL_ECHO=1 to log SQL
)

# Session factory (one session per request)
SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for ORM models
class Base(DeclarativeBase):
    pass


def ensure_sqlite_dir(database_url: str) -> None:
    """SQLite creates the file but not its parent directory."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
