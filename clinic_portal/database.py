"""
Database connection and session management.
Provides SQLAlchemy engine, session, and base class for models.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings


def _engine_options(database_url: str) -> dict:
    """
    Build engine keyword arguments that bound how long a caller can wait on the database.

    Args:
        database_url: SQLAlchemy connection string

    Returns:
        dict: Keyword arguments for create_engine
    """
    timeout = settings.repository_timeout_seconds
    if database_url.startswith("sqlite"):
        # SQLite waits on its file lock for at most `timeout` seconds
        return {"connect_args": {"check_same_thread": False, "timeout": timeout}}
    return {"pool_timeout": timeout, "pool_pre_ping": True}


# Create SQLAlchemy engine for database connection
engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

# Create session factory for database sessions
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

# Create base class for declarative models
Base = declarative_base()

def get_db():
    """
    Database dependency - Creates and yields a database session.

    The session is automatically closed after the request is processed,
    even if an exception occurs during request handling.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
