"""SQLAlchemy-backed storage of application records."""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import DatabaseConnectionError, PersistenceError
from .repositories import ApplicationRepository, ApplicationStats
from .schema import ApplicationModel, Base, create_schema

__all__ = [
    "ApplicationModel",
    "ApplicationRepository",
    "ApplicationStats",
    "Base",
    "DatabaseConnectionError",
    "PersistenceError",
    "close_database",
    "create_schema",
    "get_engine",
    "get_session",
    "init_database",
]
