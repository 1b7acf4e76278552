"""Database schema definition and ORM models."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Index, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from job_assistant.domain.models import ApplicationRecord
from job_assistant.logging import get_logger

logger = get_logger(__name__, component="database")

Base = declarative_base()


class ApplicationModel(Base):
    """ORM model for the applications table: one row per posting applied to."""

    __tablename__ = "applications"

    job_id = Column(String(64), primary_key=True, nullable=False)
    job_title = Column(Text, nullable=False)
    company = Column(String(255), nullable=False)
    # ISO 8601 UTC strings sort chronologically
    applied_at = Column(String(50), nullable=False)
    apply_url = Column(Text, nullable=False, default="")

    __table_args__ = (Index("idx_applications_applied_at", "applied_at"),)

    def to_domain(self) -> ApplicationRecord:
        return ApplicationRecord(
            job_id=self.job_id,
            job_title=self.job_title,
            company=self.company,
            applied_at=parse_db_datetime(self.applied_at),
            apply_url=self.apply_url or "",
        )

    @classmethod
    def from_domain(cls, record: ApplicationRecord) -> "ApplicationModel":
        return cls(
            job_id=record.job_id,
            job_title=record.job_title,
            company=record.company,
            applied_at=format_db_datetime(record.applied_at),
            apply_url=record.apply_url,
        )


def format_db_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO 8601 UTC string with microseconds."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_db_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse a string written by format_db_datetime back into an aware UTC datetime."""
    if not dt_str:
        return None

    dt_str = dt_str.rstrip("Z")
    try:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S.%f")
    except ValueError:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S")
    return dt.replace(tzinfo=timezone.utc)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    Base.metadata.create_all(engine, checkfirst=True)
    tables = inspect(engine).get_table_names()
    logger.info(
        f"Database schema ready. Tables: {', '.join(tables)}",
        extra={"event": "database.schema_ready", "tables": tables},
    )
