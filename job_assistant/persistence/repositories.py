"""Data access for application records.

Repositories take a session, return domain models and wrap every
SQLAlchemy failure in PersistenceError.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Set

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from job_assistant.domain.models import ApplicationRecord
from job_assistant.logging import get_logger
from job_assistant.utils.timestamps import ensure_utc, utc_now

from .exceptions import PersistenceError
from .schema import ApplicationModel, format_db_datetime

logger = get_logger(__name__, component="database")


@dataclass(frozen=True)
class ApplicationStats:
    """Application counts: all time, the last 7 days and the last 30 days."""

    total: int
    this_week: int
    this_month: int


class ApplicationRepository:
    """Repository for the postings a user has applied to."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, job_id: str) -> Optional[ApplicationRecord]:
        """Return the record for ``job_id``, or None.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(ApplicationModel, job_id)
            return model.to_domain() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving application {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve application: {e}") from e

    def is_applied(self, job_id: str) -> bool:
        return self.get(job_id) is not None

    def mark_applied(self, record: ApplicationRecord) -> ApplicationRecord:
        """Record an application; marking the same job again is a no-op.

        Returns:
            The stored record (the original one when already applied)

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(ApplicationModel, record.job_id)
            if existing is not None:
                logger.debug(
                    "Application already recorded",
                    extra={"event": "application.duplicate", "job_id": record.job_id},
                )
                return existing.to_domain()

            model = ApplicationModel.from_domain(record)
            self.session.add(model)
            self.session.flush()
            logger.info(
                f"Recorded application to {record.job_title} at {record.company}",
                extra={"event": "application.recorded", "job_id": record.job_id},
            )
            return model.to_domain()
        except SQLAlchemyError as e:
            logger.error(f"Error recording application {record.job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to record application: {e}") from e

    def unmark_applied(self, job_id: str) -> bool:
        """Delete the record for ``job_id``; returns whether one existed."""
        try:
            result = self.session.execute(delete(ApplicationModel).where(ApplicationModel.job_id == job_id))
            removed = result.rowcount > 0
            if removed:
                logger.info(
                    "Removed application record",
                    extra={"event": "application.removed", "job_id": job_id},
                )
            return removed
        except SQLAlchemyError as e:
            logger.error(f"Error removing application {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to remove application: {e}") from e

    def list_all(self) -> List[ApplicationRecord]:
        """All records, most recent first."""
        try:
            stmt = select(ApplicationModel).order_by(ApplicationModel.applied_at.desc())
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing applications: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list applications: {e}") from e

    def applied_ids(self) -> Set[str]:
        try:
            return set(self.session.execute(select(ApplicationModel.job_id)).scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing application ids: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list application ids: {e}") from e

    def stats(self, now: Optional[datetime] = None) -> ApplicationStats:
        """Counts of applications overall and within the last 7 and 30 days (inclusive)."""
        now = ensure_utc(now or utc_now())
        week_ago = format_db_datetime(now - timedelta(days=7))
        month_ago = format_db_datetime(now - timedelta(days=30))
        try:
            count = select(func.count()).select_from(ApplicationModel)
            total = self.session.execute(count).scalar_one()
            this_week = self.session.execute(count.where(ApplicationModel.applied_at >= week_ago)).scalar_one()
            this_month = self.session.execute(
                count.where(ApplicationModel.applied_at >= month_ago)
            ).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error computing application stats: {e}", exc_info=True)
            raise PersistenceError(f"Failed to compute application stats: {e}") from e
        return ApplicationStats(total=total, this_week=this_week, this_month=this_month)
