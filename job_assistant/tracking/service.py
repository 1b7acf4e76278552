"""Best-effort tracking of the postings a user applies to."""

from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Callable, List, Optional, Set

from job_assistant.domain.models import ApplicationRecord, JobPosting
from job_assistant.logging import get_logger
from job_assistant.persistence.database import get_session
from job_assistant.persistence.exceptions import PersistenceError
from job_assistant.persistence.repositories import ApplicationRepository, ApplicationStats
from job_assistant.utils.timestamps import utc_now

logger = get_logger(__name__, component="tracking")

SessionFactory = Callable[[], AbstractContextManager]


class ApplicationTracker:
    """Records applications off the caller's thread.

    Writes go to a single background worker, so they are serialized and
    never block the caller. A failed write is logged and reported through
    the returned Future's result (None); it never raises into the caller.
    """

    def __init__(
        self,
        session_factory: SessionFactory = get_session,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tracker")

    def record_application(self, posting: JobPosting) -> "Future[Optional[ApplicationRecord]]":
        """Queue a record that ``posting`` was applied to, stamped with the current time."""
        return self.record(ApplicationRecord.for_posting(posting, self._clock()))

    def record(self, record: ApplicationRecord) -> "Future[Optional[ApplicationRecord]]":
        logger.debug(
            "Queueing application record",
            extra={"event": "tracking.queued", "job_id": record.job_id},
        )
        return self._executor.submit(self._write, record)

    def _write(self, record: ApplicationRecord) -> Optional[ApplicationRecord]:
        try:
            with self._session_factory() as session:
                return ApplicationRepository(session).mark_applied(record)
        except PersistenceError as e:
            logger.error(
                f"Could not record application {record.job_id}: {e}",
                extra={"event": "tracking.failed", "job_id": record.job_id, "error": str(e)},
            )
            return None

    def remove(self, job_id: str) -> bool:
        """Unmark a posting; returns whether it had been marked.

        Raises:
            PersistenceError: If the record cannot be removed
        """
        with self._session_factory() as session:
            return ApplicationRepository(session).unmark_applied(job_id)

    def applied_job_ids(self) -> Set[str]:
        """Ids of postings applied to; empty when storage is unavailable."""
        try:
            with self._session_factory() as session:
                return ApplicationRepository(session).applied_ids()
        except PersistenceError as e:
            logger.warning(
                f"Applied postings unavailable: {e}",
                extra={"event": "tracking.read_failed", "error": str(e)},
            )
            return set()

    def list_applications(self) -> List[ApplicationRecord]:
        with self._session_factory() as session:
            return ApplicationRepository(session).list_all()

    def stats(self) -> ApplicationStats:
        with self._session_factory() as session:
            return ApplicationRepository(session).stats(self._clock())

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker; with ``wait`` queued writes are flushed first."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ApplicationTracker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.shutdown()
        return False
