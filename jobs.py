"""In-memory job status store polled by the status endpoint."""
import logging
import time
from typing import Callable, Dict, Optional

from models import JobRecord, JobStatus


logger = logging.getLogger(__name__)

FINISHED_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.ERROR})


class JobStore:
    """
    Map of job id to its latest status/message.

    ``set`` overwrites, no history is kept. Finished jobs (completed or error)
    are evicted once they are older than ``retention_seconds``; jobs still in
    flight are never evicted. Expired records are purged on every access.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, retention_seconds: float = 3600.0):
        self.clock = clock
        self.retention_seconds = retention_seconds
        self._jobs: Dict[str, JobRecord] = {}

    def set(self, job_id: str, status: JobStatus, message: str) -> JobRecord:
        self.purge_expired()
        record = JobRecord(job_id=job_id, status=status, message=message, updated_at=self.clock())
        self._jobs[job_id] = record
        return record

    def get(self, job_id: str) -> JobRecord:
        """Current record for job_id, or an ``unknown`` record if there is none."""
        self.purge_expired()
        record = self._jobs.get(job_id)
        if record is None:
            return JobRecord(job_id=job_id, status=JobStatus.UNKNOWN, message="Job not found")
        return record

    def purge_expired(self, now: Optional[float] = None) -> int:
        """Drop finished jobs past the retention window, returning how many were dropped."""
        now = self.clock() if now is None else now
        expired = [
            job_id for job_id, record in self._jobs.items()
            if record.status in FINISHED_STATUSES and now - record.updated_at > self.retention_seconds
        ]
        for job_id in expired:
            del self._jobs[job_id]
        if expired:
            logger.debug("Evicted %d finished jobs", len(expired))
        return len(expired)

    def __contains__(self, job_id: str) -> bool:
        return job_id in self._jobs

    def __len__(self) -> int:
        return len(self._jobs)
