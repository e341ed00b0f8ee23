"""
Job Status domain model.
Represents the state of the latest job of a given type.
"""
from datetime import datetime
from typing import Optional

RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"


class JobStatus:
    """Domain model for job status tracking. One record per job type."""

    def __init__(
        self,
        job_type: str,
        job_id: str,
        status: str,
        ods_instance_id: int,
        started_at: datetime,
        updated_at: Optional[datetime] = None,
        error_message: Optional[str] = None,
        expires_at: Optional[datetime] = None
    ):
        self.job_type = job_type
        self.job_id = job_id
        self.status = status
        self.ods_instance_id = ods_instance_id
        self.started_at = started_at
        self.updated_at = updated_at or started_at
        self.error_message = error_message
        # Lease on the run lock; a running job past this time may be replaced
        self.expires_at = expires_at

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.utcnow())

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING and not self.is_expired()

    def __repr__(self):
        return f"JobStatus(job_type={self.job_type}, job_id={self.job_id}, status={self.status})"
