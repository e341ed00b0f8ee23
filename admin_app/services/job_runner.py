"""
Job Runner for background jobs.
Submits job contexts to the queue and tracks which job of each type is running.
"""
import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Union
from admin_app.core import config
from admin_app.core.exceptions import JobQueueException
from admin_app.models import job_status
from admin_app.models.job_context import JobContext, JobType
from admin_app.models.job_status import JobStatus
from admin_app.repositories.job_queue_repository import JobQueueRepository
from admin_app.repositories.job_status_repository import JobStatusRepository

logger = logging.getLogger(__name__)


class JobRunner:
    """One job per job type may run at a time."""

    def __init__(
        self,
        job_status_repository: JobStatusRepository = None,
        job_queue_repository: JobQueueRepository = None
    ):
        self.job_status_repository = job_status_repository or JobStatusRepository()
        self.job_queue_repository = job_queue_repository or JobQueueRepository()

    def is_job_running(self, job_type: Union[JobType, str]) -> bool:
        status = self.get_status(job_type)
        return bool(status and status.is_running)

    def is_same_ods_instance(self, ods_instance_id: int, job_type: Union[JobType, str]) -> bool:
        """Whether the latest job of this type targets the given ODS instance."""
        status = self.get_status(job_type)
        return bool(status and status.ods_instance_id == ods_instance_id)

    def get_status(self, job_type: Union[JobType, str]) -> Optional[JobStatus]:
        return self.job_status_repository.get_by_job_type(JobType(job_type).value)

    def enqueue_job(self, context: JobContext) -> Optional[str]:
        """
        Start a job unless one of the same type is already running.

        Args:
            context: Job context to submit

        Returns:
            The new job id, or None if a job of this type is already running

        Raises:
            DynamoDBException: If the job status cannot be recorded
            JobQueueException: If the job cannot be queued
        """
        job_id = str(uuid.uuid4())
        started_at = datetime.utcnow()
        status = JobStatus(
            job_type=context.job_type.value,
            job_id=job_id,
            status=job_status.RUNNING,
            ods_instance_id=context.ods_instance_id,
            started_at=started_at,
            expires_at=started_at + timedelta(seconds=config.settings.job_lock_timeout_seconds)
        )

        # Claim the lock BEFORE queueing so the worker never sees an unrecorded job
        if not self.job_status_repository.try_acquire(status):
            logger.info("%s already running, not enqueueing job for instance %s",
                        context.job_type.value, context.ods_instance_id)
            return None

        try:
            self.job_queue_repository.send(job_id, context)
        except JobQueueException as e:
            self.job_status_repository.finish(status.job_type, job_id, job_status.FAILED, e.message)
            raise

        logger.info("Enqueued %s %s for instance %s", context.job_type.value, job_id, context.ods_instance_id)
        return job_id

    def mark_finished(
        self,
        job_type: Union[JobType, str],
        job_id: str,
        status: str,
        error_message: Optional[str] = None
    ) -> bool:
        """
        Record the outcome reported by the worker and release the lock.

        Returns:
            False if the job no longer owns the status record
        """
        if status not in (job_status.COMPLETED, job_status.FAILED):
            raise ValueError(f"Unsupported final job status: {status}")

        updated = self.job_status_repository.finish(JobType(job_type).value, job_id, status, error_message)
        if not updated:
            logger.warning("Ignoring %s result for stale job %s", job_type, job_id)
        return updated
