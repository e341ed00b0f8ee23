"""
Job Status Repository for DynamoDB operations.
Keeps one record per job type; the record doubles as the run lock.
"""
from datetime import datetime, timezone
from typing import Optional
import boto3
from botocore.exceptions import ClientError
from admin_app.core import config
from admin_app.core.exceptions import DynamoDBException
from admin_app.models import job_status
from admin_app.models.job_status import JobStatus


class JobStatusRepository:
    """Repository for job status DynamoDB operations."""

    def __init__(self):
        self.dynamodb = boto3.resource('dynamodb', region_name=config.settings.aws_region)
        self.table = self.dynamodb.Table(config.settings.job_status_table_name)

    def try_acquire(self, status: JobStatus) -> bool:
        """
        Record a new running job unless a job of the same type is already running.
        The check and the write happen in one conditional put. A running job whose
        lease has expired no longer holds the lock.

        Args:
            status: JobStatus for the new job (status must be running)

        Returns:
            True if the record was written, False if another job holds the lock

        Raises:
            DynamoDBException: If the write fails for any other reason
        """
        try:
            self.table.put_item(
                Item=self._to_item(status),
                ConditionExpression=(
                    'attribute_not_exists(job_type) OR #status <> :running OR expires_at < :now'
                ),
                ExpressionAttributeNames={'#status': 'status'},
                ExpressionAttributeValues={':running': job_status.RUNNING, ':now': _to_epoch(datetime.utcnow())}
            )
            return True

        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                return False
            raise DynamoDBException(f"Failed to record job status: {str(e)}") from e

    def get_by_job_type(self, job_type: str) -> Optional[JobStatus]:
        """
        Retrieve the latest job status for a job type.

        Args:
            job_type: Job type name

        Returns:
            JobStatus object or None if no job of this type has run

        Raises:
            DynamoDBException: If query fails
        """
        try:
            response = self.table.get_item(Key={'job_type': job_type}, ConsistentRead=True)

            if 'Item' not in response:
                return None

            return self._item_to_job_status(response['Item'])

        except ClientError as e:
            raise DynamoDBException(f"Failed to get job status: {str(e)}") from e

    def finish(self, job_type: str, job_id: str, status: str, error_message: Optional[str] = None) -> bool:
        """
        Move a job out of the running state.

        Args:
            job_type: Job type name
            job_id: Job that is expected to own the record
            status: Final status (completed or failed)
            error_message: Failure description

        Returns:
            True if updated, False if the record belongs to a different job

        Raises:
            DynamoDBException: If update operation fails
        """
        update_expression = "SET #status = :status, updated_at = :updated_at"
        expression_values = {
            ':status': status,
            ':updated_at': datetime.utcnow().isoformat(),
            ':job_id': job_id
        }
        if error_message:
            update_expression += ", error_message = :error_message"
            expression_values[':error_message'] = error_message

        try:
            self.table.update_item(
                Key={'job_type': job_type},
                UpdateExpression=update_expression,
                ConditionExpression='job_id = :job_id',
                ExpressionAttributeNames={'#status': 'status'},
                ExpressionAttributeValues=expression_values
            )
            return True

        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                return False
            raise DynamoDBException(f"Failed to update job status: {str(e)}") from e

    def _to_item(self, status: JobStatus) -> dict:
        item = {
            'job_type': status.job_type,
            'job_id': status.job_id,
            'status': status.status,
            'ods_instance_id': status.ods_instance_id,
            'started_at': status.started_at.isoformat(),
            'updated_at': status.updated_at.isoformat()
        }
        if status.error_message:
            item['error_message'] = status.error_message
        if status.expires_at:
            item['expires_at'] = _to_epoch(status.expires_at)
        return item

    def _item_to_job_status(self, item: dict) -> JobStatus:
        """Convert DynamoDB item to JobStatus domain model."""
        return JobStatus(
            job_type=item['job_type'],
            job_id=item['job_id'],
            status=item['status'],
            ods_instance_id=int(item['ods_instance_id']),
            started_at=datetime.fromisoformat(item['started_at']),
            updated_at=datetime.fromisoformat(item['updated_at']) if item.get('updated_at') else None,
            error_message=item.get('error_message'),
            expires_at=_from_epoch(item['expires_at']) if item.get('expires_at') is not None else None
        )


def _to_epoch(value: datetime) -> int:
    """Naive UTC datetime to epoch seconds."""
    return int(value.replace(tzinfo=timezone.utc).timestamp())


def _from_epoch(value) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc).replace(tzinfo=None)
