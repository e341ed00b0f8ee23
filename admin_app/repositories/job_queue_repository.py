"""
Job Queue Repository for SQS operations.
Hands job contexts to the external job runner.
"""
import json
import boto3
from botocore.exceptions import ClientError
from admin_app.core import config
from admin_app.core.exceptions import JobQueueException
from admin_app.models.job_context import JobContext


class JobQueueRepository:
    """Repository for SQS job submission."""

    def __init__(self):
        self.sqs_client = boto3.client('sqs', region_name=config.settings.aws_region)
        self.queue_url = config.settings.job_queue_url

    def send(self, job_id: str, context: JobContext) -> str:
        """
        Send a job context to the job queue.

        Args:
            job_id: Identifier of the job being submitted
            context: Job context to run

        Returns:
            SQS message id

        Raises:
            JobQueueException: If the message cannot be sent
        """
        body = {
            'job_id': job_id,
            'job_type': context.job_type.value,
            'context': context.model_dump(mode='json')
        }

        try:
            response = self.sqs_client.send_message(
                QueueUrl=self.queue_url,
                MessageBody=json.dumps(body),
                MessageAttributes={
                    'job_type': {'DataType': 'String', 'StringValue': context.job_type.value}
                }
            )
            return response['MessageId']

        except ClientError as e:
            raise JobQueueException(f"Failed to enqueue {context.job_type.value}: {str(e)}") from e
