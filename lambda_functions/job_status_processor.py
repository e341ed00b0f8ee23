"""
Lambda function recording background job outcomes.
Triggered by SQS messages the job worker publishes when a job finishes.
"""
import json
import logging
from admin_app.core.exceptions import DynamoDBException
from admin_app.services.job_runner import JobRunner

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def handler(event, context):
    """
    Lambda handler for job completion events.

    Each SQS record body is JSON:
        {"job_type": "BulkUploadJob", "job_id": "...", "status": "completed|failed",
         "error_message": "..."}

    Args:
        event: SQS event containing job completion records
        context: Lambda context object

    Returns:
        dict: Partial batch response listing records to retry
    """
    job_runner = JobRunner()
    failures = []
    updated = 0

    for record in event.get('Records', []):
        message_id = record.get('messageId')
        try:
            body = json.loads(record['body'])
            if job_runner.mark_finished(
                body['job_type'],
                body['job_id'],
                body['status'],
                body.get('error_message')
            ):
                updated += 1
            logger.info("Recorded %s %s as %s", body['job_type'], body['job_id'], body['status'])

        except (KeyError, ValueError) as e:
            # Malformed messages would fail forever; drop them
            logger.error("Discarding malformed job event %s: %s", message_id, str(e))

        except DynamoDBException as e:
            logger.error("Database error recording job event %s: %s", message_id, e.message)
            failures.append({'itemIdentifier': message_id})

    logger.info("Processed %d job event(s), %d status update(s)", len(event.get('Records', [])), updated)
    return {'batchItemFailures': failures}
