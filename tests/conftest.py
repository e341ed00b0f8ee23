"""
Shared test fixtures and utilities.
"""
import boto3
import pytest
from moto import mock_aws
from admin_app.core import config
from admin_app.core.dependencies import clear_dependency_cache
from admin_app.models.instance_context import InstanceContext
from admin_app.models.secret_configuration import BulkUploadCredential, OdsSecretConfiguration


@pytest.fixture
def aws_env(monkeypatch):
    """Fake AWS credentials and resource names for moto-backed tests."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("JOB_STATUS_TABLE_NAME", "JobStatus-test")
    monkeypatch.setenv("SECRET_PARAMETER_PREFIX", "/ods-admin-app")
    monkeypatch.setenv("ENVIRONMENT", "test")
    config.settings = config.Settings()
    yield
    monkeypatch.undo()
    config.settings = config.Settings()
    clear_dependency_cache()


@pytest.fixture
def instance():
    """ODS instance used across tests."""
    return InstanceContext(id=1234, name="Ed_Fi_Ods_1234")


@pytest.fixture
def secret_configuration():
    """Secret configuration holding bulk load credentials."""
    return OdsSecretConfiguration(
        bulk_upload_credential=BulkUploadCredential(api_key="key", api_secret="secret")
    )


@pytest.fixture
def aws_resources(aws_env, monkeypatch):
    """Moto-backed job status table and job queue."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        table = dynamodb.create_table(
            TableName="JobStatus-test",
            KeySchema=[{"AttributeName": "job_type", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "job_type", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST"
        )

        sqs = boto3.client("sqs", region_name="us-east-1")
        queue_url = sqs.create_queue(QueueName="admin-app-jobs-test")["QueueUrl"]
        monkeypatch.setenv("JOB_QUEUE_URL", queue_url)
        config.settings = config.Settings()

        yield {"table": table, "sqs": sqs, "queue_url": queue_url, "ssm": boto3.client("ssm", region_name="us-east-1")}
