"""
Tests for ODS instance settings routes.
Covers request parsing, status codes and error mapping with mocked services.
"""
from datetime import datetime
from unittest.mock import Mock
import pytest
from fastapi.testclient import TestClient
from admin_app.core import config
from admin_app.core.dependencies import get_bulk_upload_service, get_job_runner, get_learning_standards_service
from admin_app.core.exceptions import (
    FileTooLargeException,
    JobQueueException,
    MissingCredentialsException,
    MultipleFilesNotSupportedException,
    OdsApiVersionException,
    SecretConfigurationNotFoundException,
    ValidationException
)
from admin_app.main import app
from admin_app.models.dto.ods_instance_settings_dto import (
    BulkFileUploadModel,
    LearningStandardsSyncResponse,
    MessageResponse
)
from admin_app.models.job_status import JobStatus

PREFIX = "/v1/api/ods-instance-settings"
INSTANCE_HEADERS = {"X-Ods-Instance-Id": "1234", "X-Ods-Instance-Name": "Ed_Fi_Ods_1234"}


class TestOdsInstanceSettingsRoutes:
    """Test suite for ODS instance settings routes."""

    @pytest.fixture(autouse=True)
    def setup(self):
        config.settings = config.Settings()
        self.bulk_upload_service = Mock()
        self.learning_standards_service = Mock()
        self.job_runner = Mock()
        app.dependency_overrides[get_bulk_upload_service] = lambda: self.bulk_upload_service
        app.dependency_overrides[get_learning_standards_service] = lambda: self.learning_standards_service
        app.dependency_overrides[get_job_runner] = lambda: self.job_runner
        yield
        app.dependency_overrides.clear()

    @pytest.fixture
    def client(self):
        return TestClient(app, raise_server_exceptions=False)

    def _status_model(self, **overrides):
        values = {
            "cloud_ods_environment": "Production",
            "max_file_size_bytes": 20000000,
            "is_same_ods_instance": True
        }
        values.update(overrides)
        return BulkFileUploadModel(**values)

    def test_health_check(self, client):
        response = client.get("/v1/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["version"] == config.settings.api_version

    def test_bulk_load_form(self, client):
        self.bulk_upload_service.get_bulk_load_form.return_value = self._status_model(
            api_key="key", api_secret="secret", credentials_saved=True
        )

        response = client.get(f"{PREFIX}/bulk-load", headers=INSTANCE_HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["cloud_ods_environment"] == "Production"
        assert data["api_key"] == "key"
        assert data["credentials_saved"] is True
        instance = self.bulk_upload_service.get_bulk_load_form.call_args[0][0]
        assert instance.id == 1234
        assert instance.name == "Ed_Fi_Ods_1234"

    def test_bulk_load_form_uses_default_instance(self, client):
        self.bulk_upload_service.get_bulk_load_form.return_value = self._status_model()

        client.get(f"{PREFIX}/bulk-load")

        instance = self.bulk_upload_service.get_bulk_load_form.call_args[0][0]
        assert instance.id == config.settings.default_ods_instance_id
        assert instance.name == config.settings.default_ods_instance_name

    def test_bulk_load_form_invalid_instance_header(self, client):
        response = client.get(f"{PREFIX}/bulk-load", headers={"X-Ods-Instance-Id": "abc"})

        assert response.status_code == 400
        self.bulk_upload_service.get_bulk_load_form.assert_not_called()

    def test_bulk_load_form_without_secret_configuration(self, client):
        self.bulk_upload_service.get_bulk_load_form.side_effect = SecretConfigurationNotFoundException(
            "ODS secret configuration can not be null."
        )

        response = client.get(f"{PREFIX}/bulk-load")

        assert response.status_code == 400
        assert "ODS secret configuration can not be null" in response.json()["message"]

    def test_bulk_file_upload_without_file(self, client):
        self.bulk_upload_service.bulk_file_upload.return_value = None

        response = client.post(f"{PREFIX}/bulk-file-upload", data={"bulk_file_type": "Student"})

        assert response.status_code == 204
        instance, files, bulk_file_type = self.bulk_upload_service.bulk_file_upload.call_args[0]
        assert files == []
        assert bulk_file_type == "Student"

    def test_bulk_file_upload_blank_file_input(self, client):
        self.bulk_upload_service.bulk_file_upload.return_value = None

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("", b"", "application/octet-stream"))],
            data={"bulk_file_type": "Student"}
        )

        assert response.status_code == 204
        files = self.bulk_upload_service.bulk_file_upload.call_args[0][1]
        assert files == []

    def test_bulk_file_upload_invalid_file_type(self, client):
        self.bulk_upload_service.bulk_file_upload.side_effect = ValidationException(
            "Invalid bulk file type 'Student/../../x'"
        )

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("a.xml", b"<x/>", "application/xml"))],
            data={"bulk_file_type": "Student/../../x"}
        )

        assert response.status_code == 400
        assert "Invalid bulk file type" in response.json()["message"]
        assert self.bulk_upload_service.bulk_file_upload.call_args[0][2] == "Student/../../x"

    def test_bulk_file_upload_single_file(self, client):
        self.bulk_upload_service.bulk_file_upload.return_value = self._status_model(job_id="job-1")
        content = b"<InterchangeStudent/>"

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("test.xml", content, "application/xml"))],
            data={"bulk_file_type": "Student"},
            headers=INSTANCE_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["job_id"] == "job-1"
        assert response.json()["is_job_running"] is False
        instance, files, bulk_file_type = self.bulk_upload_service.bulk_file_upload.call_args[0]
        assert instance.id == 1234
        assert len(files) == 1
        assert files[0].filename == "test.xml"
        assert files[0].length == len(content)

    def test_bulk_file_upload_job_running(self, client):
        self.bulk_upload_service.bulk_file_upload.return_value = self._status_model(is_job_running=True)

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("test.xml", b"<x/>", "application/xml"))]
        )

        assert response.status_code == 200
        assert response.json()["is_job_running"] is True
        assert response.json()["is_same_ods_instance"] is True

    def test_bulk_file_upload_multiple_files(self, client):
        self.bulk_upload_service.bulk_file_upload.side_effect = MultipleFilesNotSupportedException(
            "Currently, the bulk import process only supports a single file at a time."
        )

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[
                ("bulk_files", ("one.xml", b"a" * 200, "application/xml")),
                ("bulk_files", ("two.xml", b"b" * 200, "application/xml"))
            ]
        )

        assert response.status_code == 400
        assert "only supports a single file at a time" in response.json()["message"]
        files = self.bulk_upload_service.bulk_file_upload.call_args[0][1]
        assert [f.length for f in files] == [200, 200]

    def test_bulk_file_upload_too_large(self, client):
        self.bulk_upload_service.bulk_file_upload.side_effect = FileTooLargeException(
            "Upload exceeds maximum limit of 20000000 bytes"
        )

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("big.xml", b"x", "application/xml"))]
        )

        assert response.status_code == 413
        assert "Upload exceeds maximum limit" in response.json()["message"]

    def test_bulk_file_upload_ods_api_unreachable(self, client):
        self.bulk_upload_service.bulk_file_upload.side_effect = OdsApiVersionException("Failed to reach ODS API")

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("test.xml", b"x", "application/xml"))]
        )

        assert response.status_code == 502

    def test_bulk_file_upload_queue_failure(self, client):
        self.bulk_upload_service.bulk_file_upload.side_effect = JobQueueException("Failed to enqueue BulkUploadJob")

        response = client.post(
            f"{PREFIX}/bulk-file-upload",
            files=[("bulk_files", ("test.xml", b"x", "application/xml"))]
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Job Submission Failed"

    def test_save_bulk_load_credentials(self, client):
        self.bulk_upload_service.save_bulk_load_credentials.return_value = MessageResponse(
            message="Credentials successfully saved"
        )

        response = client.post(
            f"{PREFIX}/bulk-load-credentials",
            json={"api_key": " key ", "api_secret": "secret"},
            headers=INSTANCE_HEADERS
        )

        assert response.status_code == 200
        assert "Credentials successfully saved" in response.json()["message"]
        instance, api_key, api_secret = self.bulk_upload_service.save_bulk_load_credentials.call_args[0]
        assert instance.id == 1234
        assert api_key == "key"
        assert api_secret == "secret"

    def test_save_bulk_load_credentials_validation(self, client):
        response = client.post(f"{PREFIX}/bulk-load-credentials", json={"api_key": "", "api_secret": "secret"})

        assert response.status_code == 400
        assert "api_key" in response.json()["errors"]
        self.bulk_upload_service.save_bulk_load_credentials.assert_not_called()

    def test_reset_credentials(self, client):
        self.bulk_upload_service.reset_credentials.return_value = MessageResponse(
            message="Credentials successfully reset"
        )

        response = client.post(f"{PREFIX}/bulk-load-credentials/reset")

        assert response.status_code == 200
        assert "Credentials successfully reset" in response.json()["message"]

    def test_reset_credentials_missing(self, client):
        self.bulk_upload_service.reset_credentials.side_effect = MissingCredentialsException(
            "Missing bulk load credentials"
        )

        response = client.post(f"{PREFIX}/bulk-load-credentials/reset")

        assert response.status_code == 400
        assert "Missing bulk load credentials" in response.json()["message"]

    def test_bulk_load_status_without_jobs(self, client):
        self.job_runner.get_status.return_value = None

        response = client.get(f"{PREFIX}/bulk-load/status")

        assert response.status_code == 200
        assert response.json()["is_job_running"] is False
        assert response.json()["job_type"] == "BulkUploadJob"

    def test_bulk_load_status_running_for_other_instance(self, client):
        self.job_runner.get_status.return_value = JobStatus(
            job_type="BulkUploadJob", job_id="job-1", status="running",
            ods_instance_id=99, started_at=datetime(2024, 1, 1, 12, 0, 0)
        )

        response = client.get(f"{PREFIX}/bulk-load/status", headers=INSTANCE_HEADERS)

        data = response.json()
        assert data["is_job_running"] is True
        assert data["is_same_ods_instance"] is False
        assert data["ods_instance_id"] == 99

    def test_bulk_load_status_expired_lock(self, client):
        self.job_runner.get_status.return_value = JobStatus(
            job_type="BulkUploadJob", job_id="job-1", status="running",
            ods_instance_id=1234, started_at=datetime(2024, 1, 1, 12, 0, 0),
            expires_at=datetime(2024, 1, 1, 16, 0, 0)
        )

        response = client.get(f"{PREFIX}/bulk-load/status", headers=INSTANCE_HEADERS)

        data = response.json()
        assert data["status"] == "running"
        assert data["is_job_running"] is False
        assert data["expires_at"] == "2024-01-01T16:00:00"

    def test_learning_standards(self, client):
        self.learning_standards_service.sync.return_value = LearningStandardsSyncResponse(
            enqueued=True, is_job_running=False, job_id="job-1"
        )

        response = client.post(
            f"{PREFIX}/learning-standards",
            json={"api_key": "key", "api_secret": "secret"},
            headers=INSTANCE_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["enqueued"] is True
        instance, api_key, api_secret = self.learning_standards_service.sync.call_args[0]
        assert instance.id == 1234
        assert (api_key, api_secret) == ("key", "secret")

    def test_learning_standards_status(self, client):
        self.job_runner.get_status.return_value = JobStatus(
            job_type="LearningStandardsJob", job_id="job-2", status="completed",
            ods_instance_id=1234, started_at=datetime(2024, 1, 1, 12, 0, 0)
        )

        response = client.get(f"{PREFIX}/learning-standards/status", headers=INSTANCE_HEADERS)

        data = response.json()
        assert data["job_type"] == "LearningStandardsJob"
        assert data["status"] == "completed"
        assert data["is_same_ods_instance"] is True
