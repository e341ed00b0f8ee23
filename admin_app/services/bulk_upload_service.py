"""
Bulk Upload Service for business logic.
Validates uploads, builds bulk load job contexts and manages bulk load credentials.
"""
import logging
from typing import Optional, Sequence
from admin_app.core import config
from admin_app.core.exceptions import MissingCredentialsException, SecretConfigurationNotFoundException
from admin_app.models.connection_information import CloudOdsEnvironment, OdsApiConnectionInformation
from admin_app.models.dto.ods_instance_settings_dto import BulkFileUploadModel, MessageResponse
from admin_app.models.file_upload import BulkFile, FileUploadResult
from admin_app.models.instance_context import InstanceContext
from admin_app.models.job_context import BulkUploadJobContext, JobType
from admin_app.models.secret_configuration import BulkUploadCredential, OdsSecretConfiguration
from admin_app.repositories.secret_configuration_repository import SecretConfigurationRepository
from admin_app.services.connection_information_service import ApiConnectionInformationProvider
from admin_app.services.file_service import FileService, import_file_name
from admin_app.services.job_runner import JobRunner
from admin_app.services.ods_version_service import (
    InferOdsApiVersion,
    schema_path_for,
    select_max_simultaneous_requests
)

logger = logging.getLogger(__name__)

SECRET_CONFIGURATION_MISSING = "ODS secret configuration can not be null."


def build_bulk_upload_job_context(
    environment: CloudOdsEnvironment,
    upload_result: FileUploadResult,
    instance: InstanceContext,
    connection_information: OdsApiConnectionInformation,
    schema_path: str,
    max_simultaneous_requests: int
) -> BulkUploadJobContext:
    """Compose a bulk upload job context from already resolved values."""
    return BulkUploadJobContext(
        environment=environment.value,
        data_directory_full_path=upload_result.directory,
        ods_instance_id=instance.id,
        api_base_url=connection_information.api_base_url,
        oauth_url=connection_information.oauth_url,
        metadata_url=connection_information.metadata_url,
        dependencies_url=connection_information.dependencies_url,
        client_key=connection_information.client_key,
        client_secret=connection_information.client_secret,
        schema_path=schema_path,
        max_simultaneous_requests=max_simultaneous_requests
    )


class BulkUploadService:
    """Service for bulk load operations on an ODS instance."""

    def __init__(
        self,
        secret_configuration_repository: SecretConfigurationRepository = None,
        file_service: FileService = None,
        connection_information_provider: ApiConnectionInformationProvider = None,
        infer_ods_api_version: InferOdsApiVersion = None,
        job_runner: JobRunner = None
    ):
        self.secret_configuration_repository = secret_configuration_repository or SecretConfigurationRepository()
        self.file_service = file_service or FileService()
        self.connection_information_provider = connection_information_provider or ApiConnectionInformationProvider(
            secret_configuration_repository=self.secret_configuration_repository
        )
        self.infer_ods_api_version = infer_ods_api_version or InferOdsApiVersion()
        self.job_runner = job_runner or JobRunner()

    @property
    def environment(self) -> CloudOdsEnvironment:
        return CloudOdsEnvironment(config.settings.cloud_ods_environment)

    def get_bulk_load_form(self, instance: InstanceContext) -> BulkFileUploadModel:
        """
        Build the bulk load form for an instance.

        Args:
            instance: Current ODS instance

        Returns:
            BulkFileUploadModel with stored credentials and job state

        Raises:
            SecretConfigurationNotFoundException: If the instance has no secret configuration
        """
        secret_configuration = self._get_secret_configuration(instance)
        credential = secret_configuration.bulk_upload_credential

        return BulkFileUploadModel(
            cloud_ods_environment=self.environment.value,
            api_key=credential.api_key if credential else "",
            api_secret=credential.api_secret if credential else "",
            credentials_saved=credential is not None,
            max_file_size_bytes=self.file_service.max_file_size_bytes,
            is_job_running=self.job_runner.is_job_running(JobType.BULK_UPLOAD),
            is_same_ods_instance=self.job_runner.is_same_ods_instance(instance.id, JobType.BULK_UPLOAD)
        )

    def bulk_file_upload(
        self,
        instance: InstanceContext,
        files: Sequence[BulkFile],
        bulk_file_type: Optional[str] = None
    ) -> Optional[BulkFileUploadModel]:
        """
        Handle the bulk file upload workflow.

        Args:
            instance: Current ODS instance
            files: Uploaded files
            bulk_file_type: Interchange type of the file, used to name it on disk

        Returns:
            BulkFileUploadModel with job state, or None when no file was uploaded

        Raises:
            MultipleFilesNotSupportedException: If more than one file was uploaded
            FileTooLargeException: If the file exceeds the maximum size
            ValidationException: If bulk_file_type is not an interchange name
            SecretConfigurationNotFoundException: If the instance has no secret configuration
            OdsApiVersionException: If the ODS API version cannot be determined
            JobQueueException: If the job cannot be queued
        """
        if not self.file_service.validate_bulk_files(files):
            return None

        naming_fn = import_file_name(bulk_file_type)
        self._get_secret_configuration(instance)

        upload_result = self.file_service.save_files_to_upload_directory(files, naming_fn)

        job_id = None
        try:
            connection_information = self.connection_information_provider.get_connection_information_for_environment(
                self.environment, instance
            )

            api_version = self.infer_ods_api_version.version(connection_information.api_server_url)
            data_standard_version = self.infer_ods_api_version.ed_fi_standard_version(
                connection_information.api_server_url
            )

            job_context = build_bulk_upload_job_context(
                environment=self.environment,
                upload_result=upload_result,
                instance=instance,
                connection_information=connection_information,
                schema_path=schema_path_for(data_standard_version),
                max_simultaneous_requests=select_max_simultaneous_requests(api_version)
            )

            job_id = self.job_runner.enqueue_job(job_context)
        finally:
            # Only an enqueued job reads the directory
            if job_id is None:
                self.file_service.remove_upload_directory(upload_result)

        return BulkFileUploadModel(
            cloud_ods_environment=self.environment.value,
            max_file_size_bytes=self.file_service.max_file_size_bytes,
            bulk_file_type=bulk_file_type,
            credentials_saved=bool(connection_information.client_key),
            is_job_running=job_id is None,
            is_same_ods_instance=self.job_runner.is_same_ods_instance(instance.id, JobType.BULK_UPLOAD),
            job_id=job_id
        )

    def save_bulk_load_credentials(self, instance: InstanceContext, api_key: str, api_secret: str) -> MessageResponse:
        """
        Store bulk load credentials for an instance.

        Raises:
            SecretConfigurationNotFoundException: If the instance has no secret configuration
        """
        secret_configuration = self._get_secret_configuration(instance)
        secret_configuration.bulk_upload_credential = BulkUploadCredential(api_key=api_key, api_secret=api_secret)
        self.secret_configuration_repository.set_secret_configuration(instance.id, secret_configuration)

        logger.info("Saved bulk load credentials for instance %s", instance.id)
        return MessageResponse(message="Credentials successfully saved")

    def reset_credentials(self, instance: InstanceContext) -> MessageResponse:
        """
        Clear the stored bulk load credentials for an instance.

        Raises:
            SecretConfigurationNotFoundException: If the instance has no secret configuration
            MissingCredentialsException: If no bulk load credentials are stored
        """
        secret_configuration = self._get_secret_configuration(instance)
        if secret_configuration.bulk_upload_credential is None:
            raise MissingCredentialsException("Missing bulk load credentials")

        secret_configuration.bulk_upload_credential = None
        self.secret_configuration_repository.set_secret_configuration(instance.id, secret_configuration)

        logger.info("Reset bulk load credentials for instance %s", instance.id)
        return MessageResponse(message="Credentials successfully reset")

    def _get_secret_configuration(self, instance: InstanceContext) -> OdsSecretConfiguration:
        secret_configuration = self.secret_configuration_repository.get_secret_configuration(instance.id)
        if secret_configuration is None:
            raise SecretConfigurationNotFoundException(SECRET_CONFIGURATION_MISSING)
        return secret_configuration
